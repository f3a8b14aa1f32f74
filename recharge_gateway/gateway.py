"""Process-lifetime container wiring catalog, stores, simulators and queries"""

import random
import time
from typing import Optional

from recharge_gateway.config import Settings, settings as default_settings
from recharge_gateway.domain.catalog import Catalog
from recharge_gateway.domain.queries import QueryService
from recharge_gateway.domain.simulator import BillPaymentSimulator, Clock, RechargeSimulator
from recharge_gateway.infrastructure.scheduling import AsyncioScheduler, Scheduler
from recharge_gateway.infrastructure.storage.repositories import BillPaymentRepository, RechargeRepository
from recharge_gateway.utils.date_utils import utc_now


class Gateway:
    """Owns every in-memory store; constructed once at startup, never torn down"""

    def __init__(
        self,
        config: Optional[Settings] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
    ):
        self.config = config or default_settings
        self.scheduler = scheduler or AsyncioScheduler()
        self.rng = rng or random.Random(self.config.random_seed)
        self.clock = clock
        self.started_at = time.monotonic()

        self.catalog = Catalog()
        self.recharges = RechargeRepository()
        self.bill_payments = BillPaymentRepository()

        self.recharge_simulator = RechargeSimulator(
            self.catalog, self.recharges, self.scheduler, self.rng, clock=clock, config=self.config
        )
        self.billpay_simulator = BillPaymentSimulator(
            self.catalog, self.bill_payments, self.scheduler, self.rng, clock=clock, config=self.config
        )
        self.queries = QueryService(
            self.catalog,
            self.recharges,
            self.bill_payments,
            default_limit=self.config.history_default_limit,
        )

    def uptime_seconds(self) -> float:
        return time.monotonic() - self.started_at
