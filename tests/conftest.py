"""Pytest fixtures for testing"""

import random
from datetime import datetime, timedelta, timezone
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from recharge_gateway.api.main import create_app
from recharge_gateway.config import Settings
from recharge_gateway.domain.catalog import Catalog
from recharge_gateway.domain.queries import QueryService
from recharge_gateway.domain.simulator import BillPaymentSimulator, RechargeSimulator
from recharge_gateway.gateway import Gateway
from recharge_gateway.infrastructure.scheduling import ManualScheduler
from recharge_gateway.infrastructure.storage.repositories import BillPaymentRepository, RechargeRepository


# Draws that force an outcome against the default 0.95 success rates
SUCCESS = 0.1
FAILURE = 0.99


class ScriptedRandom(random.Random):
    """Random source whose random() replays queued values before falling back to the seeded stream"""

    def __init__(self, values: Iterable[float] = (), seed: int = 1234):
        super().__init__(seed)
        self.values = list(values)

    def queue(self, *values: float) -> None:
        self.values.extend(values)

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return super().random()

    # Keep randrange/randint on getrandbits so they never consume scripted values
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


class FakeClock:
    """Clock that advances one second per reading"""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def config() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def recharge_repo() -> RechargeRepository:
    return RechargeRepository()


@pytest.fixture
def billpay_repo() -> BillPaymentRepository:
    return BillPaymentRepository()


@pytest.fixture
def recharge_simulator(catalog, recharge_repo, scheduler, rng, clock, config) -> RechargeSimulator:
    return RechargeSimulator(catalog, recharge_repo, scheduler, rng, clock=clock, config=config)


@pytest.fixture
def billpay_simulator(catalog, billpay_repo, scheduler, rng, clock, config) -> BillPaymentSimulator:
    return BillPaymentSimulator(catalog, billpay_repo, scheduler, rng, clock=clock, config=config)


@pytest.fixture
def queries(catalog, recharge_repo, billpay_repo) -> QueryService:
    return QueryService(catalog, recharge_repo, billpay_repo)


@pytest.fixture
def app(config, scheduler, rng, clock):
    """FastAPI app on a virtual clock and scripted random source"""
    return create_app(config=config, scheduler=scheduler, rng=rng, clock=clock)


@pytest.fixture
def gateway(app) -> Gateway:
    return app.state.gateway


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client"""
    return TestClient(app)
