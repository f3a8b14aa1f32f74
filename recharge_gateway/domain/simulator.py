"""Transaction simulation - randomized latency and outcomes for recharges and bill payments"""

import logging
import random
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from recharge_gateway.config import Settings, settings as default_settings
from recharge_gateway.domain.catalog import Catalog
from recharge_gateway.domain.exceptions import InvalidStateTransitionError, SimulatedFailure
from recharge_gateway.domain.fees import calculate_bill_charges, calculate_commission
from recharge_gateway.domain.models import (
    STATUS_COMPLETED,
    STATUS_PENDING,
    BillPaymentTransaction,
    BillProvider,
    ProcessingTimeClass,
    RechargeTransaction,
)
from recharge_gateway.domain.validation import (
    validate_account_verification,
    validate_balance_request,
    validate_bill_payment_request,
    validate_recharge_request,
)
from recharge_gateway.infrastructure.observability.logging import (
    log_bill_payment_resolved,
    log_bill_payment_submitted,
    log_recharge,
)
from recharge_gateway.infrastructure.observability.metrics import (
    billpay_resolved_counter,
    billpay_submitted_counter,
    record_recharge,
)
from recharge_gateway.infrastructure.scheduling import ScheduledTask, Scheduler
from recharge_gateway.infrastructure.storage.repositories import BillPaymentRepository, RechargeRepository
from recharge_gateway.utils.date_utils import epoch_millis, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# (error_code, message) pairs drawn uniformly on a simulated recharge failure
RECHARGE_FAILURES: Tuple[Tuple[str, str], ...] = (
    ("INSUFFICIENT_BALANCE", "Insufficient balance in operator account"),
    ("NETWORK_ERROR", "Network connectivity issue with operator"),
    ("OPERATOR_DOWN", "Operator service temporarily unavailable"),
    ("INVALID_NUMBER", "Phone number not found in operator network"),
)

BILL_PAYMENT_FAILURE_MESSAGE = "Payment processing failed. Please try again."


class RechargeSimulator:
    """
    Mobile recharge processing.

    The outcome is drawn after the simulated operator delay, and the caller
    waits for it. Only successful recharges are stored.
    """

    def __init__(
        self,
        catalog: Catalog,
        repository: RechargeRepository,
        scheduler: Scheduler,
        rng: random.Random,
        clock: Clock = utc_now,
        config: Settings = default_settings,
    ):
        self.catalog = catalog
        self.repository = repository
        self.scheduler = scheduler
        self.rng = rng
        self.clock = clock
        self.config = config

    def draw_delay_ms(self) -> float:
        """Uniform over [recharge_min_delay_ms, recharge_max_delay_ms)"""
        low = self.config.recharge_min_delay_ms
        high = self.config.recharge_max_delay_ms
        return low + self.rng.random() * (high - low)

    async def process(self, payload: Mapping[str, Any], request_id: Optional[str] = None) -> RechargeTransaction:
        """
        Validate, wait out the simulated delay, then complete or fail the recharge.

        Raises:
            ValidationError: request rejected before any delay
            SimulatedFailure: operator-side failure; nothing is stored
        """
        request = validate_recharge_request(
            payload,
            self.catalog,
            min_amount=self.config.recharge_min_amount,
            max_amount=self.config.recharge_max_amount,
        )
        operator = request.operator

        delay_ms = self.draw_delay_ms()
        await self.scheduler.sleep(delay_ms / 1000)

        now = self.clock()
        if self.rng.random() >= self.config.recharge_success_rate:
            error_code, message = RECHARGE_FAILURES[self.rng.randrange(len(RECHARGE_FAILURES))]
            record_recharge(operator.code, error_code, delay_ms / 1000)
            log_recharge(request_id, request.phone_number, operator.code, request.amount, error_code, round(delay_ms))
            raise SimulatedFailure(message, error_code, transaction_reference=f"REF{epoch_millis(now)}")

        transaction = RechargeTransaction(
            transaction_id=str(uuid.uuid4()),
            external_transaction_id=f"EXT{epoch_millis(now)}",
            phone_number=request.phone_number,
            amount=request.amount,
            operator_name=operator.display_name,
            operator_code=operator.code,
            package_id=request.package_id,
            status=STATUS_COMPLETED,
            commission=calculate_commission(request.amount, operator),
            created_at=now,
            updated_at=now,
            processing_time_ms=round(delay_ms),
        )
        self.repository.create_recharge(transaction)

        record_recharge(operator.code, STATUS_COMPLETED, delay_ms / 1000)
        log_recharge(
            request_id,
            request.phone_number,
            operator.code,
            request.amount,
            STATUS_COMPLETED,
            transaction.processing_time_ms,
            transaction_id=transaction.transaction_id,
        )
        return transaction

    def check_balance(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Synthetic airtime balance; unknown operators are echoed back as given"""
        request = validate_balance_request(payload)
        operator = self.catalog.get_operator(request.operator_key)
        return {
            "phone_number": request.phone_number,
            "operator": operator.display_name if operator else request.operator_key,
            "balance": self.rng.randint(self.config.balance_min, self.config.balance_max),
            "currency": "BDT",
            "last_updated": self.clock(),
        }


class BillPaymentSimulator:
    """
    Bill payment processing.

    Payments are stored pending and acknowledged at once; a scheduled
    resolution moves each one to completed or failed after the provider's
    processing delay.
    """

    def __init__(
        self,
        catalog: Catalog,
        repository: BillPaymentRepository,
        scheduler: Scheduler,
        rng: random.Random,
        clock: Clock = utc_now,
        config: Settings = default_settings,
    ):
        self.catalog = catalog
        self.repository = repository
        self.scheduler = scheduler
        self.rng = rng
        self.clock = clock
        self.config = config
        self.scheduled: Dict[str, ScheduledTask] = {}

    def resolution_delay_seconds(self, provider: BillProvider) -> float:
        if provider.processing_time_class is ProcessingTimeClass.INSTANT:
            return self.config.billpay_instant_delay_ms / 1000
        return self.config.billpay_delayed_delay_ms / 1000

    def submit(self, payload: Mapping[str, Any], request_id: Optional[str] = None) -> BillPaymentTransaction:
        """Validate, store as pending and schedule resolution"""
        request = validate_bill_payment_request(payload, self.catalog)
        provider = request.provider
        service_fee, total_amount = calculate_bill_charges(request.amount, provider)

        now = self.clock()
        transaction = BillPaymentTransaction(
            transaction_id=str(uuid.uuid4()),
            provider_code=provider.code,
            provider_name=provider.name,
            account_number=request.account_number,
            customer_name=request.customer_name,
            amount=request.amount,
            service_fee=service_fee,
            total_amount=total_amount,
            customer_phone=request.customer_phone,
            note=request.note,
            status=STATUS_PENDING,
            created_at=now,
            updated_at=now,
        )
        self.repository.create_payment(transaction)

        self.scheduled[transaction.transaction_id] = self.scheduler.call_later(
            self.resolution_delay_seconds(provider),
            self.resolve,
            transaction.transaction_id,
        )

        billpay_submitted_counter.labels(provider=provider.code).inc()
        log_bill_payment_submitted(request_id, transaction.transaction_id, provider.code, total_amount)
        return transaction

    def resolve(self, transaction_id: str) -> None:
        """Scheduled callback: draw the outcome of a pending payment"""
        self.scheduled.pop(transaction_id, None)
        transaction = self.repository.get_payment(transaction_id)
        if transaction is None:
            logger.warning("Resolution for unknown bill payment", extra={"transaction_id": transaction_id})
            return

        now = self.clock()
        try:
            if self.rng.random() < self.config.billpay_success_rate:
                transaction.complete(f"{transaction.provider_code}{epoch_millis(now)}", at=now)
            else:
                transaction.fail(BILL_PAYMENT_FAILURE_MESSAGE, at=now)
        except InvalidStateTransitionError as e:
            logger.warning(f"Ignoring duplicate resolution: {e}", extra={"transaction_id": transaction_id})
            return

        billpay_resolved_counter.labels(provider=transaction.provider_code, status=transaction.status).inc()
        log_bill_payment_resolved(transaction_id, transaction.status, transaction.provider_code)

    def verify_account(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Confirm an account number is addressable at a known provider"""
        provider = validate_account_verification(payload, self.catalog)
        return {
            "provider_code": provider.code,
            "provider_name": provider.name,
            "account_number": str(payload["account_number"]),
            "customer_name": str(payload["customer_name"]) if payload.get("customer_name") else None,
            "account_status": "active",
            "min_amount": provider.min_amount,
            "max_amount": provider.max_amount,
        }
