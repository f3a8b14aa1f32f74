"""Domain models - pure Python dataclasses representing catalog entries and transactions"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from recharge_gateway.domain.exceptions import InvalidStateTransitionError


STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_FAILED})


class ProcessingTimeClass(str, Enum):
    """How quickly a biller settles a payment; the value is the public label"""

    INSTANT = "Instant"
    DELAYED = "1-2 hours"


@dataclass(frozen=True)
class Operator:
    """Mobile network operator accepting airtime recharges"""

    key: str
    display_name: str
    code: str
    commission_rate_percent: float


@dataclass(frozen=True)
class BillProvider:
    """Utility biller accepting bill payments"""

    id: int
    code: str
    name: str
    category: str  # electricity | water | gas | internet
    min_amount: float
    max_amount: float
    fee_percentage: float
    processing_time_class: ProcessingTimeClass


@dataclass
class RechargeTransaction:
    """Airtime recharge; only ever stored once it has completed"""

    transaction_id: str
    external_transaction_id: str
    phone_number: str
    amount: float
    operator_name: str
    operator_code: str
    package_id: Optional[str]
    status: str
    commission: float
    created_at: datetime
    updated_at: datetime
    processing_time_ms: int


@dataclass
class BillPaymentTransaction:
    """Bill payment, created pending and resolved exactly once"""

    transaction_id: str
    provider_code: str
    provider_name: str
    account_number: str
    customer_name: str
    amount: float
    service_fee: float
    total_amount: float
    customer_phone: Optional[str]
    note: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime
    confirmation_number: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def complete(self, confirmation_number: str, at: datetime) -> None:
        """Transition pending -> completed"""
        self._ensure_pending(STATUS_COMPLETED)
        self.status = STATUS_COMPLETED
        self.confirmation_number = confirmation_number
        self.updated_at = at

    def fail(self, error_message: str, at: datetime) -> None:
        """Transition pending -> failed"""
        self._ensure_pending(STATUS_FAILED)
        self.status = STATUS_FAILED
        self.error_message = error_message
        self.updated_at = at

    def _ensure_pending(self, target: str) -> None:
        if self.status != STATUS_PENDING:
            raise InvalidStateTransitionError(
                f"Bill payment {self.transaction_id} cannot move from {self.status} to {target}"
            )
