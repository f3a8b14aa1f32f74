"""In-memory data access layer for recharge and bill payment transactions"""

from typing import Dict, Generic, List, Optional, TypeVar

from recharge_gateway.domain.models import (
    STATUS_COMPLETED,
    BillPaymentTransaction,
    RechargeTransaction,
)


T = TypeVar("T", RechargeTransaction, BillPaymentTransaction)


class TransactionStore(Generic[T]):
    """
    Append-only, id-indexed collection of transactions.

    Insertion order is kept for history queries; records are never removed.
    """

    def __init__(self) -> None:
        self._by_id: Dict[str, T] = {}
        self._order: List[str] = []

    def add(self, transaction: T) -> T:
        if transaction.transaction_id in self._by_id:
            raise ValueError(f"Duplicate transaction id {transaction.transaction_id}")
        self._by_id[transaction.transaction_id] = transaction
        self._order.append(transaction.transaction_id)
        return transaction

    def get(self, transaction_id: str) -> Optional[T]:
        return self._by_id.get(transaction_id)

    def count(self) -> int:
        return len(self._order)

    def count_by_status(self, status: str) -> int:
        return sum(1 for t in self._by_id.values() if t.status == status)

    def slice(self, offset: int, limit: int) -> List[T]:
        """Records [offset, offset + limit) in insertion order"""
        return [self._by_id[tid] for tid in self._order[offset:offset + limit]]


class RechargeRepository:
    """Repository for completed mobile recharges"""

    def __init__(self, store: Optional[TransactionStore[RechargeTransaction]] = None):
        self.store = store or TransactionStore()

    def create_recharge(self, transaction: RechargeTransaction) -> RechargeTransaction:
        return self.store.add(transaction)

    def get_recharge(self, transaction_id: str) -> Optional[RechargeTransaction]:
        return self.store.get(transaction_id)

    def get_history(self, offset: int = 0, limit: int = 50) -> List[RechargeTransaction]:
        """Window [offset, offset + limit) of insertion order, most recent first"""
        return list(reversed(self.store.slice(offset, limit)))

    def total(self) -> int:
        return self.store.count()

    def completed_count(self) -> int:
        return self.store.count_by_status(STATUS_COMPLETED)


class BillPaymentRepository:
    """Repository for bill payments"""

    def __init__(self, store: Optional[TransactionStore[BillPaymentTransaction]] = None):
        self.store = store or TransactionStore()

    def create_payment(self, transaction: BillPaymentTransaction) -> BillPaymentTransaction:
        return self.store.add(transaction)

    def get_payment(self, transaction_id: str) -> Optional[BillPaymentTransaction]:
        return self.store.get(transaction_id)

    def total(self) -> int:
        return self.store.count()

    def completed_count(self) -> int:
        return self.store.count_by_status(STATUS_COMPLETED)
