"""Unit tests for the in-memory transaction stores"""

from datetime import datetime, timezone

import pytest

from recharge_gateway.domain.models import RechargeTransaction
from recharge_gateway.infrastructure.storage.repositories import RechargeRepository, TransactionStore


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_recharge(n: int, status: str = "completed") -> RechargeTransaction:
    return RechargeTransaction(
        transaction_id=f"tx_{n}",
        external_transaction_id=f"EXT{n}",
        phone_number="01712345678",
        amount=100,
        operator_name="Grameenphone",
        operator_code="GP",
        package_id=None,
        status=status,
        commission=2.5,
        created_at=NOW,
        updated_at=NOW,
        processing_time_ms=1000,
    )


@pytest.fixture
def filled_repo() -> RechargeRepository:
    repo = RechargeRepository()
    for n in range(10):
        repo.create_recharge(make_recharge(n))
    return repo


def test_store_get_by_id():
    store = TransactionStore()
    txn = store.add(make_recharge(1))

    assert store.get("tx_1") is txn
    assert store.get("missing") is None


def test_store_rejects_duplicate_ids():
    store = TransactionStore()
    store.add(make_recharge(1))

    with pytest.raises(ValueError):
        store.add(make_recharge(1))


def test_history_defaults_return_everything_most_recent_first(filled_repo: RechargeRepository):
    history = filled_repo.get_history()
    assert [t.transaction_id for t in history] == [f"tx_{n}" for n in reversed(range(10))]


def test_history_window_is_reversed_slice(filled_repo: RechargeRepository):
    """offset counts from the oldest record; the window itself is reversed"""
    history = filled_repo.get_history(offset=2, limit=3)
    assert [t.transaction_id for t in history] == ["tx_4", "tx_3", "tx_2"]


def test_history_past_end_is_empty(filled_repo: RechargeRepository):
    assert filled_repo.get_history(offset=10, limit=5) == []
    assert filled_repo.total() == 10


def test_completed_count(filled_repo: RechargeRepository):
    filled_repo.create_recharge(make_recharge(99, status="failed"))

    assert filled_repo.total() == 11
    assert filled_repo.completed_count() == 10
