"""Unit tests for status lookups, history and aggregate statistics"""

from datetime import datetime, timezone

import pytest

from conftest import FAILURE, SUCCESS
from recharge_gateway.domain.exceptions import InvalidStateTransitionError, NotFoundError, ValidationError
from recharge_gateway.domain.queries import QueryService, format_success_rate

RECHARGE = {"phone_number": "01712345678", "amount": 100, "operator": "robi"}
BILL = {"provider_code": "TITAS", "account_number": "55", "customer_name": "B", "amount": 500}
NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "completed, total, expected",
    [(0, 0, "100%"), (1, 1, "100.00%"), (2, 3, "66.67%"), (0, 4, "0.00%"), (19, 20, "95.00%")],
)
def test_format_success_rate(completed, total, expected):
    assert format_success_rate(completed, total) == expected


def test_unknown_ids_raise_not_found(queries: QueryService):
    with pytest.raises(NotFoundError) as exc_info:
        queries.get_recharge("nope")
    assert exc_info.value.status_code == 404
    assert exc_info.value.error_code == "TRANSACTION_NOT_FOUND"

    with pytest.raises(NotFoundError):
        queries.get_bill_payment("nope")


async def test_history_pagination(queries: QueryService, recharge_simulator, rng):
    created = []
    for _ in range(7):
        rng.queue(0.0, SUCCESS)
        created.append((await recharge_simulator.process(RECHARGE)).transaction_id)

    items, total = queries.recharge_history(offset=1, limit=3)

    assert total == 7
    assert [t.transaction_id for t in items] == list(reversed(created[1:4]))


async def test_history_default_limit(queries: QueryService, recharge_simulator, rng):
    for _ in range(3):
        rng.queue(0.0, SUCCESS)
        await recharge_simulator.process(RECHARGE)

    items, total = queries.recharge_history()

    assert len(items) == 3
    assert total == 3


@pytest.mark.parametrize("offset, limit", [(-1, 10), (0, -5)])
def test_history_rejects_negative_paging(queries: QueryService, offset, limit):
    with pytest.raises(ValidationError) as exc_info:
        queries.recharge_history(offset=offset, limit=limit)
    assert exc_info.value.error_code == "INVALID_PAGINATION"


def test_aggregate_status_empty_stores(queries: QueryService):
    status = queries.aggregate_status(uptime_seconds=12.5, api_version="2.0.0", server_time=NOW)

    assert status["server_status"] == "online"
    assert status["total_recharge_transactions"] == 0
    assert status["total_billpay_transactions"] == 0
    assert status["recharge_success_rate"] == "100%"
    assert status["billpay_success_rate"] == "100%"
    assert status["supported_bill_providers"] == ["DESCO", "WASA", "TITAS", "BTCL"]
    assert "grameenphone" in status["supported_operators"]


async def test_aggregate_status_counts_outcomes(queries: QueryService, recharge_simulator, billpay_simulator, rng, scheduler):
    rng.queue(0.0, SUCCESS)
    await recharge_simulator.process(RECHARGE)

    for outcome in (SUCCESS, FAILURE, SUCCESS, SUCCESS):
        billpay_simulator.submit(BILL)
        rng.queue(outcome)
        scheduler.advance(1)
    # Still pending: counts toward the total but not the completed share
    billpay_simulator.submit(BILL)

    status = queries.aggregate_status(uptime_seconds=1.0, api_version="2.0.0", server_time=NOW)

    assert status["total_recharge_transactions"] == 1
    assert status["recharge_success_rate"] == "100.00%"
    assert status["total_billpay_transactions"] == 5
    assert status["billpay_success_rate"] == "60.00%"


def test_bill_payment_state_machine(billpay_simulator):
    transaction = billpay_simulator.submit(BILL)
    transaction.fail("boom", at=NOW)

    assert transaction.is_terminal
    with pytest.raises(InvalidStateTransitionError):
        transaction.complete("TITAS1", at=NOW)
    with pytest.raises(InvalidStateTransitionError):
        transaction.fail("again", at=NOW)
    assert transaction.status == "failed"
    assert transaction.error_message == "boom"
