"""Unit tests for recharge and bill payment simulation"""

import pytest

from conftest import FAILURE, SUCCESS
from recharge_gateway.domain.exceptions import SimulatedFailure, ValidationError
from recharge_gateway.domain.simulator import (
    BILL_PAYMENT_FAILURE_MESSAGE,
    RECHARGE_FAILURES,
    BillPaymentSimulator,
    RechargeSimulator,
)

RECHARGE = {"phone_number": "01712345678", "amount": 100, "operator": "grameenphone"}
BILL = {"provider_code": "DESCO", "account_number": "123", "customer_name": "A", "amount": 1000}


async def test_recharge_success_is_stored_completed(recharge_simulator: RechargeSimulator, rng, scheduler, recharge_repo):
    rng.queue(0.5, SUCCESS)

    transaction = await recharge_simulator.process(RECHARGE)

    assert transaction.status == "completed"
    assert transaction.commission == pytest.approx(2.5)
    assert transaction.operator_name == "Grameenphone"
    assert transaction.operator_code == "GP"
    assert transaction.processing_time_ms == 1500
    assert transaction.external_transaction_id.startswith("EXT")
    assert transaction.created_at == transaction.updated_at
    assert recharge_repo.get_recharge(transaction.transaction_id) is transaction
    assert scheduler.slept == [1.5]


async def test_recharge_delay_bounds(recharge_simulator: RechargeSimulator, rng):
    rng.queue(0.0, 0.999999)
    assert recharge_simulator.draw_delay_ms() == 500
    assert 2499 < recharge_simulator.draw_delay_ms() < 2500


async def test_recharge_failure_is_not_stored(recharge_simulator: RechargeSimulator, rng, scheduler, recharge_repo):
    rng.queue(0.0, FAILURE)

    with pytest.raises(SimulatedFailure) as exc_info:
        await recharge_simulator.process(RECHARGE)

    failure = exc_info.value
    assert (failure.error_code, failure.message) in RECHARGE_FAILURES
    assert failure.transaction_reference.startswith("REF")
    assert failure.status_code == 400
    assert recharge_repo.total() == 0
    # The caller still waited out the delay before learning the outcome
    assert scheduler.slept == [0.5]


async def test_recharge_failure_codes_are_drawn_from_all_four(recharge_simulator: RechargeSimulator, rng):
    seen = set()
    for _ in range(200):
        rng.queue(0.0, FAILURE)
        with pytest.raises(SimulatedFailure) as exc_info:
            await recharge_simulator.process(RECHARGE)
        seen.add(exc_info.value.error_code)

    assert seen == {code for code, _ in RECHARGE_FAILURES}


async def test_recharge_validation_happens_before_delay(recharge_simulator: RechargeSimulator, scheduler):
    with pytest.raises(ValidationError):
        await recharge_simulator.process({**RECHARGE, "phone_number": "123"})
    assert scheduler.slept == []


def test_check_balance_within_bounds(recharge_simulator: RechargeSimulator):
    for _ in range(50):
        data = recharge_simulator.check_balance({"phone_number": "01712345678", "operator": "ROBI"})
        assert 10 <= data["balance"] <= 1009
        assert data["operator"] == "Robi"
        assert data["currency"] == "BDT"


def test_check_balance_unknown_operator_echoed(recharge_simulator: RechargeSimulator):
    data = recharge_simulator.check_balance({"phone_number": "01712345678", "operator": "Vodafone"})
    assert data["operator"] == "Vodafone"


def test_bill_payment_stored_pending(billpay_simulator: BillPaymentSimulator, billpay_repo, scheduler):
    transaction = billpay_simulator.submit(BILL)

    assert transaction.status == "pending"
    assert transaction.service_fee == 15
    assert transaction.total_amount == 1015
    assert transaction.confirmation_number is None
    assert billpay_repo.get_payment(transaction.transaction_id) is transaction
    assert scheduler.pending == 1


def test_bill_payment_resolves_after_instant_delay(billpay_simulator: BillPaymentSimulator, rng, scheduler):
    transaction = billpay_simulator.submit(BILL)
    created_at = transaction.created_at
    rng.queue(SUCCESS)

    scheduler.advance(0.5)
    assert transaction.status == "pending"

    scheduler.advance(0.5)
    assert transaction.status == "completed"
    assert transaction.confirmation_number.startswith("DESCO")
    assert transaction.error_message is None
    assert transaction.updated_at > created_at
    assert billpay_simulator.scheduled == {}


def test_bill_payment_failure_is_stored_failed(billpay_simulator: BillPaymentSimulator, rng, scheduler):
    transaction = billpay_simulator.submit(BILL)
    rng.queue(FAILURE)

    scheduler.advance(1)

    assert transaction.status == "failed"
    assert transaction.error_message == BILL_PAYMENT_FAILURE_MESSAGE
    assert transaction.confirmation_number is None


def test_delayed_provider_waits_five_seconds(billpay_simulator: BillPaymentSimulator, scheduler):
    transaction = billpay_simulator.submit({**BILL, "provider_code": "WASA"})

    scheduler.advance(4)
    assert transaction.status == "pending"

    scheduler.advance(1)
    assert transaction.status in ("completed", "failed")


def test_resolution_happens_exactly_once(billpay_simulator: BillPaymentSimulator, rng, scheduler):
    transaction = billpay_simulator.submit(BILL)
    rng.queue(SUCCESS)
    scheduler.advance(1)
    snapshot = (transaction.status, transaction.confirmation_number, transaction.updated_at)

    rng.queue(FAILURE)
    billpay_simulator.resolve(transaction.transaction_id)

    assert (transaction.status, transaction.confirmation_number, transaction.updated_at) == snapshot


def test_resolution_of_unknown_transaction_is_noop(billpay_simulator: BillPaymentSimulator):
    billpay_simulator.resolve("does-not-exist")


def test_scheduled_resolution_can_be_cancelled(billpay_simulator: BillPaymentSimulator, scheduler):
    transaction = billpay_simulator.submit(BILL)
    billpay_simulator.scheduled[transaction.transaction_id].cancel()

    scheduler.advance(10)

    assert transaction.status == "pending"


def test_verify_account(billpay_simulator: BillPaymentSimulator):
    data = billpay_simulator.verify_account({"provider_code": "TITAS", "account_number": 42})

    assert data["provider_name"] == "TITAS"
    assert data["account_number"] == "42"
    assert data["account_status"] == "active"
    assert data["customer_name"] is None
