"""Bill payment endpoints - providers, submit, status, account verification"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from recharge_gateway.api.dependencies import get_billpay_simulator, get_query_service, get_request_id
from recharge_gateway.api.schemas import (
    AccountVerificationBody,
    AccountVerificationResponse,
    BillPaymentRequestBody,
    BillPaymentResponse,
    BillPaymentTransactionSchema,
    BillProvidersResponse,
)
from recharge_gateway.domain.queries import QueryService
from recharge_gateway.domain.simulator import BillPaymentSimulator

router = APIRouter()


@router.get("/billpay/providers", response_model=BillProvidersResponse)
async def list_providers(queries: QueryService = Depends(get_query_service)):
    return BillProvidersResponse(data=queries.bill_providers())


@router.post("/billpay", response_model=BillPaymentResponse)
async def submit_bill_payment(
    request: Request,
    body: Optional[BillPaymentRequestBody] = Body(None),
    simulator: BillPaymentSimulator = Depends(get_billpay_simulator),
):
    """
    Submit a bill payment.

    Answers immediately with the pending record; the outcome is settled
    1s (instant providers) or 5s later and visible via the status endpoint.
    """
    payload = body.model_dump() if body is not None else {}
    transaction = simulator.submit(payload, request_id=get_request_id(request))
    # Snapshot now: the stored record is mutated in place on resolution
    return BillPaymentResponse(
        data=BillPaymentTransactionSchema.model_validate(transaction),
        message="Bill payment request submitted successfully",
    )


@router.get("/billpay/status/{transaction_id}", response_model=BillPaymentResponse)
async def get_bill_payment_status(transaction_id: str, queries: QueryService = Depends(get_query_service)):
    transaction = queries.get_bill_payment(transaction_id)
    return BillPaymentResponse(data=BillPaymentTransactionSchema.model_validate(transaction))


@router.post("/billpay/verify", response_model=AccountVerificationResponse)
async def verify_account(
    body: Optional[AccountVerificationBody] = Body(None),
    simulator: BillPaymentSimulator = Depends(get_billpay_simulator),
):
    payload = body.model_dump() if body is not None else {}
    return AccountVerificationResponse(
        data=simulator.verify_account(payload),
        message="Account verified successfully",
    )
