"""Mobile recharge endpoints - operators, recharge, status, history, balance"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from recharge_gateway.api.dependencies import get_query_service, get_recharge_simulator, get_request_id
from recharge_gateway.api.schemas import (
    BalanceRequestBody,
    BalanceResponse,
    OperatorsResponse,
    RechargeHistoryResponse,
    RechargeRequestBody,
    RechargeResponse,
    RechargeTransactionSchema,
)
from recharge_gateway.domain.queries import QueryService
from recharge_gateway.domain.simulator import RechargeSimulator

router = APIRouter()


@router.get("/operators", response_model=OperatorsResponse)
async def list_operators(queries: QueryService = Depends(get_query_service)):
    return OperatorsResponse(
        data=queries.operators(),
        message="Supported mobile operators retrieved successfully",
    )


@router.post("/recharge", response_model=RechargeResponse)
async def submit_recharge(
    request: Request,
    body: Optional[RechargeRequestBody] = Body(None),
    simulator: RechargeSimulator = Depends(get_recharge_simulator),
):
    """
    Submit a mobile recharge.

    The response is held until the simulated operator delay (0.5-2.5s)
    has elapsed. A simulated failure answers 400 with one of
    INSUFFICIENT_BALANCE, NETWORK_ERROR, OPERATOR_DOWN or INVALID_NUMBER
    and is not recorded.
    """
    payload = body.model_dump() if body is not None else {}
    transaction = await simulator.process(payload, request_id=get_request_id(request))
    return RechargeResponse(
        data=RechargeTransactionSchema.model_validate(transaction),
        message="Mobile recharge processed successfully",
    )


@router.get("/recharge/status/{transaction_id}", response_model=RechargeResponse)
async def get_recharge_status(transaction_id: str, queries: QueryService = Depends(get_query_service)):
    transaction = queries.get_recharge(transaction_id)
    return RechargeResponse(
        data=RechargeTransactionSchema.model_validate(transaction),
        message="Mobile recharge transaction details retrieved successfully",
    )


@router.get("/recharge/history", response_model=RechargeHistoryResponse)
async def get_recharge_history(
    limit: Optional[int] = Query(None, description="Page size (default 50)"),
    offset: int = Query(0, description="Records to skip from the oldest"),
    queries: QueryService = Depends(get_query_service),
):
    """
    Page through recharge history.

    Returns:
        Records [offset, offset + limit) of insertion order, most recent first,
        plus the total number of stored recharges
    """
    if limit is None:
        limit = queries.default_limit
    transactions, total = queries.recharge_history(offset=offset, limit=limit)
    return RechargeHistoryResponse(
        data=[RechargeTransactionSchema.model_validate(t) for t in transactions],
        total=total,
        limit=limit,
        offset=offset,
        message="Mobile recharge transaction history retrieved successfully",
    )


@router.post("/balance", response_model=BalanceResponse)
async def check_balance(
    body: Optional[BalanceRequestBody] = Body(None),
    simulator: RechargeSimulator = Depends(get_recharge_simulator),
):
    payload = body.model_dump() if body is not None else {}
    return BalanceResponse(data=simulator.check_balance(payload), message="Balance retrieved successfully")
