"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from recharge_gateway.domain.queries import QueryService
from recharge_gateway.domain.simulator import BillPaymentSimulator, RechargeSimulator
from recharge_gateway.gateway import Gateway


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_gateway(request: Request) -> Gateway:
    """Provide the process-wide gateway built by create_app"""
    return request.app.state.gateway


def get_query_service(request: Request) -> QueryService:
    return get_gateway(request).queries


def get_recharge_simulator(request: Request) -> RechargeSimulator:
    return get_gateway(request).recharge_simulator


def get_billpay_simulator(request: Request) -> BillPaymentSimulator:
    return get_gateway(request).billpay_simulator
