"""Service status and connectivity test endpoints"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from recharge_gateway.api.dependencies import get_gateway
from recharge_gateway.api.schemas import ServiceStatusResponse
from recharge_gateway.gateway import Gateway

router = APIRouter()

SERVER_NAME = "Mock Recharge & Bill Payment API Server"


@router.get("/test")
async def api_test(gateway: Gateway = Depends(get_gateway)):
    return {
        "success": True,
        "message": "Mock Recharge & Bill Payment API is running",
        "timestamp": gateway.clock(),
        "server": SERVER_NAME,
        "version": gateway.config.api_version,
    }


@router.post("/test")
async def api_connection_test(
    body: Optional[Dict[str, Any]] = Body(None),
    gateway: Gateway = Depends(get_gateway),
):
    """Echo the posted body back"""
    return {
        "success": True,
        "message": "Mock API connection test successful",
        "timestamp": gateway.clock(),
        "server": SERVER_NAME,
        "version": gateway.config.api_version,
        "test_data": body or {},
    }


@router.get("/status", response_model=ServiceStatusResponse)
async def service_status(gateway: Gateway = Depends(get_gateway)):
    """Uptime, per-store totals and success rates, supported catalog"""
    return ServiceStatusResponse(
        data=gateway.queries.aggregate_status(
            uptime_seconds=gateway.uptime_seconds(),
            api_version=gateway.config.api_version,
            server_time=gateway.clock(),
        ),
        message="API status retrieved successfully",
    )
