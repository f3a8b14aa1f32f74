"""FastAPI application factory"""

import random
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from recharge_gateway.api.exception_handlers import (
    domain_exception_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from recharge_gateway.api.middleware import MetricsMiddleware, RequestIDMiddleware, RequestLoggingMiddleware
from recharge_gateway.api.routes import billpay, recharge, system
from recharge_gateway.config import Settings, settings
from recharge_gateway.domain.exceptions import DomainException
from recharge_gateway.domain.simulator import Clock
from recharge_gateway.gateway import Gateway
from recharge_gateway.infrastructure.observability.logging import setup_logging
from recharge_gateway.infrastructure.scheduling import Scheduler
from recharge_gateway.utils.date_utils import utc_now

# Setup structured logging
setup_logging(settings.log_level)

ENDPOINT_INDEX = {
    "mobile_recharge": {
        "GET /api/operators": "Get supported mobile operators",
        "POST /api/recharge": "Submit mobile recharge request",
        "GET /api/recharge/status/:transactionId": "Check recharge status",
        "GET /api/recharge/history": "Get recharge transaction history",
        "POST /api/balance": "Check mobile balance",
    },
    "bill_payment": {
        "GET /api/billpay/providers": "Get available bill providers",
        "POST /api/billpay": "Submit bill payment request",
        "GET /api/billpay/status/:transactionId": "Check bill payment status",
        "POST /api/billpay/verify": "Verify account information",
    },
    "general": {
        "GET /api/test": "API health check",
        "GET /api/status": "API status and statistics",
        "GET /health": "Server health check",
        "GET /metrics": "Prometheus metrics",
    },
}


def create_app(
    config: Optional[Settings] = None,
    scheduler: Optional[Scheduler] = None,
    rng: Optional[random.Random] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Create and configure FastAPI application with a fresh in-memory gateway"""
    config = config or settings
    gateway = Gateway(config=config, scheduler=scheduler, rng=rng, clock=clock)

    app = FastAPI(
        title="Mock Recharge & Bill Payment API",
        description="Simulated mobile recharge and utility bill payment gateway",
        version=config.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.gateway = gateway

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    async def index():
        return {
            "message": "Comprehensive Mock Recharge & Bill Payment API",
            "version": config.api_version,
            "endpoints": ENDPOINT_INDEX,
        }

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": gateway.clock(),
            "uptime": gateway.uptime_seconds(),
            "version": config.api_version,
            "service": config.service_name,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(recharge.router, prefix="/api", tags=["mobile recharge"])
    app.include_router(billpay.router, prefix="/api", tags=["bill payment"])
    app.include_router(system.router, prefix="/api", tags=["status"])

    return app


def run() -> None:
    """Serve the API with uvicorn on the configured host and port"""
    import uvicorn

    uvicorn.run("recharge_gateway.api.main:app", host=settings.host, port=settings.port, log_config=None)


app = create_app()


if __name__ == "__main__":
    run()
