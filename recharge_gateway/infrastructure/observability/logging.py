"""Structured JSON logging for transaction simulation"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from recharge_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_recharge(
    request_id: Optional[str],
    phone_number: str,
    operator_code: str,
    amount: float,
    outcome: str,
    delay_ms: int,
    transaction_id: Optional[str] = None,
) -> None:
    """Log recharge outcome (completed or simulated error code)"""
    logging.info(
        "Recharge processed",
        extra={
            "request_id": request_id,
            "step": "recharge_complete",
            "transaction_id": transaction_id,
            "phone_number": phone_number,
            "operator_code": operator_code,
            "amount": amount,
            "outcome": outcome,
            "duration_ms": delay_ms,
        },
    )


def log_bill_payment_submitted(request_id: Optional[str], transaction_id: str, provider_code: str, total_amount: float) -> None:
    logging.info(
        "Bill payment accepted",
        extra={
            "request_id": request_id,
            "step": "billpay_submitted",
            "transaction_id": transaction_id,
            "provider_code": provider_code,
            "total_amount": total_amount,
        },
    )


def log_bill_payment_resolved(transaction_id: str, status: str, provider_code: str) -> None:
    logging.info(
        "Bill payment resolved",
        extra={
            "step": "billpay_resolved",
            "transaction_id": transaction_id,
            "provider_code": provider_code,
            "status": status,
        },
    )
