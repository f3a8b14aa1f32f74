"""Read-side queries over transaction stores and the catalog"""

from datetime import datetime
from typing import Any, Dict, List, Tuple

from recharge_gateway.domain.catalog import Catalog
from recharge_gateway.domain.exceptions import NotFoundError, ValidationError
from recharge_gateway.domain.models import BillPaymentTransaction, RechargeTransaction
from recharge_gateway.infrastructure.storage.repositories import BillPaymentRepository, RechargeRepository


def format_success_rate(completed: int, total: int) -> str:
    """Percentage of completed transactions, "100%" for an empty store"""
    if total == 0:
        return "100%"
    return f"{completed / total * 100:.2f}%"


class QueryService:
    """Status lookups, recharge history and aggregate statistics"""

    def __init__(
        self,
        catalog: Catalog,
        recharges: RechargeRepository,
        bill_payments: BillPaymentRepository,
        default_limit: int = 50,
    ):
        self.catalog = catalog
        self.recharges = recharges
        self.bill_payments = bill_payments
        self.default_limit = default_limit

    def get_recharge(self, transaction_id: str) -> RechargeTransaction:
        transaction = self.recharges.get_recharge(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    def get_bill_payment(self, transaction_id: str) -> BillPaymentTransaction:
        transaction = self.bill_payments.get_payment(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    def recharge_history(self, offset: int = 0, limit: int | None = None) -> Tuple[List[RechargeTransaction], int]:
        """
        Page of recharge history.

        Takes records [offset, offset + limit) in insertion order and returns
        them most recent first, with the full store size as total.
        """
        if limit is None:
            limit = self.default_limit
        if offset < 0 or limit < 0:
            raise ValidationError("offset and limit must be non-negative integers", "INVALID_PAGINATION")
        return self.recharges.get_history(offset, limit), self.recharges.total()

    def operators(self) -> Dict[str, Dict[str, Any]]:
        return self.catalog.operators_payload()

    def bill_providers(self) -> List[Dict[str, Any]]:
        return self.catalog.providers_payload()

    def aggregate_status(self, uptime_seconds: float, api_version: str, server_time: datetime) -> Dict[str, Any]:
        return {
            "server_status": "online",
            "api_version": api_version,
            "uptime": uptime_seconds,
            "total_recharge_transactions": self.recharges.total(),
            "total_billpay_transactions": self.bill_payments.total(),
            "recharge_success_rate": format_success_rate(self.recharges.completed_count(), self.recharges.total()),
            "billpay_success_rate": format_success_rate(self.bill_payments.completed_count(), self.bill_payments.total()),
            "supported_operators": self.catalog.operator_keys(),
            "supported_bill_providers": self.catalog.provider_codes(),
            "server_time": server_time,
        }
