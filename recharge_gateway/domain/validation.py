"""Request validation against catalog constraints - first failing rule wins"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from recharge_gateway.domain.catalog import Catalog
from recharge_gateway.domain.exceptions import ValidationError
from recharge_gateway.domain.models import BillProvider, Operator


# Bangladesh mobile numbers: +8801 / 8801 / 01, then an operator digit 3-9, then 8 digits
BD_MOBILE_PATTERN = re.compile(r"(\+8801|8801|01)[3-9]\d{8}")

MISSING_REQUIRED_FIELDS = "MISSING_REQUIRED_FIELDS"
UNSUPPORTED_OPERATOR = "UNSUPPORTED_OPERATOR"
INVALID_PHONE_FORMAT = "INVALID_PHONE_FORMAT"
INVALID_AMOUNT = "INVALID_AMOUNT"
INVALID_PROVIDER = "INVALID_PROVIDER"


@dataclass
class RechargeRequest:
    """Recharge request that passed validation"""

    phone_number: str
    amount: float
    operator: Operator
    package_id: Optional[str] = None


@dataclass
class BillPaymentRequest:
    """Bill payment request that passed validation"""

    provider: BillProvider
    account_number: str
    customer_name: str
    amount: float
    customer_phone: Optional[str] = None
    note: Optional[str] = None


@dataclass
class BalanceRequest:
    phone_number: str
    operator_key: str


def parse_amount(value: Any) -> Optional[float]:
    """Parse a JSON number or numeric string; None when it is not a finite number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return amount if math.isfinite(amount) else None


def is_valid_phone_number(phone_number: str) -> bool:
    return BD_MOBILE_PATTERN.fullmatch(phone_number) is not None


def _missing(payload: Mapping[str, Any], *fields: str) -> bool:
    return any(not payload.get(field) for field in fields)


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value else None


def validate_recharge_request(
    payload: Mapping[str, Any],
    catalog: Catalog,
    min_amount: float = 10,
    max_amount: float = 5000,
) -> RechargeRequest:
    """
    Validate a mobile recharge request.

    Rules, in order:
    1. phone_number, amount and operator are present
    2. operator is a catalog key (case-insensitive)
    3. phone_number is a Bangladesh mobile number
    4. amount is a number within [min_amount, max_amount]

    Raises:
        ValidationError: carrying the error code of the first failing rule
    """
    if _missing(payload, "phone_number", "amount", "operator"):
        raise ValidationError(
            "Missing required fields: phone_number, amount, operator",
            MISSING_REQUIRED_FIELDS,
        )

    operator_name = payload["operator"]
    operator = catalog.get_operator(operator_name) if isinstance(operator_name, str) else None
    if operator is None:
        raise ValidationError(
            f"Unsupported operator: {operator_name}",
            UNSUPPORTED_OPERATOR,
            extra={"supported_operators": catalog.operator_keys()},
        )

    phone_number = str(payload["phone_number"])
    if not is_valid_phone_number(phone_number):
        raise ValidationError(
            "Invalid phone number format. Please use Bangladesh mobile number format.",
            INVALID_PHONE_FORMAT,
        )

    amount = parse_amount(payload["amount"])
    if amount is None or amount < min_amount or amount > max_amount:
        raise ValidationError(
            f"Invalid amount. Amount should be between {min_amount:g} and {max_amount:g} BDT.",
            INVALID_AMOUNT,
        )

    return RechargeRequest(
        phone_number=phone_number,
        amount=amount,
        operator=operator,
        package_id=_optional_str(payload.get("package_id")),
    )


def validate_bill_payment_request(payload: Mapping[str, Any], catalog: Catalog) -> BillPaymentRequest:
    """
    Validate a bill payment request.

    Rules, in order:
    1. provider_code, account_number, customer_name and amount are present
    2. provider_code exists in the catalog
    3. amount is a number within the provider's [min_amount, max_amount]
    """
    if _missing(payload, "provider_code", "account_number", "customer_name", "amount"):
        raise ValidationError(
            "Provider code, account number, customer name, and amount are required",
            MISSING_REQUIRED_FIELDS,
        )

    provider = catalog.get_bill_provider(str(payload["provider_code"]))
    if provider is None:
        raise ValidationError("Invalid provider code", INVALID_PROVIDER)

    amount = parse_amount(payload["amount"])
    if amount is None or amount < provider.min_amount or amount > provider.max_amount:
        raise ValidationError(
            f"Amount must be between {provider.min_amount:g} and {provider.max_amount:g} BDT for {provider.name}",
            INVALID_AMOUNT,
        )

    return BillPaymentRequest(
        provider=provider,
        account_number=str(payload["account_number"]),
        customer_name=str(payload["customer_name"]),
        amount=amount,
        customer_phone=_optional_str(payload.get("customer_phone")),
        note=_optional_str(payload.get("note")),
    )


def validate_balance_request(payload: Mapping[str, Any]) -> BalanceRequest:
    if _missing(payload, "phone_number", "operator"):
        raise ValidationError(
            "Missing required fields: phone_number, operator",
            MISSING_REQUIRED_FIELDS,
        )
    return BalanceRequest(phone_number=str(payload["phone_number"]), operator_key=str(payload["operator"]))


def validate_account_verification(payload: Mapping[str, Any], catalog: Catalog) -> BillProvider:
    """Check that an account can be looked up with a known provider"""
    if _missing(payload, "provider_code", "account_number"):
        raise ValidationError(
            "Provider code and account number are required",
            MISSING_REQUIRED_FIELDS,
        )
    provider = catalog.get_bill_provider(str(payload["provider_code"]))
    if provider is None:
        raise ValidationError("Invalid provider code", INVALID_PROVIDER)
    return provider
