"""Commission and service fee calculation"""

from typing import Tuple

from recharge_gateway.domain.models import BillProvider, Operator


def calculate_commission(amount: float, operator: Operator) -> float:
    """
    Operator commission earned on a recharge.

    Example:
        100 BDT on Grameenphone (2.5%) -> 2.5
    """
    return amount * operator.commission_rate_percent / 100


def calculate_bill_charges(amount: float, provider: BillProvider) -> Tuple[float, float]:
    """
    Service fee and total payable for a bill payment.

    Returns: (service_fee, total_amount) where total_amount = amount + service_fee

    Example:
        1000 BDT to DESCO (1.5%) -> (15.0, 1015.0)
    """
    service_fee = amount * provider.fee_percentage / 100
    return service_fee, amount + service_fee
