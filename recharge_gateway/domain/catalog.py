"""Static catalog of mobile operators and bill providers"""

from typing import Any, Dict, List, Optional

from recharge_gateway.domain.models import BillProvider, Operator, ProcessingTimeClass


OPERATORS: Dict[str, Operator] = {
    op.key: op
    for op in (
        Operator(key="grameenphone", display_name="Grameenphone", code="GP", commission_rate_percent=2.5),
        Operator(key="robi", display_name="Robi", code="ROBI", commission_rate_percent=2.0),
        Operator(key="banglalink", display_name="Banglalink", code="BL", commission_rate_percent=2.0),
        Operator(key="airtel", display_name="Airtel", code="AIRTEL", commission_rate_percent=1.8),
        Operator(key="teletalk", display_name="Teletalk", code="TT", commission_rate_percent=1.5),
    )
}

BILL_PROVIDERS: List[BillProvider] = [
    BillProvider(
        id=1,
        code="DESCO",
        name="DESCO",
        category="electricity",
        min_amount=50,
        max_amount=50000,
        fee_percentage=1.5,
        processing_time_class=ProcessingTimeClass.INSTANT,
    ),
    BillProvider(
        id=2,
        code="WASA",
        name="WASA",
        category="water",
        min_amount=50,
        max_amount=25000,
        fee_percentage=1.0,
        processing_time_class=ProcessingTimeClass.DELAYED,
    ),
    BillProvider(
        id=3,
        code="TITAS",
        name="TITAS",
        category="gas",
        min_amount=50,
        max_amount=20000,
        fee_percentage=1.2,
        processing_time_class=ProcessingTimeClass.INSTANT,
    ),
    BillProvider(
        id=4,
        code="BTCL",
        name="BTCL",
        category="internet",
        min_amount=100,
        max_amount=10000,
        fee_percentage=2.0,
        processing_time_class=ProcessingTimeClass.INSTANT,
    ),
]


class Catalog:
    """Read-only lookup over operators and bill providers"""

    def __init__(
        self,
        operators: Optional[Dict[str, Operator]] = None,
        bill_providers: Optional[List[BillProvider]] = None,
    ):
        self._operators = dict(operators if operators is not None else OPERATORS)
        self._providers = list(bill_providers if bill_providers is not None else BILL_PROVIDERS)

    def get_operator(self, name: str) -> Optional[Operator]:
        """Case-insensitive lookup by operator key"""
        return self._operators.get(name.lower())

    def get_bill_provider(self, code: str) -> Optional[BillProvider]:
        """Exact lookup by provider code"""
        return next((p for p in self._providers if p.code == code), None)

    def operator_keys(self) -> List[str]:
        return list(self._operators)

    def provider_codes(self) -> List[str]:
        return [p.code for p in self._providers]

    def operators_payload(self) -> Dict[str, Dict[str, Any]]:
        """Operators map in its public wire shape"""
        return {
            key: {"name": op.display_name, "code": op.code, "commission": op.commission_rate_percent}
            for key, op in self._operators.items()
        }

    def providers_payload(self) -> List[Dict[str, Any]]:
        """Provider list in its public wire shape"""
        return [
            {
                "id": p.id,
                "code": p.code,
                "name": p.name,
                "category": p.category,
                "min_amount": p.min_amount,
                "max_amount": p.max_amount,
                "fee_percentage": p.fee_percentage,
                "processing_time": p.processing_time_class.value,
            }
            for p in self._providers
        ]
