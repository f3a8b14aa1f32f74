"""Pydantic schemas for API requests and responses

Request bodies accept loosely typed fields: type and range checks belong to
the domain validators so each failure maps to its own error code.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Dict, List, Optional


class RechargeRequestBody(BaseModel):
    """Request body for POST /api/recharge"""

    model_config = ConfigDict(extra="allow")

    phone_number: Any = Field(None, examples=["01712345678"])
    amount: Any = Field(None, description="Amount in BDT, 10-5000", examples=[100])
    operator: Any = Field(None, examples=["grameenphone"])
    package_id: Any = None


class BalanceRequestBody(BaseModel):
    """Request body for POST /api/balance"""

    model_config = ConfigDict(extra="allow")

    phone_number: Any = None
    operator: Any = None


class BillPaymentRequestBody(BaseModel):
    """Request body for POST /api/billpay"""

    model_config = ConfigDict(extra="allow")

    provider_code: Any = Field(None, examples=["DESCO"])
    account_number: Any = None
    customer_name: Any = None
    amount: Any = Field(None, examples=[1000])
    customer_phone: Any = None
    note: Any = None


class AccountVerificationBody(BaseModel):
    """Request body for POST /api/billpay/verify"""

    model_config = ConfigDict(extra="allow")

    provider_code: Any = None
    account_number: Any = None
    customer_name: Any = None


class RechargeTransactionSchema(BaseModel):
    """Stored mobile recharge"""

    model_config = ConfigDict(from_attributes=True)

    transaction_id: str
    external_transaction_id: str
    phone_number: str
    amount: float
    operator_name: str
    operator_code: str
    package_id: Optional[str] = None
    status: str
    commission: float
    created_at: datetime
    updated_at: datetime
    processing_time_ms: int


class BillPaymentTransactionSchema(BaseModel):
    """Stored bill payment"""

    model_config = ConfigDict(from_attributes=True)

    transaction_id: str
    provider_code: str
    provider_name: str
    account_number: str
    customer_name: str
    amount: float
    service_fee: float
    total_amount: float
    customer_phone: Optional[str] = None
    note: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    confirmation_number: Optional[str] = None
    error_message: Optional[str] = None


class OperatorSchema(BaseModel):
    name: str
    code: str
    commission: float


class BillProviderSchema(BaseModel):
    id: int
    code: str
    name: str
    category: str
    min_amount: float
    max_amount: float
    fee_percentage: float
    processing_time: str


class RechargeResponse(BaseModel):
    """Response for POST /api/recharge and GET /api/recharge/status/{id}"""

    success: bool = True
    message: str
    data: RechargeTransactionSchema


class RechargeHistoryResponse(BaseModel):
    """Response for GET /api/recharge/history"""

    success: bool = True
    message: str
    data: List[RechargeTransactionSchema]
    total: int
    limit: int
    offset: int


class BillPaymentResponse(BaseModel):
    """Response for POST /api/billpay and GET /api/billpay/status/{id}"""

    success: bool = True
    message: Optional[str] = None
    data: BillPaymentTransactionSchema


class OperatorsResponse(BaseModel):
    success: bool = True
    message: str
    data: Dict[str, OperatorSchema]


class BillProvidersResponse(BaseModel):
    success: bool = True
    data: List[BillProviderSchema]


class BalanceSchema(BaseModel):
    phone_number: str
    operator: str
    balance: int
    currency: str = "BDT"
    last_updated: datetime


class BalanceResponse(BaseModel):
    success: bool = True
    message: str
    data: BalanceSchema


class AccountVerificationSchema(BaseModel):
    provider_code: str
    provider_name: str
    account_number: str
    customer_name: Optional[str] = None
    account_status: str
    min_amount: float
    max_amount: float


class AccountVerificationResponse(BaseModel):
    success: bool = True
    message: str
    data: AccountVerificationSchema


class ServiceStatusSchema(BaseModel):
    server_status: str
    api_version: str
    uptime: float
    total_recharge_transactions: int
    total_billpay_transactions: int
    recharge_success_rate: str
    billpay_success_rate: str
    supported_operators: List[str]
    supported_bill_providers: List[str]
    server_time: datetime


class ServiceStatusResponse(BaseModel):
    """Response for GET /api/status"""

    success: bool = True
    message: str
    data: ServiceStatusSchema
