"""Domain-specific exceptions"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for domain layer, rendered as a JSON error at the API boundary"""

    status_code = 400
    error_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.extra = extra or {}


class ValidationError(DomainException):
    """Request field missing or outside catalog constraints"""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(DomainException):
    """No transaction with the requested id"""

    status_code = 404
    error_code = "TRANSACTION_NOT_FOUND"


class SimulatedFailure(DomainException):
    """Randomized operator-side failure of an otherwise valid request"""

    status_code = 400

    def __init__(self, message: str, error_code: str, transaction_reference: str):
        super().__init__(message, error_code, extra={"transaction_reference": transaction_reference})
        self.transaction_reference = transaction_reference


class InvalidStateTransitionError(DomainException):
    """Transaction already reached a terminal status"""

    status_code = 409
    error_code = "INVALID_STATE_TRANSITION"
