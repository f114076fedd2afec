"""
Calculator exception hierarchy.

Each exception carries a structured payload (error code, description,
operation and details) that the API layer renders into the JSON error
envelope together with request path and method.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from spending_tracker.calculator.error_codes import CalculatorErrorCode, describe

CALCULATOR_ERROR_LABEL = "Calculator Error"


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CalculatorException(Exception):
    """Base class for all calculator errors."""

    def __init__(
        self,
        error_code: CalculatorErrorCode,
        message: str,
        operation: Optional[str] = None,
        details: Optional[str] = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.operation = operation
        self.details = details
        self.status_code = status_code
        self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def description(self) -> str:
        return describe(self.error_code)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "statusCode": self.status_code,
            "errorCode": self.error_code.value,
            "message": self.message,
            "description": self.description,
            "operation": self.operation,
            "details": self.details,
            "timestamp": self.timestamp,
            "error": CALCULATOR_ERROR_LABEL,
        }
        return {k: v for k, v in payload.items() if v is not None}


class DivisionByZeroException(CalculatorException):
    def __init__(self, numerator: Optional[float] = None):
        details = f"{_format_number(numerator)} / 0" if numerator is not None else None
        super().__init__(
            CalculatorErrorCode.DIVISION_BY_ZERO,
            "Division by zero is not allowed",
            "division",
            details,
        )


class ModuloByZeroException(CalculatorException):
    def __init__(self, dividend: Optional[float] = None):
        details = f"{_format_number(dividend)} % 0" if dividend is not None else None
        super().__init__(
            CalculatorErrorCode.MODULO_BY_ZERO,
            "Modulo by zero is not allowed",
            "modulo",
            details,
        )


class OverflowException(CalculatorException):
    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            CalculatorErrorCode.OVERFLOW_ERROR,
            "Operation resulted in overflow",
            operation,
            details,
        )


class UnderflowException(CalculatorException):
    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            CalculatorErrorCode.UNDERFLOW_ERROR,
            "Operation resulted in underflow",
            operation,
            details,
        )


class InvalidResultException(CalculatorException):
    def __init__(
        self,
        operation: str,
        reason: str,
        error_code: CalculatorErrorCode = CalculatorErrorCode.INVALID_RESULT,
    ):
        super().__init__(error_code, f"Invalid result: {reason}", operation, reason)


class InvalidOperationException(CalculatorException):
    def __init__(
        self,
        operation: str,
        reason: str,
        error_code: CalculatorErrorCode = CalculatorErrorCode.INVALID_OPERATION,
    ):
        super().__init__(error_code, reason, operation)


class InvalidOperandException(CalculatorException):
    def __init__(
        self,
        operand_name: str,
        reason: str,
        error_code: CalculatorErrorCode = CalculatorErrorCode.INVALID_OPERAND,
    ):
        super().__init__(
            error_code,
            f"{operand_name}: {reason}",
            "validation",
            f"{operand_name} - {reason}",
        )


class ValidationException(CalculatorException):
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(CalculatorErrorCode.VALIDATION_ERROR, message, "validation", details)


class UnexpectedException(CalculatorException):
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(
            CalculatorErrorCode.UNEXPECTED_ERROR,
            message,
            "system",
            details,
            status_code=500,
        )
