from datetime import datetime
from typing import Any, Dict, List

from pydantic import Field, field_validator

from .common import ApiModel

SAFE_INTEGER_BOUND = 2 ** 53 - 1


def _clean_operand(value: Any) -> Any:
    """Trim numeric strings; an empty string counts as a missing operand."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class BinaryOperationRequest(ApiModel):
    a: float = Field(allow_inf_nan=False, ge=-SAFE_INTEGER_BOUND, le=SAFE_INTEGER_BOUND)
    b: float = Field(allow_inf_nan=False, ge=-SAFE_INTEGER_BOUND, le=SAFE_INTEGER_BOUND)

    @field_validator("a", "b", mode="before")
    @classmethod
    def clean_operands(cls, value):
        return _clean_operand(value)


class UnaryOperationRequest(ApiModel):
    value: float = Field(allow_inf_nan=False, ge=-SAFE_INTEGER_BOUND, le=SAFE_INTEGER_BOUND)

    @field_validator("value", mode="before")
    @classmethod
    def clean_operands(cls, value):
        return _clean_operand(value)


class BinaryOperationResult(ApiModel):
    operation: str
    a: float
    b: float
    result: float


class UnaryOperationResult(ApiModel):
    operation: str
    value: float
    result: float


class CalculationMetadata(ApiModel):
    execution_time_ms: float
    tags: List[str] = []


class CalculationResponse(ApiModel):
    result: float
    operation: str
    timestamp: datetime
    calculation_id: str
    metadata: CalculationMetadata


class OperationInfo(ApiModel):
    name: str
    label: str
    arity: int
    symbol: str | None = None
    methods: List[str] = ["GET", "POST"]


class OperationCatalog(ApiModel):
    operations: List[OperationInfo]
    error_codes: Dict[str, str]
