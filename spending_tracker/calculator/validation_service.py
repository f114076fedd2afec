"""
Operand validation for calculator operations.

Checks return ``ValidationResult`` objects instead of raising so callers can
collect several failures; the ``*_or_raise`` helpers convert the first
failure into an ``InvalidOperandException`` carrying the matching error code.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, List, Optional, Sequence

from spending_tracker.calculator.error_codes import CalculatorErrorCode
from spending_tracker.calculator.exceptions import InvalidOperandException

logger = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2 ** 53 - 1
MIN_SAFE_INTEGER = -(2 ** 53 - 1)


class ValidationErrorType(str, Enum):
    NOT_A_NUMBER = "NOT_A_NUMBER"
    NAN_VALUE = "NAN_VALUE"
    INFINITE_VALUE = "INFINITE_VALUE"
    NULL_VALUE = "NULL_VALUE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    NOT_INTEGER = "NOT_INTEGER"


_ERROR_TYPE_CODES = {
    ValidationErrorType.NULL_VALUE: CalculatorErrorCode.INVALID_OPERAND,
    ValidationErrorType.NOT_A_NUMBER: CalculatorErrorCode.OPERAND_NOT_NUMBER,
    ValidationErrorType.NAN_VALUE: CalculatorErrorCode.OPERAND_IS_NAN,
    ValidationErrorType.INFINITE_VALUE: CalculatorErrorCode.OPERAND_NOT_FINITE,
    ValidationErrorType.NOT_INTEGER: CalculatorErrorCode.OPERAND_NOT_INTEGER,
    ValidationErrorType.OUT_OF_RANGE: CalculatorErrorCode.INVALID_OPERAND,
    ValidationErrorType.NEGATIVE_VALUE: CalculatorErrorCode.INVALID_OPERAND,
}


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    value: Any = None
    error: Optional[str] = None
    error_type: Optional[ValidationErrorType] = None

    @property
    def error_code(self) -> Optional[CalculatorErrorCode]:
        if self.error_type is None:
            return None
        return _ERROR_TYPE_CODES[self.error_type]


@dataclass(frozen=True)
class ValidationOptions:
    allow_infinity: bool = False
    allow_negative: bool = True
    require_integer: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    parameter_name: str = "Value"


def _ok(value: Any) -> ValidationResult:
    return ValidationResult(is_valid=True, value=value)


def _fail(value: Any, error: str, error_type: ValidationErrorType) -> ValidationResult:
    return ValidationResult(is_valid=False, value=value, error=error, error_type=error_type)


def _is_real_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class ValidationService:
    """Stateless operand checks shared by the calculator service and pipes."""

    def is_not_null(self, value: Any, param_name: str) -> ValidationResult:
        if value is None:
            logger.warning("Validation failed: %s is null", param_name)
            return _fail(value, f"{param_name} must not be null", ValidationErrorType.NULL_VALUE)
        return _ok(value)

    def is_not_nan(self, value: Any, param_name: str) -> ValidationResult:
        null_check = self.is_not_null(value, param_name)
        if not null_check.is_valid:
            return null_check
        if isinstance(value, float) and math.isnan(value):
            logger.warning("Validation failed: %s is NaN", param_name)
            return _fail(value, f"{param_name} must not be NaN", ValidationErrorType.NAN_VALUE)
        return _ok(value)

    def is_finite(self, value: float, param_name: str) -> ValidationResult:
        if not isinstance(value, int) and not math.isfinite(value):
            logger.warning("Validation failed: %s is not finite (value: %s)", param_name, value)
            return _fail(value, f"{param_name} must be a finite number", ValidationErrorType.INFINITE_VALUE)
        return _ok(value)

    def is_integer(self, value: float, param_name: str) -> ValidationResult:
        if not isinstance(value, int) and not float(value).is_integer():
            logger.warning("Validation failed: %s is not an integer (value: %s)", param_name, value)
            return _fail(value, f"{param_name} must be an integer", ValidationErrorType.NOT_INTEGER)
        return _ok(value)

    def is_in_range(self, value: float, min_value: float, max_value: float, param_name: str) -> ValidationResult:
        if value < min_value or value > max_value:
            logger.warning(
                "Validation failed: %s is out of range (value: %s, range: [%s, %s])",
                param_name, value, min_value, max_value,
            )
            return _fail(
                value,
                f"{param_name} must be between {min_value} and {max_value}",
                ValidationErrorType.OUT_OF_RANGE,
            )
        return _ok(value)

    def validate_number(self, value: Any, param_name: str) -> ValidationResult:
        """Null, type, NaN and finiteness checks in that order."""
        null_check = self.is_not_null(value, param_name)
        if not null_check.is_valid:
            return null_check

        if not _is_real_number(value):
            logger.warning("Validation failed: %s is not a number (type: %s)", param_name, type(value).__name__)
            return _fail(value, f"{param_name} must be a number", ValidationErrorType.NOT_A_NUMBER)

        nan_check = self.is_not_nan(value, param_name)
        if not nan_check.is_valid:
            return nan_check

        return self.is_finite(value, param_name)

    def validate_with_options(self, value: Any, options: Optional[ValidationOptions] = None) -> ValidationResult:
        options = options or ValidationOptions()
        param_name = options.parameter_name

        basic = self.validate_number(value, param_name)
        if not basic.is_valid:
            if options.allow_infinity and isinstance(value, float) and math.isinf(value):
                logger.debug("Allowing infinity value for %s (value: %s)", param_name, value)
                return _ok(value)
            return basic

        if not options.allow_negative and value < 0:
            logger.warning("Validation failed: %s is negative (value: %s)", param_name, value)
            return _fail(value, f"{param_name} must not be negative", ValidationErrorType.NEGATIVE_VALUE)

        if options.require_integer:
            int_check = self.is_integer(value, param_name)
            if not int_check.is_valid:
                return int_check

        if options.min is not None or options.max is not None:
            min_value = options.min if options.min is not None else MIN_SAFE_INTEGER
            max_value = options.max if options.max is not None else MAX_SAFE_INTEGER
            range_check = self.is_in_range(value, min_value, max_value, param_name)
            if not range_check.is_valid:
                return range_check

        return _ok(value)

    def validate_multiple(self, values: Sequence[Any], param_names: Sequence[str]) -> List[ValidationResult]:
        if len(values) != len(param_names):
            logger.error("validate_multiple: values and param_names must have the same length")
            raise ValueError("Values and parameter names must have the same length")
        return [self.validate_number(v, name) for v, name in zip(values, param_names)]

    def validate_or_raise(self, value: Any, param_name: str) -> None:
        result = self.validate_number(value, param_name)
        if not result.is_valid:
            raise InvalidOperandException(param_name, result.error or "Invalid value", result.error_code)

    def validate_operands_or_raise(self, a: Any, b: Any) -> None:
        self.validate_or_raise(a, "First operand")
        self.validate_or_raise(b, "Second operand")

    def validate_single_operand_or_raise(self, value: Any) -> None:
        self.validate_or_raise(value, "Operand")

    def parse_number(self, value: Any, param_name: str) -> ValidationResult:
        """Coerce strings and numeric-like values to float, then validate."""
        if _is_real_number(value):
            return self.validate_number(value, param_name)

        if isinstance(value, str):
            trimmed = value.strip()
            if not trimmed:
                logger.warning("Validation failed: %s is an empty string", param_name)
                return _fail(value, f"{param_name} cannot be an empty string", ValidationErrorType.NOT_A_NUMBER)
            try:
                parsed = float(trimmed)
            except ValueError:
                logger.warning("Validation failed: %s is not numeric (value: %r)", param_name, value)
                return _fail(value, f"{param_name} must be a number", ValidationErrorType.NOT_A_NUMBER)
            return self.validate_number(parsed, param_name)

        if value is None:
            return self.is_not_null(value, param_name)

        logger.warning("Attempting to parse %s from type %s", param_name, type(value).__name__)
        try:
            coerced = float(value)
        except (TypeError, ValueError):
            return _fail(value, f"{param_name} must be a number", ValidationErrorType.NOT_A_NUMBER)
        return self.validate_number(coerced, param_name)

    def validate_result_range(self, result: float, operation: str) -> ValidationResult:
        if not math.isfinite(result):
            logger.error("%s operation resulted in non-finite value: %s", operation, result)
            if math.isnan(result):
                return _fail(result, "Result is not a number", ValidationErrorType.NAN_VALUE)
            error = "Result is positive infinity" if result > 0 else "Result is negative infinity"
            return _fail(result, error, ValidationErrorType.INFINITE_VALUE)

        if result > MAX_SAFE_INTEGER:
            logger.error("%s operation resulted in overflow: %s > %s", operation, result, MAX_SAFE_INTEGER)
            return _fail(
                result,
                f"Result {result} exceeds maximum safe integer {MAX_SAFE_INTEGER}",
                ValidationErrorType.OUT_OF_RANGE,
            )

        if result < MIN_SAFE_INTEGER:
            logger.error("%s operation resulted in underflow: %s < %s", operation, result, MIN_SAFE_INTEGER)
            return _fail(
                result,
                f"Result {result} is below minimum safe integer {MIN_SAFE_INTEGER}",
                ValidationErrorType.OUT_OF_RANGE,
            )

        return _ok(result)
