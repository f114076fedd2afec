"""Query-string operand cleaning and numeric conversion."""

from __future__ import annotations

import math
import re
from typing import Any

from spending_tracker.calculator.error_codes import CalculatorErrorCode
from spending_tracker.calculator.exceptions import InvalidOperandException

_ALLOWED_CHARS = re.compile(r"^[0-9+\-eE.\s]+$")
_WHITESPACE = re.compile(r"\s+")


def sanitize_input(value: Any, name: str = "value") -> str:
    """Return ``value`` as a compact numeric string.

    Only digits, decimal points, signs and exponent markers are allowed.
    Inner whitespace ("1 000") is removed.
    """
    if value is None:
        raise InvalidOperandException(
            name,
            "value is required and cannot be null",
            CalculatorErrorCode.INVALID_OPERAND,
        )
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)

    sanitized = str(value).strip()
    if not sanitized:
        raise InvalidOperandException(
            name,
            "value cannot be an empty string",
            CalculatorErrorCode.INVALID_OPERAND,
        )
    if not _ALLOWED_CHARS.match(sanitized):
        raise InvalidOperandException(
            name,
            f'"{value}" contains invalid characters. Only numbers, decimal points, '
            "signs (+/-), and scientific notation (e/E) are allowed.",
            CalculatorErrorCode.OPERAND_NOT_NUMBER,
        )
    return _WHITESPACE.sub("", sanitized)


def transform_number(value: Any, name: str = "value") -> float:
    """Parse a sanitized operand into a finite float."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = float(value)
    else:
        if value is None or not str(value).strip():
            raise InvalidOperandException(
                name,
                "value is required and cannot be empty",
                CalculatorErrorCode.INVALID_OPERAND,
            )
        try:
            parsed = float(str(value).strip())
        except ValueError:
            raise InvalidOperandException(
                name,
                f'Invalid number: "{value}". Please provide a valid numeric value.',
                CalculatorErrorCode.OPERAND_NOT_NUMBER,
            ) from None

    if math.isnan(parsed):
        raise InvalidOperandException(name, "Number must not be NaN.", CalculatorErrorCode.OPERAND_IS_NAN)
    if math.isinf(parsed):
        raise InvalidOperandException(
            name,
            f'Invalid number: "{value}". Number must be finite.',
            CalculatorErrorCode.OPERAND_NOT_FINITE,
        )
    return parsed


def parse_operand(value: Any, name: str) -> float:
    return transform_number(sanitize_input(value, name), name)
