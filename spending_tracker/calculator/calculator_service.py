"""
Calculator service.

Implements the arithmetic operations behind /calculator. Every operand is
validated before use and every result is checked for finiteness, so callers
either get a finite float or a ``CalculatorException`` subclass.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from spending_tracker.calculator.error_codes import CalculatorErrorCode
from spending_tracker.calculator.exceptions import (
    DivisionByZeroException,
    InvalidOperationException,
    InvalidResultException,
    ModuloByZeroException,
    OverflowException,
    UnderflowException,
)
from spending_tracker.calculator.validation_service import ValidationService

logger = logging.getLogger(__name__)

MAX_FACTORIAL_INPUT = 170


@dataclass(frozen=True)
class OperationSpec:
    name: str
    label: str
    arity: int
    symbol: Optional[str] = None


OPERATIONS: Dict[str, OperationSpec] = {
    "add": OperationSpec("add", "addition", 2, "+"),
    "subtract": OperationSpec("subtract", "subtraction", 2, "-"),
    "multiply": OperationSpec("multiply", "multiplication", 2, "*"),
    "divide": OperationSpec("divide", "division", 2, "/"),
    "power": OperationSpec("power", "power", 2, "^"),
    "modulo": OperationSpec("modulo", "modulo", 2, "%"),
    "sqrt": OperationSpec("sqrt", "square root", 1),
    "factorial": OperationSpec("factorial", "factorial", 1),
    "absolute": OperationSpec("absolute", "absolute", 1),
    "ceiling": OperationSpec("ceiling", "ceiling", 1),
    "floor": OperationSpec("floor", "floor", 1),
    "round": OperationSpec("round", "round", 1),
}

BINARY_OPERATIONS = tuple(k for k, spec in OPERATIONS.items() if spec.arity == 2)
UNARY_OPERATIONS = tuple(k for k, spec in OPERATIONS.items() if spec.arity == 1)


class CalculatorService:
    def __init__(self, validator: Optional[ValidationService] = None):
        self.validator = validator or ValidationService()

    # -- result guards -------------------------------------------------

    def _ensure_finite(self, result, operation: str, expression: str) -> float:
        if isinstance(result, complex):
            raise InvalidResultException(
                operation,
                f"{expression} is not a real number",
                CalculatorErrorCode.RESULT_NOT_FINITE,
            )
        if math.isnan(result):
            raise InvalidResultException(
                operation,
                f"{expression} is not a number",
                CalculatorErrorCode.RESULT_NOT_FINITE,
            )
        if result == math.inf:
            raise OverflowException(operation, f"{expression} exceeds the representable range")
        if result == -math.inf:
            raise UnderflowException(operation, f"{expression} is below the representable range")
        return result

    # -- binary operations ---------------------------------------------

    def add(self, a: float, b: float) -> float:
        self.validator.validate_operands_or_raise(a, b)
        return self._ensure_finite(a + b, "addition", f"{a} + {b}")

    def subtract(self, a: float, b: float) -> float:
        self.validator.validate_operands_or_raise(a, b)
        return self._ensure_finite(a - b, "subtraction", f"{a} - {b}")

    def multiply(self, a: float, b: float) -> float:
        self.validator.validate_operands_or_raise(a, b)
        return self._ensure_finite(a * b, "multiplication", f"{a} * {b}")

    def divide(self, a: float, b: float) -> float:
        self.validator.validate_operands_or_raise(a, b)
        if b == 0:
            raise DivisionByZeroException(a)
        return self._ensure_finite(a / b, "division", f"{a} / {b}")

    def power(self, a: float, b: float) -> float:
        self.validator.validate_operands_or_raise(a, b)
        expression = f"{a} ^ {b}"
        try:
            result = float(a) ** float(b)
        except OverflowError:
            raise OverflowException("power", f"{expression} exceeds the representable range") from None
        except ZeroDivisionError:
            raise InvalidResultException(
                "power",
                f"{expression} is undefined",
                CalculatorErrorCode.RESULT_NOT_FINITE,
            ) from None
        return self._ensure_finite(result, "power", expression)

    def modulo(self, a: float, b: float) -> float:
        """Remainder with the sign of the dividend (truncated division)."""
        self.validator.validate_operands_or_raise(a, b)
        if b == 0:
            raise ModuloByZeroException(a)
        return self._ensure_finite(math.fmod(a, b), "modulo", f"{a} % {b}")

    # -- unary operations ----------------------------------------------

    def sqrt(self, value: float) -> float:
        self.validator.validate_single_operand_or_raise(value)
        if value < 0:
            raise InvalidOperationException(
                "square root",
                "Cannot calculate square root of negative number",
                CalculatorErrorCode.NEGATIVE_SQUARE_ROOT,
            )
        return math.sqrt(value)

    def factorial(self, value: float) -> float:
        self.validator.validate_single_operand_or_raise(value)
        if value < 0:
            raise InvalidOperationException(
                "factorial",
                "Cannot calculate factorial of negative number",
                CalculatorErrorCode.NEGATIVE_FACTORIAL,
            )
        if not float(value).is_integer():
            raise InvalidOperationException(
                "factorial",
                "Factorial requires an integer input",
                CalculatorErrorCode.NON_INTEGER_FACTORIAL,
            )
        if value > MAX_FACTORIAL_INPUT:
            raise InvalidOperationException(
                "factorial",
                f"Factorial input too large (maximum is {MAX_FACTORIAL_INPUT})",
                CalculatorErrorCode.FACTORIAL_INPUT_TOO_LARGE,
            )
        return float(math.factorial(int(value)))

    def absolute(self, value: float) -> float:
        self.validator.validate_single_operand_or_raise(value)
        return float(abs(value))

    def ceiling(self, value: float) -> float:
        self.validator.validate_single_operand_or_raise(value)
        return float(math.ceil(value))

    def floor(self, value: float) -> float:
        self.validator.validate_single_operand_or_raise(value)
        return float(math.floor(value))

    def round(self, value: float) -> float:
        """Round half up: 2.5 -> 3, -2.5 -> -2."""
        self.validator.validate_single_operand_or_raise(value)
        floored = math.floor(value)
        return float(floored + 1 if value - floored >= 0.5 else floored)

    # -- dispatch ------------------------------------------------------

    def calculate(self, operation: str, *operands: float) -> float:
        spec = OPERATIONS.get(operation)
        if spec is None:
            raise InvalidOperationException(operation, f"Unsupported operation: {operation}")
        if len(operands) != spec.arity:
            raise InvalidOperationException(
                spec.label,
                f"{spec.label} expects {spec.arity} operand(s), got {len(operands)}",
            )
        handler: Callable[..., float] = getattr(self, operation)
        result = handler(*operands)
        logger.debug("calculation: op=%s operands=%s result=%s", operation, operands, result)
        return result


_service: Optional[CalculatorService] = None


def get_calculator_service() -> CalculatorService:
    """FastAPI dependency returning the process-wide calculator."""
    global _service
    if _service is None:
        _service = CalculatorService()
    return _service
