"""
Calculator API endpoints.

Each supported operation gets a GET route taking query-string operands and a
POST route taking a JSON body. Routes are registered from the operation
table so both verbs stay in sync with the service.
"""
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query

from spending_tracker.calculator.calculator_service import (
    OPERATIONS,
    CalculatorService,
    OperationSpec,
    get_calculator_service,
)
from spending_tracker.calculator.error_codes import ERROR_CODE_DESCRIPTIONS
from spending_tracker.calculator.input_pipes import parse_operand
from spending_tracker.db import schemas

router = APIRouter(prefix="/calculator", tags=["calculator"])


@router.get("/operations", response_model=schemas.OperationCatalog)
def list_operations():
    return {
        "operations": [
            {"name": spec.name, "label": spec.label, "arity": spec.arity, "symbol": spec.symbol}
            for spec in OPERATIONS.values()
        ],
        "error_codes": {code.value: description for code, description in ERROR_CODE_DESCRIPTIONS.items()},
    }


def _timed(spec: OperationSpec, service: CalculatorService, *operands: float) -> dict:
    started = time.perf_counter()
    result = service.calculate(spec.name, *operands)
    elapsed_ms = (time.perf_counter() - started) * 1000
    return {
        "result": result,
        "operation": spec.label,
        "timestamp": datetime.now(timezone.utc),
        "calculation_id": f"calc_{uuid.uuid4().hex}",
        "metadata": {
            "execution_time_ms": round(elapsed_ms, 3),
            "tags": [spec.name, "binary" if spec.arity == 2 else "unary"],
        },
    }


def _binary_get(spec: OperationSpec) -> Callable:
    def endpoint(
        a: Optional[str] = Query(default=None, description="First operand"),
        b: Optional[str] = Query(default=None, description="Second operand"),
        service: CalculatorService = Depends(get_calculator_service),
    ):
        left = parse_operand(a, "a")
        right = parse_operand(b, "b")
        return {"operation": spec.label, "a": left, "b": right, "result": service.calculate(spec.name, left, right)}
    return endpoint


def _unary_get(spec: OperationSpec) -> Callable:
    def endpoint(
        value: Optional[str] = Query(default=None, description="Operand"),
        service: CalculatorService = Depends(get_calculator_service),
    ):
        operand = parse_operand(value, "value")
        return {"operation": spec.label, "value": operand, "result": service.calculate(spec.name, operand)}
    return endpoint


def _binary_post(spec: OperationSpec) -> Callable:
    def endpoint(
        request: schemas.BinaryOperationRequest,
        service: CalculatorService = Depends(get_calculator_service),
    ):
        return _timed(spec, service, request.a, request.b)
    return endpoint


def _unary_post(spec: OperationSpec) -> Callable:
    def endpoint(
        request: schemas.UnaryOperationRequest,
        service: CalculatorService = Depends(get_calculator_service),
    ):
        return _timed(spec, service, request.value)
    return endpoint


for _spec in OPERATIONS.values():
    if _spec.arity == 2:
        get_endpoint, post_endpoint, get_model = _binary_get(_spec), _binary_post(_spec), schemas.BinaryOperationResult
    else:
        get_endpoint, post_endpoint, get_model = _unary_get(_spec), _unary_post(_spec), schemas.UnaryOperationResult
    router.add_api_route(
        f"/{_spec.name}",
        get_endpoint,
        methods=["GET"],
        response_model=get_model,
        name=f"{_spec.name}_get",
        summary=f"{_spec.label.capitalize()} via query parameters",
    )
    router.add_api_route(
        f"/{_spec.name}",
        post_endpoint,
        methods=["POST"],
        response_model=schemas.CalculationResponse,
        name=f"{_spec.name}_post",
        summary=f"{_spec.label.capitalize()} via JSON body",
    )
