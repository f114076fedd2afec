"""
Error envelope rendering.

Every failing request is answered with the same JSON shape:
``{statusCode, timestamp, path, method, message, error, ...}``. Requests under
/calculator additionally carry a calculator error code; failures there that
are not already calculator errors are normalized into one first.
"""
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from spending_tracker.calculator.exceptions import (
    CalculatorException,
    UnexpectedException,
    ValidationException,
)
from spending_tracker.utils.runtime import is_production
from spending_tracker.utils.settings import get_app_settings

logger = logging.getLogger(__name__)

VALIDATION_ERROR_LABEL = "Validation Error"
INTERNAL_ERROR_MESSAGE = "Internal server error"
# Routing misses keep their own status even on calculator paths.
PASSTHROUGH_STATUSES = {404, 405}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_calculator_path(path: str) -> bool:
    prefix = get_app_settings().api_prefix
    base = f"{prefix}/calculator"
    return path == base or path.startswith(base + "/")


def status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def build_envelope(
    request: Request,
    status_code: int,
    message: Any,
    error: str,
    **extra: Any,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "statusCode": status_code,
        "timestamp": _now_iso(),
        "path": request.url.path,
        "method": request.method,
        "message": message,
        "error": error,
    }
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Flatten pydantic error dicts into ``"field: message"`` strings."""
    messages: List[str] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


def wrap_calculator_error(exc: Exception) -> Optional[CalculatorException]:
    """Map any failure raised while serving /calculator onto a calculator error.

    Returns None for 404/405 so routing errors keep their plain envelope.
    """
    if isinstance(exc, CalculatorException):
        return exc
    if isinstance(exc, RequestValidationError):
        messages = format_validation_errors(exc.errors())
        return ValidationException("Validation failed", "; ".join(messages) or None)
    if isinstance(exc, StarletteHTTPException):
        if exc.status_code in PASSTHROUGH_STATUSES:
            return None
        if exc.status_code < 500:
            return ValidationException(str(exc.detail))
        return UnexpectedException("An unexpected error occurred", str(exc.detail))
    details = None if is_production() else f"{type(exc).__name__}: {exc}"
    return UnexpectedException("An unexpected error occurred", details)


def calculator_error_response(request: Request, exc: CalculatorException) -> JSONResponse:
    payload = exc.to_payload()
    if exc.status_code >= 500:
        logger.error(
            "calculator_error: code=%s operation=%s path=%s message=%s",
            exc.error_code.value, exc.operation, request.url.path, exc.message,
        )
    else:
        logger.warning(
            "calculator_error: code=%s operation=%s path=%s message=%s",
            exc.error_code.value, exc.operation, request.url.path, exc.message,
        )
    body = {
        "statusCode": exc.status_code,
        "timestamp": payload.pop("timestamp"),
        "path": request.url.path,
        "method": request.method,
    }
    payload.pop("statusCode", None)
    body.update(payload)
    return JSONResponse(body, status_code=exc.status_code)


async def calculator_exception_handler(request: Request, exc: CalculatorException) -> JSONResponse:
    return calculator_error_response(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if is_calculator_path(request.url.path):
        return calculator_error_response(request, wrap_calculator_error(exc))
    messages = format_validation_errors(exc.errors())
    logger.warning("validation_error: path=%s errors=%s", request.url.path, messages)
    return JSONResponse(
        build_envelope(request, 400, messages, VALIDATION_ERROR_LABEL),
        status_code=400,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if is_calculator_path(request.url.path):
        wrapped = wrap_calculator_error(exc)
        if wrapped is not None:
            return calculator_error_response(request, wrapped)
    if exc.status_code >= 500:
        logger.error("http_error: status=%s path=%s detail=%s", exc.status_code, request.url.path, exc.detail)
    else:
        logger.warning("http_error: status=%s path=%s detail=%s", exc.status_code, request.url.path, exc.detail)
    return JSONResponse(
        build_envelope(request, exc.status_code, exc.detail, status_phrase(exc.status_code)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def unhandled_exception_response(request: Request, exc: Exception) -> JSONResponse:
    """Render an exception that escaped every handler as a 500 envelope."""
    logger.exception("unhandled_error: %s %s", request.method, request.url.path, exc_info=exc)
    if is_calculator_path(request.url.path):
        return calculator_error_response(request, wrap_calculator_error(exc))
    details = None if is_production() else str(exc)
    return JSONResponse(
        build_envelope(request, 500, INTERNAL_ERROR_MESSAGE, status_phrase(500), details=details),
        status_code=500,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CalculatorException, calculator_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
