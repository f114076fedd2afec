"""
FastAPI app assembly: logging, lifespan, middleware and router wiring.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from spending_tracker.utils.settings import get_app_settings

settings = get_app_settings()

# Configure logging
LOG_LEVEL = getattr(logging, settings.log_level, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s environment=%s", settings.log_level, settings.environment)

from spending_tracker.api.budget_categories import router as budget_categories_router
from spending_tracker.api.budgets import router as budgets_router
from spending_tracker.api.calculator import router as calculator_router
from spending_tracker.api.calendar import router as calendar_router
from spending_tracker.api.categories import router as categories_router
from spending_tracker.api.errors import build_envelope, register_error_handlers, unhandled_exception_response
from spending_tracker.api.expenses import router as expenses_router
from spending_tracker.api.health import router as health_router
from spending_tracker.db import schemas
from spending_tracker.db.config import get_database_settings
from spending_tracker.db.database import is_sqlite, run_migrations, wait_for_database
from spending_tracker.utils.throttling import FixedWindowThrottle


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema is managed by Alembic migrations; SQLite test databases are built from metadata.
    if not is_sqlite():
        wait_for_database()
        if get_database_settings().run_migrations:
            run_migrations()
    yield


app = FastAPI(
    title=settings.name,
    description=settings.description,
    version=settings.version,
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

register_error_handlers(app)

_throttle: Optional[FixedWindowThrottle] = None


def get_throttle() -> FixedWindowThrottle:
    global _throttle
    current = get_app_settings()
    if (
        _throttle is None
        or _throttle.limit != current.throttle_limit
        or _throttle.ttl_seconds != current.throttle_ttl_seconds
    ):
        _throttle = FixedWindowThrottle(current.throttle_limit, current.throttle_ttl_seconds)
    return _throttle


# Middleware: render anything that escaped the exception handlers (innermost)
@app.middleware("http")
async def error_boundary(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        return unhandled_exception_response(request, exc)


# Middleware: per-client fixed-window rate limiting
@app.middleware("http")
async def throttle_requests(request: Request, call_next):
    current = get_app_settings()
    path = request.url.path or ""
    if not current.throttle_enabled or path.startswith(f"{current.api_prefix}/health"):
        return await call_next(request)
    client_key = request.client.host if request.client else "anonymous"
    decision = get_throttle().hit(client_key)
    if not decision.allowed:
        logger.warning("throttled: client=%s path=%s", client_key, path)
        return JSONResponse(
            build_envelope(request, 429, "Too many requests, please try again later", "Too Many Requests"),
            status_code=429,
            headers={"Retry-After": str(decision.retry_after)},
        )
    return await call_next(request)


# Middleware: request/response logging (outermost of the http middlewares)
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    logger.info("Incoming Request: %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "Completed Request: %s %s - %s - %sms",
        request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Document the shared error envelope on every route.
ERROR_RESPONSES = {
    code: {"model": schemas.ErrorResponse}
    for code in (400, 401, 403, 404, 409, 429, 500)
}

for router in (
    health_router,
    calculator_router,
    calendar_router,
    categories_router,
    budget_categories_router,
    budgets_router,
    expenses_router,
):
    app.include_router(router, prefix=settings.api_prefix, responses=ERROR_RESPONSES)
