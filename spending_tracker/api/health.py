"""
Health and application info endpoints.
"""
from fastapi import APIRouter

from spending_tracker.db import schemas
from spending_tracker.db.database import check_database
from spending_tracker.services import health_service
from spending_tracker.utils.settings import get_app_settings

router = APIRouter(tags=["health"])


@router.get("/", response_model=schemas.AppInfo)
def app_info():
    settings = get_app_settings()
    return {
        "name": settings.name,
        "version": settings.version,
        "description": settings.description,
        "environment": settings.environment,
    }


@router.get("/health", response_model=schemas.HealthCheck)
def health_check():
    return health_service.health_check()


@router.get("/health/status", response_model=schemas.HealthStatus)
def health_status():
    return health_service.health_status(check_database)
