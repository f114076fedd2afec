"""Environment guards for the DEV_MODE identity bypass."""

import os
from typing import FrozenSet, Optional
from urllib.parse import urlparse

from spending_tracker.utils.settings import get_app_settings, normalize_bool

LOCAL_HOSTS: FrozenSet[str] = frozenset({"localhost", "127.0.0.1", "::1"})

DEV_USER_EMAIL = "dev@localhost"
DEV_USER_NAME = "Development User"


class DevModeError(RuntimeError):
    """DEV_MODE was requested somewhere it must not run."""


def is_production() -> bool:
    return get_app_settings().is_production


def _base_url_host() -> Optional[str]:
    raw = os.getenv("APP_BASE_URL", "").strip()
    if not raw:
        return None
    return urlparse(raw if "://" in raw else f"http://{raw}").hostname


def dev_hosts() -> FrozenSet[str]:
    """Localhost names plus anything listed in DEV_MODE_ALLOWED_HOSTS."""
    extra = os.getenv("DEV_MODE_ALLOWED_HOSTS", "")
    return LOCAL_HOSTS | {h.strip().lower() for h in extra.split(",") if h.strip()}


def dev_mode_active() -> bool:
    """True when DEV_MODE is on and permitted here.

    Raises ``DevModeError`` in production, for a non-local APP_BASE_URL, or
    when no base URL is configured outside tests without ALLOW_DEV_MODE.
    """
    if not normalize_bool(os.getenv("DEV_MODE"), default=False):
        return False
    if is_production():
        raise DevModeError("DEV_MODE=true is not permitted when APP_ENV=production.")

    host = _base_url_host()
    if host is None:
        allowed = normalize_bool(os.getenv("ALLOW_DEV_MODE"), default=False) or "PYTEST_CURRENT_TEST" in os.environ
        if not allowed:
            raise DevModeError("DEV_MODE=true needs a localhost APP_BASE_URL or ALLOW_DEV_MODE=true.")
        return True

    permitted = dev_hosts()
    if host.lower() not in permitted:
        raise DevModeError(f"DEV_MODE=true is not permitted for host '{host}'; allowed: {sorted(permitted)}")
    return True
