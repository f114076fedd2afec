"""
Process health reporting: uptime, memory and database reachability.
"""
from __future__ import annotations

import resource
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from spending_tracker.utils.settings import get_app_settings

_STARTED_AT = time.monotonic()


def uptime_ms(now: float | None = None) -> int:
    now = time.monotonic() if now is None else now
    return int((now - _STARTED_AT) * 1000)


def format_uptime(ms: int) -> str:
    """Render milliseconds as ``1d 2h 3m``, ``2h 3m 4s``, ``3m 4s`` or ``4s``."""
    seconds = ms // 1000
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def max_rss_kb() -> int:
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux kilobytes.
    return usage // 1024 if sys.platform == "darwin" else usage


def health_check() -> Dict[str, Any]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc)}


def health_status(database_check: Callable[[], bool]) -> Dict[str, Any]:
    settings = get_app_settings()
    ms = uptime_ms()
    return {
        **health_check(),
        "uptime": ms,
        "uptime_human": format_uptime(ms),
        "environment": settings.environment,
        "version": settings.version,
        "memory": {"max_rss_kb": max_rss_kb()},
        "database": "ok" if database_check() else "unavailable",
    }
