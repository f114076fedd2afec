from datetime import datetime

from .common import ApiModel


class HealthCheck(ApiModel):
    status: str
    timestamp: datetime


class MemoryUsage(ApiModel):
    max_rss_kb: int


class HealthStatus(HealthCheck):
    uptime: int
    uptime_human: str
    environment: str
    version: str
    memory: MemoryUsage
    database: str


class AppInfo(ApiModel):
    name: str
    version: str
    description: str
    environment: str
