from typing import List

from .common import ApiModel


class ErrorResponse(ApiModel):
    """Uniform error envelope returned by every failing request."""
    status_code: int
    timestamp: str
    path: str
    method: str
    message: str | List[str]
    error: str
    error_code: str | None = None
    description: str | None = None
    operation: str | None = None
    details: str | None = None
