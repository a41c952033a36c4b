"""API adapter for HTTP endpoints."""

from .app import create_app
from .models import CheckResponse, HealthResponse, ReportResponse

__all__ = [
    "CheckResponse",
    "HealthResponse",
    "ReportResponse",
    "create_app",
]
