"""API response models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime


class AlertWindowResponse(BaseModel):
    """Configured alert window."""

    hours: float = Field(description="Domains expiring within this many hours are reported")


class StatisticsResponse(BaseModel):
    """Pass statistics."""

    checked_count: int = Field(description="Domain records processed")
    expiring_count: int = Field(description="Domains inside the alert window")
    failure_count: int = Field(description="Domains without a usable expiry date")
    expired_count: int = Field(description="Expiring domains already past their expiry day")


class ReportResponse(BaseModel):
    """Expiry report summary."""

    generated_at: datetime
    summary: str = Field(description="Human-readable summary")
    statistics: StatisticsResponse
    alert_window: AlertWindowResponse
    expiring_domains: list[str] = Field(default_factory=list)
    failed_domains: list[str] = Field(default_factory=list)
    requires_notification: bool


class CheckResponse(BaseModel):
    """Response from triggering a check."""

    success: bool
    message: str
    report: ReportResponse | None = None
    lookups: int = 0
    cache_updated: bool = False
    error: str | None = None


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
