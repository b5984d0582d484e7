"""API response models."""

from typing import Any, Literal, Optional

from pydantic import BaseModel

from appibilities.engine.models import AssistantResult


class RuleResponse(BaseModel):
    """A rule as configured for this service."""

    name: str
    title: str
    description: str
    active: bool
    options: list[dict[str, Any]] = []
    config: dict[str, Any] = {}


class LintResponse(AssistantResult):
    """Lint result for one document."""

    assistant: str


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
