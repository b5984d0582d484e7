"""Health check endpoint."""

import time

from fastapi import APIRouter

from appibilities.config import get_settings
from appibilities.engine.config_loader import load_rule_config_file
from appibilities.errors import ConfigFileInvalid
from appibilities.models.responses import HealthDependency, HealthResponse
from appibilities.services.assistant_engine import assistant_engine

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """System health check with rule and config status."""
    dependencies = {}

    rule_count = len(assistant_engine.assistant.rules)
    dependencies["rules"] = HealthDependency(
        status="healthy" if rule_count else "degraded",
        message=f"{rule_count} rules registered",
    )

    # Check the rule config file, if one is configured
    config_path = get_settings().ASSISTANT_CONFIG_PATH
    if config_path:
        start = time.time()
        try:
            load_rule_config_file(config_path)
            latency = (time.time() - start) * 1000
            dependencies["rule_config"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
        except ConfigFileInvalid as e:
            dependencies["rule_config"] = HealthDependency(status="unhealthy", message=str(e))

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())
    any_unhealthy = any(d.status == "unhealthy" for d in dependencies.values())

    if all_healthy:
        status = "healthy"
    elif any_unhealthy:
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
