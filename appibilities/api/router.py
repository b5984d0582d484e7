"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from appibilities.api.health import router as health_router
from appibilities.api.lint import router as lint_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Rules listing and document linting
api_router.include_router(lint_router, tags=["Lint"])
