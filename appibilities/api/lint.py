"""Rule listing and document linting endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException

from appibilities.config import get_settings
from appibilities.models.requests import LintRequest
from appibilities.models.responses import LintResponse, RuleResponse
from appibilities.services.assistant_engine import assistant_engine

logger = structlog.get_logger()

router = APIRouter()


def _count_layers(document: dict[str, Any]) -> int:
    """Count tagged nodes in raw document contents without validating them."""
    count = 0
    stack: list[Any] = [document]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if "_class" in node:
                count += 1
            for key in ("document", "pages", "layers"):
                if key in node:
                    stack.append(node[key])
        elif isinstance(node, list):
            stack.extend(node)
    return count


@router.get("/rules", response_model=list[RuleResponse])
async def list_rules():
    """All rules with titles and descriptions rendered for the current config."""
    return [RuleResponse(**rule) for rule in assistant_engine.describe_rules()]


@router.post("/lint", response_model=LintResponse)
async def lint_document(request: LintRequest):
    """Run every active rule against the posted document."""
    max_layers = get_settings().MAX_LAYERS
    layer_count = _count_layers(request.document)
    if layer_count > max_layers:
        logger.warning("document_too_large", layers=layer_count, max_layers=max_layers)
        raise HTTPException(
            status_code=413,
            detail=f"Document has {layer_count} layers; the limit is {max_layers}",
        )

    result = await assistant_engine.run(request.document, request.rules)
    return LintResponse(assistant=assistant_engine.assistant.name, **result.model_dump())
