"""API request models."""

from typing import Any

from pydantic import BaseModel, Field


class LintRequest(BaseModel):
    """Request to lint one design document."""

    document: dict[str, Any] = Field(
        ...,
        description="Document contents: {pages: [...]} or {document: {pages: [...]}}",
        examples=[
            {
                "pages": [
                    {
                        "_class": "page",
                        "do_objectID": "page-1",
                        "name": "Page 1",
                        "frame": {"x": 0, "y": 0, "width": 0, "height": 0},
                        "layers": [
                            {
                                "_class": "artboard",
                                "do_objectID": "artboard-1",
                                "name": "Home",
                                "frame": {"x": 0, "y": 0, "width": 375, "height": 812},
                                "layers": [],
                            }
                        ],
                    }
                ]
            }
        ],
    )
    rules: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-rule config overrides, keyed by rule name",
        examples=[{"appibilities/interactive-element-min-size": {"min_size": 48}}],
    )
