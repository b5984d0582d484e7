"""Bundled rules and the default assistant configuration.

Usage:
    from appibilities.rules import build_assistant

    assistant = build_assistant()
"""

import copy

from appibilities.engine.assistant import Assistant
from appibilities.rules.artboards import ArtboardsAllowedSizesRule
from appibilities.rules.reference_data import (
    ALLOWED_FONT_WEIGHTS,
    APPLE_DISPLAY_SIZES,
    MIN_TAP_TARGET,
    TAPPABLE_NAME_PATTERN,
)
from appibilities.rules.tap_targets import InteractiveElementMinSizeRule, SymbolsMinSizeRule
from appibilities.rules.text import IncludesEllipsisRule
from appibilities.rules.typography import (
    FontWeightsAllowedRule,
    NewYorkOpticalSizeRule,
    SanFranciscoOpticalSizeRule,
)

ASSISTANT_NAME = "appibilities"

DEFAULT_CONFIG: dict[str, dict] = {
    "appibilities/artboards-allowed-sizes": {
        "active": True,
        "rule_title": "Artboards should match any iPhone or iPad display or be taller",
        "sizes": APPLE_DISPLAY_SIZES,
        "allow_exceeding_height": True,
    },
    "appibilities/interactive-element-min-size": {
        "active": True,
        "min_size": MIN_TAP_TARGET,
    },
    "appibilities/symbols-min-size": {
        "active": True,
        "rule_title": f"Buttons should have a minimum size of {MIN_TAP_TARGET}x{MIN_TAP_TARGET}",
        "min_size": MIN_TAP_TARGET,
        "name_pattern": TAPPABLE_NAME_PATTERN,
    },
    "ios-accessibility-assistant/font-weights-allowed": {
        "active": True,
        "pattern": ALLOWED_FONT_WEIGHTS,
    },
    "ios-accessibility-assistant/includes-ellipsis": {
        "active": True,
    },
    "ios-accessibility-assistant/sf-disallow": {
        "active": True,
        "pattern": "San Francisco",
    },
    "ios-accessibility-assistant/ny-disallow": {
        "active": True,
        "pattern": "New York",
    },
}


def default_rules() -> list:
    """Rule instances in run order."""
    return [
        ArtboardsAllowedSizesRule(),
        SymbolsMinSizeRule(),
        InteractiveElementMinSizeRule(),
        SanFranciscoOpticalSizeRule(),
        NewYorkOpticalSizeRule(),
        FontWeightsAllowedRule(),
        IncludesEllipsisRule(),
    ]


def build_assistant() -> Assistant:
    """A fresh assistant with the bundled rules and default config."""
    return Assistant(
        name=ASSISTANT_NAME,
        rules=default_rules(),
        config=copy.deepcopy(DEFAULT_CONFIG),
    )


__all__ = [
    "ASSISTANT_NAME",
    "DEFAULT_CONFIG",
    "build_assistant",
    "default_rules",
    "ArtboardsAllowedSizesRule",
    "FontWeightsAllowedRule",
    "IncludesEllipsisRule",
    "InteractiveElementMinSizeRule",
    "NewYorkOpticalSizeRule",
    "SanFranciscoOpticalSizeRule",
    "SymbolsMinSizeRule",
]
