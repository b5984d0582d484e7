"""Typography rules — system font optical sizes and allowed weights.

Fonts are identified by their PostScript name (``SFProText-Semibold``,
``NewYorkLarge-Regular``). Text layers without a font attribute are treated
as size 0 with the placeholder name ``fontname``.
"""

from typing import Callable

from appibilities.engine.base import BaseRule, Derived
from appibilities.engine.context import RuleContext
from appibilities.engine.objects import ObjectKind
from appibilities.engine.options import string_array_option, string_option
from appibilities.rules.formatting import font_family, format_number
from appibilities.rules.reference_data import SF_DISPLAY_MIN_SIZE

PLACEHOLDER_FONT = "fontname"

SF_FAMILY = "San Francisco"
SF_MARKER = "SF"

NY_FAMILY = "New York"
NY_MARKER = "NewYork"


def _font_of(layer) -> tuple[str, float]:
    return layer.font_name or PLACEHOLDER_FONT, layer.font_size or 0


class _FontFamilyRule(BaseRule):
    """Shared title, description and options of the per-family rules."""

    @property
    def title(self) -> Derived:
        return Derived(lambda options: f"Incorrect use of {options.get('pattern')} font")

    @property
    def description(self) -> Derived:
        return Derived(
            lambda options: (
                f"Reports a violation when text layers contain an incorrect use "
                f"of {options.get('pattern')} font"
            )
        )

    @property
    def options(self):
        return [
            string_option(
                "pattern",
                title="Font family",
                description="Display name of the font family this rule checks",
                min_length=1,
            ),
        ]


class SanFranciscoOpticalSizeRule(_FontFamilyRule):
    """SF below 20pt must use a Text cut, 20pt and above a Display cut."""

    @property
    def name(self) -> str:
        return "ios-accessibility-assistant/sf-disallow"

    async def check(self, context: RuleContext) -> None:
        # required even though only the title and description read it
        context.get_option("pattern")

        for layer in context.objects[ObjectKind.TEXT]:
            font_name, font_size = _font_of(layer)
            if SF_MARKER not in font_name:
                continue

            if font_size < SF_DISPLAY_MIN_SIZE and "Text" not in font_name:
                context.report(
                    f"Text Layers using “{SF_FAMILY}” should be set as \"Text\" at size "
                    f"{format_number(font_size)} (or when smaller than {SF_DISPLAY_MIN_SIZE} points). "
                    f"Currently using “{font_family(font_name)}”",
                    layer,
                )
            if font_size >= SF_DISPLAY_MIN_SIZE and "Display" not in font_name:
                context.report(
                    f"Text Layers using “{SF_FAMILY}” should be set as \"Display\" at size "
                    f"{format_number(font_size)} (or when {SF_DISPLAY_MIN_SIZE} points or larger). "
                    f"Currently using “{font_family(font_name)}”",
                    layer,
                )


# (applies to size, face that must appear in the font name, face label, size range text)
NEW_YORK_OPTICAL_SIZES: list[tuple[Callable[[float], bool], str, str, str]] = [
    (lambda size: size < 20, "Small", "Small", "smaller than 20 points"),
    # macOS reports the Medium cut as "Regular"
    (lambda size: 20 <= size <= 35, "Regular", "Medium", "between 20 and 35 points"),
    (lambda size: 36 <= size <= 53, "Large", "Large", "between 36 and 53 points"),
    (lambda size: size >= 54, "ExtraLarge", "Extra Large", "54 points or larger"),
]


class NewYorkOpticalSizeRule(_FontFamilyRule):
    """New York must use the optical size cut matching the point size."""

    @property
    def name(self) -> str:
        return "ios-accessibility-assistant/ny-disallow"

    async def check(self, context: RuleContext) -> None:
        # required even though only the title and description read it
        context.get_option("pattern")

        for layer in context.objects[ObjectKind.TEXT]:
            font_name, font_size = _font_of(layer)
            if NY_MARKER not in font_name:
                continue

            for applies, face, label, size_range in NEW_YORK_OPTICAL_SIZES:
                if applies(font_size) and face not in font_name:
                    context.report(
                        f"Text Layers using “{NY_FAMILY}” should be set as \"{label}\" at size "
                        f"{format_number(font_size)} (or when {size_range}). "
                        f"Currently using “{font_family(font_name)}”",
                        layer,
                    )


class FontWeightsAllowedRule(BaseRule):
    """The weight suffix of every text layer's font must be in ``pattern``."""

    @property
    def name(self) -> str:
        return "ios-accessibility-assistant/font-weights-allowed"

    @property
    def title(self) -> str:
        return "Incorrect use of font weights"

    @property
    def description(self) -> Derived:
        return Derived(
            lambda options: (
                "Reports a violation when text layer is using a non-acceptable weight "
                f"(”{', '.join(options.get('pattern') or [])}”)"
            )
        )

    @property
    def options(self):
        return [
            string_array_option(
                "pattern",
                title="Allowed weights",
                description="Font weight names allowed after the dash of a PostScript font name",
                min_length=1,
            ),
        ]

    async def check(self, context: RuleContext) -> None:
        allowed: list[str] = context.get_option("pattern")

        for layer in context.objects[ObjectKind.TEXT]:
            font_name, _ = _font_of(layer)
            parts = font_name.split("-")
            weight = parts[1] if len(parts) > 1 else None
            if weight in allowed:
                continue

            context.report(
                f"Text Layer is using “{weight or 'no weight'}”. "
                f"The only allowed weights are ”{', '.join(allowed)}”",
                layer,
            )
