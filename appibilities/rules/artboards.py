"""Artboard sizing rules."""

from appibilities.engine.base import BaseRule
from appibilities.engine.context import RuleContext
from appibilities.engine.objects import ObjectKind
from appibilities.engine.options import boolean_option, string_array_option
from appibilities.rules.formatting import format_number, parse_size


class ArtboardsAllowedSizesRule(BaseRule):
    """Every artboard must match one of the configured ``WxH`` sizes.

    Width must match exactly. Height must match exactly, or be at least the
    configured height when ``allow_exceeding_height`` is set (scrolling
    content).
    """

    @property
    def name(self) -> str:
        return "appibilities/artboards-allowed-sizes"

    @property
    def title(self) -> str:
        return "Artboards should use one of the allowed sizes"

    @property
    def description(self) -> str:
        return (
            "For more realistic user interface designs it can be helpful "
            "to use a predefined list of view sizes"
        )

    @property
    def options(self):
        return [
            string_array_option(
                "sizes",
                title="Allowed sizes",
                description=(
                    "Artboard sizes that are allowed, for example 375x812. "
                    "Portrait and landscape formats must be defined separately"
                ),
                min_length=1,
            ),
            boolean_option(
                "allow_exceeding_height",
                title="Allow exceeding height",
                description="Artboards exceeding the allowed artboard height may be allowed for scrollable content",
                default=False,
            ),
        ]

    async def check(self, context: RuleContext) -> None:
        allow_exceeding_height: bool = context.get_option("allow_exceeding_height")
        sizes = [parse_size(value) for value in context.get_option("sizes")]

        for artboard in context.objects[ObjectKind.ARTBOARD]:
            width, height = artboard.frame.width, artboard.frame.height
            matching_width = [s for s in sizes if s.width == width]
            if any(
                height >= s.height if allow_exceeding_height else height == s.height
                for s in matching_width
            ):
                continue

            context.report(
                f"{format_number(width)}×{format_number(height)} is not an allowed size", artboard
            )
