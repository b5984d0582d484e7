"""Tap target sizing rules — interactive layers and button-like symbols."""

import re

from appibilities.engine.base import BaseRule, Derived
from appibilities.engine.context import RuleContext
from appibilities.engine.objects import ObjectKind
from appibilities.engine.options import number_option, string_option
from appibilities.rules.formatting import format_number


def _min_size_title(subject: str) -> Derived:
    def render(options) -> str:
        size = format_number(options.get("min_size", 0))
        return f"{subject} should have a minimum size of {size}×{size}"

    return Derived(render)


class SymbolsMinSizeRule(BaseRule):
    """Symbol instances whose name matches ``name_pattern`` must be min×min."""

    @property
    def name(self) -> str:
        return "appibilities/symbols-min-size"

    @property
    def title(self) -> Derived:
        return _min_size_title("Symbol instances")

    @property
    def description(self) -> str:
        return "Small tap areas can cause frustration for people using your app"

    @property
    def options(self):
        return [
            number_option(
                "min_size",
                title="Minimum size",
                description="A tappable area's width and height must both be at least the minimum size",
                minimum=1,
            ),
            string_option(
                "name_pattern",
                title="Layer name pattern",
                description="Name pattern to match symbol instance layers",
            ),
        ]

    async def check(self, context: RuleContext) -> None:
        min_size: float = context.get_option("min_size")
        name_pattern = re.compile(context.get_option("name_pattern"))

        for instance in context.objects[ObjectKind.SYMBOL_INSTANCE]:
            if not name_pattern.search(instance.name.lower()):
                continue

            width, height = instance.frame.width, instance.frame.height
            if width >= min_size and height >= min_size:
                continue

            context.report(
                f"Symbol instance has a size of {format_number(width)}x{format_number(height)} "
                f"(minimum should be {format_number(min_size)}×{format_number(min_size)})",
                instance,
            )


class InteractiveElementMinSizeRule(BaseRule):
    """Any layer with a prototyping flow must be at least min×min."""

    @property
    def name(self) -> str:
        return "appibilities/interactive-element-min-size"

    @property
    def title(self) -> Derived:
        return _min_size_title("Interactive elements")

    @property
    def description(self) -> str:
        return "Small tap areas can cause frustration for people using your app"

    @property
    def options(self):
        return [
            number_option(
                "min_size",
                title="Minimum size",
                description="An interactive element's width and height must both be at least the minimum size",
                minimum=1,
            ),
        ]

    async def check(self, context: RuleContext) -> None:
        min_size: float = context.get_option("min_size")

        for element in context.objects[ObjectKind.ANY_LAYER]:
            if not element.is_interactive:
                continue
            width, height = element.frame.width, element.frame.height
            if width >= min_size and height >= min_size:
                continue

            context.report(
                f"Interactive element has a size of {format_number(width)}×{format_number(height)} "
                f"(minimum should be {format_number(min_size)}×{format_number(min_size)})",
                element,
            )
