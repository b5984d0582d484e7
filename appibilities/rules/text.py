"""Text content rules."""

from appibilities.engine.base import BaseRule
from appibilities.engine.context import RuleContext
from appibilities.engine.objects import ObjectKind

ELLIPSIS_FORMS = ("…", ". . .", "...")


class IncludesEllipsisRule(BaseRule):
    """Truncated text hides content unless a detail view shows the rest."""

    @property
    def name(self) -> str:
        return "ios-accessibility-assistant/includes-ellipsis"

    @property
    def title(self) -> str:
        return "Possible incorrect use of ellipsis (…)"

    @property
    def description(self) -> str:
        return "Reports a violation when text layer might be using ellipsis incorrectly"

    async def check(self, context: RuleContext) -> None:
        for layer in context.objects[ObjectKind.TEXT]:
            if any(form in layer.text for form in ELLIPSIS_FORMS):
                context.report(
                    "Text Layer is using ellipsis (…). Make sure users can access "
                    "a detail view to see the rest of the content",
                    layer,
                )
