"""Rule context — the facade a rule's check sees during one invocation.

A context is bound to exactly one rule. Everything reported through it is
attributed to that rule, and it stops accepting calls once the invocation
has settled, so a stray coroutine cannot leak reports into another rule.
"""

from typing import Any, Optional

import structlog

from appibilities.document.models import Layer
from appibilities.engine.aggregator import ViolationAggregator
from appibilities.engine.models import Severity, Violation
from appibilities.engine.objects import ObjectIndex
from appibilities.engine.options import OptionValues
from appibilities.errors import ContextClosed

logger = structlog.get_logger()


class RuleContext:
    """Objects, options and the reporter for one rule invocation."""

    def __init__(
        self,
        rule_name: str,
        index: ObjectIndex,
        options: OptionValues,
        aggregator: ViolationAggregator,
        default_severity: Severity = Severity.WARN,
    ):
        self.rule_name = rule_name
        self._index = index
        self._options = options
        self._aggregator = aggregator
        self._default_severity = Severity(default_severity)
        self._reported = 0
        self._closed = False

    @property
    def objects(self) -> ObjectIndex:
        """Document nodes by kind: ``context.objects[ObjectKind.TEXT]``."""
        return self._index

    def get_option(self, name: str) -> Any:
        """Validated value of a declared option.

        Raises:
            OptionNotDeclared: the rule did not declare ``name``.
            OptionMissing: ``name`` has no default and was not configured.
        """
        self._ensure_open()
        return self._options.get(name)

    def report(self, message: str, node: Layer, severity: Optional[Severity] = None) -> Violation:
        """Record a violation against ``node``."""
        self._ensure_open()
        node_id = getattr(node, "object_id", None)
        if not node_id:
            raise TypeError(f"Cannot report against {type(node).__name__}: it has no object id")

        violation = Violation(
            rule_name=self.rule_name,
            message=message,
            severity=Severity(severity) if severity else self._default_severity,
            node_id=node_id,
            node_name=getattr(node, "name", ""),
            node_class=getattr(node, "class_", ""),
            pointer=self._index.pointer_of(node),
        )
        self._aggregator.add(violation)
        self._reported += 1
        logger.debug("violation_reported", rule=self.rule_name, node_id=node_id)
        return violation

    @property
    def reported_count(self) -> int:
        return self._reported

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ContextClosed(f"Context of rule '{self.rule_name}' is closed")
