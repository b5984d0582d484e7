"""Rule engine — indexes a document and runs rules against it.

Usage:
    from appibilities.engine import RuleRunner

    result = await RuleRunner().run(document, rules, configs)
    result.violations, result.rule_errors
"""

from appibilities.engine.assistant import Assistant
from appibilities.engine.base import BaseRule, Derived, Static
from appibilities.engine.context import RuleContext
from appibilities.engine.models import AssistantResult, RuleError, RuleErrorKind, Severity, Violation
from appibilities.engine.objects import ObjectIndex, ObjectKind
from appibilities.engine.options import RuleConfig, RuleOption
from appibilities.engine.registry import RuleRegistry
from appibilities.engine.runner import RuleOutcome, RuleRunner, RuleState

__all__ = [
    "Assistant",
    "BaseRule",
    "Derived",
    "Static",
    "RuleContext",
    "AssistantResult",
    "RuleError",
    "RuleErrorKind",
    "Severity",
    "Violation",
    "ObjectIndex",
    "ObjectKind",
    "RuleConfig",
    "RuleOption",
    "RuleRegistry",
    "RuleOutcome",
    "RuleRunner",
    "RuleState",
]
