"""Engine models — severity levels, violations, rule errors and the run result.

Every run is deterministic: same document and configuration → same violations
in the same order, same rule errors.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Violation severity levels."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class RuleErrorKind(str, Enum):
    """Why a rule failed to produce a complete result."""

    OPTION_VALIDATION_FAILED = "option_validation_failed"
    OPTION_NOT_DECLARED = "option_not_declared"
    OPTION_MISSING = "option_missing"
    CHECK_EXECUTION_ERROR = "check_execution_error"


class Violation(BaseModel):
    """A single reported problem, attributed to one rule and one node."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    rule_name: str
    message: str
    severity: Severity
    node_id: str
    node_name: str = ""
    node_class: str = ""
    pointer: Optional[str] = None  # JSON pointer of the node in the document


class RuleError(BaseModel):
    """A rule that could not run to completion."""

    model_config = ConfigDict(use_enum_values=True, frozen=True, arbitrary_types_allowed=True)

    rule_name: str
    kind: RuleErrorKind
    error: str
    error_type: str
    exception: Optional[BaseException] = Field(default=None, exclude=True, repr=False)


class AssistantResult(BaseModel):
    """Complete output of a run: violations and per-rule errors, kept separate."""

    violations: list[Violation] = Field(default_factory=list)
    rule_errors: list[RuleError] = Field(default_factory=list)
    summary: dict[str, int] = Field(
        description="Count of violations by severity",
        default_factory=lambda: {s.value: 0 for s in Severity},
    )
    rules_run: list[str] = Field(default_factory=list)
    rule_timings: dict[str, float] = Field(default_factory=dict)
    duration_ms: float = 0.0

    @classmethod
    def build(
        cls,
        violations: list[Violation],
        rule_errors: list[RuleError],
        rules_run: Optional[list[str]] = None,
        rule_timings: Optional[dict[str, float]] = None,
        duration_ms: float = 0.0,
    ) -> "AssistantResult":
        """Build a result, computing the severity summary."""
        summary = {s.value: 0 for s in Severity}
        for violation in violations:
            summary[violation.severity] += 1

        return cls(
            violations=list(violations),
            rule_errors=list(rule_errors),
            summary=summary,
            rules_run=list(rules_run or []),
            rule_timings=dict(rule_timings or {}),
            duration_ms=round(duration_ms, 2),
        )

    def violations_for(self, rule_name: str) -> list[Violation]:
        """Violations reported by one rule, in emission order."""
        return [v for v in self.violations if v.rule_name == rule_name]

    def errors_for(self, rule_name: str) -> list[RuleError]:
        return [e for e in self.rule_errors if e.rule_name == rule_name]
