"""Rule runner — runs every active rule against one document.

This is the core of the engine. The document is indexed once, then each
active rule runs in registration order with a fresh ``RuleContext``:

    Pending → Validating → Invoking → Succeeded | Failed

Rules run strictly one after another, even when their checks are coroutines.
A rule that fails (bad options, or an exception from its check) yields exactly
one ``RuleError``; violations it reported before failing are kept, and the
remaining rules still run. Only ``DocumentMalformed`` aborts a run.

Usage:
    runner = RuleRunner()
    result = await runner.run(document, rules, {"my/rule": {"active": True}})
"""

import inspect
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

import structlog

from appibilities.document.loader import load_document
from appibilities.document.models import Document
from appibilities.engine.aggregator import ViolationAggregator
from appibilities.engine.base import BaseRule
from appibilities.engine.context import RuleContext
from appibilities.engine.models import AssistantResult, RuleError, RuleErrorKind, Severity
from appibilities.engine.objects import ObjectIndex
from appibilities.engine.options import RuleConfig, resolve_options
from appibilities.engine.registry import RuleRegistry
from appibilities.errors import (
    OptionMissing,
    OptionNotDeclared,
    OptionValidationFailed,
    RuleOptionError,
)

logger = structlog.get_logger()

ConfigInput = Union[RuleConfig, Mapping[str, Any]]

_ERROR_KINDS: list[tuple[type[Exception], RuleErrorKind]] = [
    (OptionValidationFailed, RuleErrorKind.OPTION_VALIDATION_FAILED),
    (OptionNotDeclared, RuleErrorKind.OPTION_NOT_DECLARED),
    (OptionMissing, RuleErrorKind.OPTION_MISSING),
]


class RuleState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RuleOutcome:
    """What happened to one rule during a run."""

    rule_name: str
    state: RuleState = RuleState.PENDING
    violations: int = 0
    error: Optional[RuleError] = None
    duration_ms: float = 0.0


def error_kind(exc: BaseException) -> RuleErrorKind:
    for exc_type, kind in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            return kind
    return RuleErrorKind.CHECK_EXECUTION_ERROR


def is_active(config: Optional[ConfigInput]) -> bool:
    """A rule runs only when it has a config and that config is active.

    Only a literal ``true`` (or an absent key) activates a flat config; invalid
    values such as ``"false"`` are rejected when the config is coerced.
    """
    if config is None:
        return False
    if isinstance(config, RuleConfig):
        return config.active
    return config.get("active", True) is True


class RuleRunner:
    """Runs rules sequentially against a shared, read-only object index."""

    def __init__(self, default_severity: Severity = Severity.WARN):
        self.default_severity = Severity(default_severity)

    async def run(
        self,
        document: Union[Document, dict, str],
        rules: Iterable[BaseRule],
        configs: Mapping[str, ConfigInput],
    ) -> AssistantResult:
        """Run every active rule and collect violations and rule errors.

        Args:
            document: Document model, or raw document contents to load
            rules: Rules in run order; names must be unique
            configs: Rule name → config (``RuleConfig`` or flat dict)

        Returns:
            AssistantResult with violations in emission order and rule
            errors in rule order

        Raises:
            DocumentMalformed: the document cannot be loaded or indexed
            DuplicateRule: two rules share a name
        """
        registry = rules if isinstance(rules, RuleRegistry) else RuleRegistry(rules)
        start_time = time.perf_counter()

        if not isinstance(document, Document):
            document = load_document(document)
        index = ObjectIndex.build(document)

        aggregator = ViolationAggregator()
        outcomes: list[RuleOutcome] = []

        for rule in registry:
            raw_config = configs.get(rule.name)
            if raw_config is None:
                logger.debug("rule_skipped", rule=rule.name, reason="unconfigured")
                continue

            try:
                config = RuleConfig.coerce(rule.name, raw_config)
            except OptionValidationFailed as e:
                outcomes.append(self._fail(RuleOutcome(rule_name=rule.name), e, time.perf_counter()))
                continue

            if not config.active:
                logger.debug("rule_skipped", rule=rule.name, reason="inactive")
                continue
            outcomes.append(await self._run_rule(rule, config, index, aggregator))

        result = AssistantResult.build(
            violations=aggregator.violations,
            rule_errors=[o.error for o in outcomes if o.error is not None],
            rules_run=[o.rule_name for o in outcomes],
            rule_timings={o.rule_name: o.duration_ms for o in outcomes},
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

        logger.info(
            "rules_run_complete",
            rules_run=len(outcomes),
            nodes=len(index),
            violations=len(result.violations),
            rule_errors=len(result.rule_errors),
            duration_ms=result.duration_ms,
        )
        return result

    async def _run_rule(
        self,
        rule: BaseRule,
        config: RuleConfig,
        index: ObjectIndex,
        aggregator: ViolationAggregator,
    ) -> RuleOutcome:
        outcome = RuleOutcome(rule_name=rule.name)
        start = time.perf_counter()
        logger.debug("rule_started", rule=rule.name)

        outcome.state = RuleState.VALIDATING
        try:
            values = resolve_options(rule.name, rule.options, config, rule.option_schema())
        except RuleOptionError as e:
            return self._fail(outcome, e, start)

        outcome.state = RuleState.INVOKING
        context = RuleContext(
            rule.name,
            index,
            values,
            aggregator,
            default_severity=config.severity or self.default_severity,
        )
        try:
            result = rule.check(context)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._fail(outcome, e, start)
        else:
            outcome.state = RuleState.SUCCEEDED
            outcome.duration_ms = self._elapsed(start)
        finally:
            context.close()
            outcome.violations = context.reported_count

        logger.debug(
            "rule_finished",
            rule=rule.name,
            state=outcome.state.value,
            violations=outcome.violations,
            duration_ms=outcome.duration_ms,
        )
        return outcome

    def _fail(self, outcome: RuleOutcome, exc: Exception, start: float) -> RuleOutcome:
        outcome.state = RuleState.FAILED
        outcome.duration_ms = self._elapsed(start)
        outcome.error = RuleError(
            rule_name=outcome.rule_name,
            kind=error_kind(exc),
            error=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            exception=exc,
        )
        logger.warning(
            "rule_failed",
            rule=outcome.rule_name,
            kind=outcome.error.kind,
            error=outcome.error.error,
            error_type=outcome.error.error_type,
        )
        return outcome

    @staticmethod
    def _elapsed(start: float) -> float:
        return round((time.perf_counter() - start) * 1000, 2)
