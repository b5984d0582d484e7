"""Exception taxonomy for document loading, option resolution and rule execution.

Only ``DocumentMalformed`` is fatal to a run. Every other error is caught by
the runner and recorded as a ``RuleError`` for the rule that raised it.
"""

from typing import Optional


class AppibilitiesError(Exception):
    """Base class for all errors raised by this package."""


class DocumentMalformed(AppibilitiesError):
    """The document tree is missing required fields or is otherwise unusable."""

    def __init__(self, message: str, pointer: Optional[str] = None):
        self.pointer = pointer
        super().__init__(f"{message} (at {pointer})" if pointer else message)


class ConfigFileInvalid(AppibilitiesError):
    """A rule configuration file could not be read or parsed."""


class DuplicateRule(AppibilitiesError):
    """Two rules were registered under the same name."""


class RuleOptionError(AppibilitiesError):
    """Base class for per-rule option problems."""

    def __init__(self, rule_name: str, message: str):
        self.rule_name = rule_name
        super().__init__(message)


class OptionValidationFailed(RuleOptionError):
    """Configured option values do not satisfy the rule's declared schema."""

    def __init__(self, rule_name: str, problems: list[str]):
        self.problems = problems
        super().__init__(
            rule_name,
            f"Invalid options for rule '{rule_name}': {'; '.join(problems)}",
        )


class OptionNotDeclared(RuleOptionError):
    """A check asked for an option its rule never declared."""

    def __init__(self, rule_name: str, option_name: str):
        self.option_name = option_name
        super().__init__(
            rule_name, f"Rule '{rule_name}' did not declare an option named '{option_name}'"
        )


class OptionMissing(RuleOptionError):
    """A declared option has neither a default nor a configured value."""

    def __init__(self, rule_name: str, option_name: str):
        self.option_name = option_name
        super().__init__(
            rule_name, f"Option '{option_name}' of rule '{rule_name}' has no value"
        )


class ContextClosed(AppibilitiesError):
    """A rule context was used after its invocation settled."""
