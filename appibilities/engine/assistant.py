"""A named bundle of rules and their default configuration."""

from dataclasses import dataclass, field
from typing import Any

from appibilities.engine.base import BaseRule
from appibilities.engine.registry import RuleRegistry


@dataclass
class Assistant:
    """Rules in run order plus default config in flat form, keyed by rule name.

    A rule without an entry in ``config`` is registered but inactive.
    """

    name: str
    rules: list[BaseRule] = field(default_factory=list)
    config: dict[str, dict[str, Any]] = field(default_factory=dict)

    def registry(self) -> RuleRegistry:
        return RuleRegistry(self.rules)
