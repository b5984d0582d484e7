"""Ordered set of rules with unique names."""

from typing import Iterable, Iterator, Optional

from appibilities.engine.base import BaseRule
from appibilities.errors import DuplicateRule


class RuleRegistry:
    """Rules in registration order; registration order is run order."""

    def __init__(self, rules: Iterable[BaseRule] = ()):
        self._rules: dict[str, BaseRule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: BaseRule) -> None:
        if rule.name in self._rules:
            raise DuplicateRule(f"A rule named '{rule.name}' is already registered")
        self._rules[rule.name] = rule

    def unregister(self, name: str) -> bool:
        """Remove a rule by name. Returns False if it was not registered."""
        return self._rules.pop(name, None) is not None

    def get(self, name: str) -> Optional[BaseRule]:
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def __iter__(self) -> Iterator[BaseRule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules
