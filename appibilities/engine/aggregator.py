"""Append-only violation store shared by every rule in a run."""

from appibilities.engine.models import Violation


class ViolationAggregator:
    """Collects violations in emission order.

    Nothing is deduplicated or reordered; a rule reporting the same node
    twice produces two violations.
    """

    def __init__(self):
        self._violations: list[Violation] = []

    def add(self, violation: Violation) -> None:
        self._violations.append(violation)

    @property
    def violations(self) -> list[Violation]:
        return list(self._violations)

    def count_for(self, rule_name: str) -> int:
        return sum(1 for v in self._violations if v.rule_name == rule_name)

    def __len__(self) -> int:
        return len(self._violations)
