"""Unit tests for RuleRegistry and ViolationAggregator."""

import pytest

from appibilities.engine.aggregator import ViolationAggregator
from appibilities.engine.models import Violation
from appibilities.engine.registry import RuleRegistry
from appibilities.errors import DuplicateRule
from tests.conftest import ReportEveryTextRule


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_registration_order_is_iteration_order(self):
        registry = RuleRegistry([ReportEveryTextRule("b"), ReportEveryTextRule("a")])
        registry.register(ReportEveryTextRule("c"))
        assert registry.names() == ["b", "a", "c"]
        assert [rule.name for rule in registry] == ["b", "a", "c"]
        assert len(registry) == 3

    def test_duplicate_names_are_rejected(self):
        registry = RuleRegistry([ReportEveryTextRule("a")])
        with pytest.raises(DuplicateRule):
            registry.register(ReportEveryTextRule("a"))

    def test_get_and_contains(self):
        rule = ReportEveryTextRule("a")
        registry = RuleRegistry([rule])
        assert registry.get("a") is rule
        assert registry.get("missing") is None
        assert "a" in registry

    def test_unregister(self):
        registry = RuleRegistry([ReportEveryTextRule("a"), ReportEveryTextRule("b")])
        assert registry.unregister("a") is True
        assert registry.unregister("a") is False
        assert registry.names() == ["b"]


class TestViolationAggregator:
    """Tests for ViolationAggregator."""

    @staticmethod
    def _violation(rule_name: str, node_id: str = "n1") -> Violation:
        return Violation(rule_name=rule_name, message="m", severity="warn", node_id=node_id)

    def test_keeps_emission_order_and_duplicates(self):
        aggregator = ViolationAggregator()
        for rule_name in ("r1", "r2", "r1", "r1"):
            aggregator.add(self._violation(rule_name))

        assert [v.rule_name for v in aggregator.violations] == ["r1", "r2", "r1", "r1"]
        assert aggregator.count_for("r1") == 3
        assert len(aggregator) == 4

    def test_violations_returns_a_copy(self):
        aggregator = ViolationAggregator()
        aggregator.add(self._violation("r1"))
        aggregator.violations.clear()
        assert len(aggregator) == 1
