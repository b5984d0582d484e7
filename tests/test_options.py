"""Unit tests for rule option declarations, configs and resolution."""

import pytest

from appibilities.engine.models import Severity
from appibilities.engine.options import (
    OptionValues,
    RuleConfig,
    boolean_option,
    integer_option,
    number_array_option,
    number_option,
    resolve_options,
    string_array_option,
    string_option,
)
from appibilities.errors import OptionMissing, OptionNotDeclared, OptionValidationFailed

OPTIONS = [
    number_option("min_size", minimum=1),
    string_option("name_pattern", default=".*button.*"),
    boolean_option("strict", default=False),
]


class TestRuleConfig:
    """Tests for the flat config form."""

    def test_from_dict_separates_reserved_keys(self):
        config = RuleConfig.from_dict(
            {"active": False, "severity": "error", "ruleTitle": "Custom", "min_size": 44}
        )
        assert config.active is False
        assert config.severity == "error"
        assert config.rule_title == "Custom"
        assert config.options == {"min_size": 44}

    def test_defaults(self):
        config = RuleConfig.from_dict({})
        assert config.active is True
        assert config.severity is None
        assert config.options == {}

    def test_to_dict_roundtrips_flat_form(self):
        flat = {"active": True, "min_size": 44, "severity": "info", "rule_title": "T"}
        assert RuleConfig.from_dict(flat).to_dict() == flat

    def test_coerce_passes_configs_through(self):
        config = RuleConfig(options={"a": 1})
        assert RuleConfig.coerce("test/rule", config) is config

    def test_coerce_reports_invalid_severity(self):
        with pytest.raises(OptionValidationFailed) as exc_info:
            RuleConfig.coerce("test/rule", {"severity": "fatal"})
        assert exc_info.value.rule_name == "test/rule"
        assert exc_info.value.problems[0].startswith("severity")


class TestResolveOptions:
    """Tests for resolve_options."""

    def test_defaults_fill_unconfigured_options(self):
        values = resolve_options("test/rule", OPTIONS, RuleConfig.from_dict({"min_size": 44}))
        assert values.get("min_size") == 44
        assert values.get("name_pattern") == ".*button.*"
        assert values.get("strict") is False

    def test_configured_value_overrides_default(self):
        values = resolve_options(
            "test/rule", OPTIONS, RuleConfig.from_dict({"min_size": 1, "strict": True})
        )
        assert values.get("strict") is True

    def test_undeclared_keys_are_ignored(self):
        values = resolve_options(
            "test/rule", OPTIONS, RuleConfig.from_dict({"min_size": 44, "unknown": "x"})
        )
        assert "unknown" not in values

    def test_wrong_type_fails_validation(self):
        with pytest.raises(OptionValidationFailed) as exc_info:
            resolve_options("test/rule", OPTIONS, RuleConfig.from_dict({"min_size": "44"}))
        assert "min_size" in str(exc_info.value)

    def test_minimum_is_enforced(self):
        with pytest.raises(OptionValidationFailed):
            resolve_options("test/rule", OPTIONS, RuleConfig.from_dict({"min_size": 0}))

    def test_string_constraints(self):
        options = [string_option("pattern", min_length=1)]
        with pytest.raises(OptionValidationFailed):
            resolve_options("test/rule", options, RuleConfig.from_dict({"pattern": ""}))

    def test_array_items_are_checked(self):
        options = [string_array_option("sizes", min_length=1)]
        with pytest.raises(OptionValidationFailed):
            resolve_options("test/rule", options, RuleConfig.from_dict({"sizes": ["375x812", 3]}))
        with pytest.raises(OptionValidationFailed):
            resolve_options("test/rule", options, RuleConfig.from_dict({"sizes": []}))

    def test_integer_rejects_floats(self):
        options = [integer_option("count")]
        with pytest.raises(OptionValidationFailed):
            resolve_options("test/rule", options, RuleConfig.from_dict({"count": 1.5}))

    def test_missing_required_option_is_reported_on_read(self):
        values = resolve_options("test/rule", OPTIONS, RuleConfig.from_dict({}))
        assert "min_size" not in values
        with pytest.raises(OptionMissing):
            values.get("min_size")


class TestOptionValues:
    """Tests for OptionValues lookups."""

    def test_undeclared_name(self):
        values = OptionValues("test/rule", ["a"], {"a": 1})
        with pytest.raises(OptionNotDeclared) as exc_info:
            values.get("b")
        assert exc_info.value.option_name == "b"

    def test_as_dict_is_a_copy(self):
        values = OptionValues("test/rule", ["a"], {"a": 1})
        values.as_dict()["a"] = 2
        assert values.get("a") == 1


class TestOptionSchema:
    """Tests for RuleOption.to_schema."""

    def test_includes_default_and_constraints(self):
        schema = number_option("min_size", title="Minimum size", default=44, minimum=1).to_schema()
        assert schema == {
            "name": "min_size",
            "type": "number",
            "title": "Minimum size",
            "description": "",
            "default": 44,
            "minimum": 1,
        }

    def test_omits_unset_default(self):
        assert "default" not in string_option("pattern").to_schema()


def test_severity_values():
    assert [s.value for s in Severity] == ["info", "warn", "error"]


def test_number_array_option():
    options = [number_array_option("steps", minimum=0, default=[1, 2.5])]
    values = resolve_options("test/rule", options, RuleConfig.from_dict({}))
    assert values.get("steps") == [1, 2.5]
    with pytest.raises(OptionValidationFailed):
        resolve_options("test/rule", options, RuleConfig.from_dict({"steps": [-1]}))
