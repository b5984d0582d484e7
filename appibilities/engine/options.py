"""Rule options — declaration helpers, per-rule config, and schema validation.

A rule declares its options as a list of ``RuleOption`` records. At run start
the declarations are compiled into a pydantic model, the merged configuration
is validated against it once, and the check reads the validated values through
``OptionValues``.

Usage:
    options = [
        number_option("min_size", title="Minimum size", minimum=1),
        boolean_option("allow_exceeding_height", default=False),
    ]
    values = resolve_options("my/rule", options, RuleConfig.from_dict({"min_size": 44}))
    values.get("min_size")  # 44
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic import ValidationError, create_model

from appibilities.engine.models import Severity
from appibilities.errors import OptionMissing, OptionNotDeclared, OptionValidationFailed


class _Unset:
    """Marks an option with no default."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class OptionType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_ARRAY = "string_array"
    NUMBER_ARRAY = "number_array"


@dataclass(frozen=True)
class RuleOption:
    """Declaration of one configurable rule option."""

    name: str
    type: OptionType
    title: str = ""
    description: str = ""
    default: Any = UNSET
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET

    def annotation(self) -> Any:
        """Python type with constraints, for the compiled schema."""
        if self.type == OptionType.STRING:
            return Annotated[
                StrictStr,
                Field(pattern=self.pattern, min_length=self.min_length, max_length=self.max_length),
            ]
        if self.type == OptionType.NUMBER:
            return Annotated[StrictFloat, Field(ge=self.minimum, le=self.maximum)]
        if self.type == OptionType.INTEGER:
            return Annotated[StrictInt, Field(ge=self.minimum, le=self.maximum)]
        if self.type == OptionType.BOOLEAN:
            return StrictBool
        if self.type == OptionType.STRING_ARRAY:
            item = Annotated[StrictStr, Field(pattern=self.pattern)]
            return Annotated[list[item], Field(min_length=self.min_length, max_length=self.max_length)]
        if self.type == OptionType.NUMBER_ARRAY:
            item = Annotated[StrictFloat, Field(ge=self.minimum, le=self.maximum)]
            return Annotated[list[item], Field(min_length=self.min_length, max_length=self.max_length)]
        raise ValueError(f"Unknown option type: {self.type}")

    def to_schema(self) -> dict:
        """Describe the option for rule listings."""
        schema: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
        }
        if self.has_default:
            schema["default"] = self.default
        for constraint in ("pattern", "min_length", "max_length", "minimum", "maximum"):
            value = getattr(self, constraint)
            if value is not None:
                schema[constraint] = value
        return schema


# ── Declaration helpers ──


def string_option(
    name: str,
    title: str = "",
    description: str = "",
    default: Any = UNSET,
    pattern: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> RuleOption:
    return RuleOption(
        name, OptionType.STRING, title, description, default,
        pattern=pattern, min_length=min_length, max_length=max_length,
    )


def number_option(
    name: str,
    title: str = "",
    description: str = "",
    default: Any = UNSET,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> RuleOption:
    return RuleOption(name, OptionType.NUMBER, title, description, default, minimum=minimum, maximum=maximum)


def integer_option(
    name: str,
    title: str = "",
    description: str = "",
    default: Any = UNSET,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> RuleOption:
    return RuleOption(name, OptionType.INTEGER, title, description, default, minimum=minimum, maximum=maximum)


def boolean_option(name: str, title: str = "", description: str = "", default: Any = UNSET) -> RuleOption:
    return RuleOption(name, OptionType.BOOLEAN, title, description, default)


def string_array_option(
    name: str,
    title: str = "",
    description: str = "",
    default: Any = UNSET,
    pattern: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> RuleOption:
    return RuleOption(
        name, OptionType.STRING_ARRAY, title, description, default,
        pattern=pattern, min_length=min_length, max_length=max_length,
    )


def number_array_option(
    name: str,
    title: str = "",
    description: str = "",
    default: Any = UNSET,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> RuleOption:
    return RuleOption(
        name, OptionType.NUMBER_ARRAY, title, description, default,
        min_length=min_length, max_length=max_length, minimum=minimum, maximum=maximum,
    )


# ── Per-rule configuration ──


def _problems(e: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]


# Keys of a raw rule config that are not option values
RESERVED_KEYS = {"active", "severity", "rule_title", "ruleTitle"}


class RuleConfig(BaseModel):
    """Configuration of one rule: activation, overrides and option values."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    active: StrictBool = True
    severity: Optional[Severity] = None
    rule_title: Optional[str] = None
    options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleConfig":
        """Create from the flat form ``{"active": true, "min_size": 44, ...}``."""
        return cls(
            active=data.get("active", True),
            severity=data.get("severity"),
            rule_title=data.get("rule_title", data.get("ruleTitle")),
            options={k: v for k, v in data.items() if k not in RESERVED_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"active": self.active, **self.options}
        if self.severity:
            result["severity"] = self.severity
        if self.rule_title:
            result["rule_title"] = self.rule_title
        return result

    @classmethod
    def coerce(cls, rule_name: str, data: "RuleConfig | Mapping[str, Any]") -> "RuleConfig":
        """Accept a config or its flat form, reporting bad values per rule.

        Raises:
            OptionValidationFailed: ``active``, ``severity`` or ``rule_title``
                has an invalid value.
        """
        if isinstance(data, RuleConfig):
            return data
        try:
            return cls.from_dict(data)
        except ValidationError as e:
            raise OptionValidationFailed(rule_name, _problems(e)) from e


# ── Resolution ──


class OptionValues:
    """Validated option values of one rule, read by name."""

    def __init__(self, rule_name: str, declared: Sequence[str], values: Mapping[str, Any]):
        self.rule_name = rule_name
        self._declared = frozenset(declared)
        self._values = MappingProxyType(dict(values))

    def get(self, name: str) -> Any:
        if name not in self._declared:
            raise OptionNotDeclared(self.rule_name, name)
        if name not in self._values:
            raise OptionMissing(self.rule_name, name)
        return self._values[name]

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: str) -> bool:
        return name in self._values


def compile_schema(rule_name: str, options: Sequence[RuleOption]) -> type[BaseModel]:
    """Build a pydantic model validating the declared options.

    Fields are addressed by alias so option names can never collide with
    BaseModel attributes. Unsupplied options keep the ``UNSET`` default,
    which is not validated.
    """
    fields = {
        f"option_{i}": (option.annotation(), Field(default=UNSET, alias=option.name))
        for i, option in enumerate(options)
    }
    model_name = "".join(part.title() for part in rule_name.replace("/", "-").split("-")) + "Options"
    return create_model(
        model_name,
        __config__=ConfigDict(extra="ignore", frozen=True, protected_namespaces=()),
        **fields,
    )


def resolve_options(
    rule_name: str,
    options: Sequence[RuleOption],
    config: RuleConfig,
    schema: Optional[type[BaseModel]] = None,
) -> OptionValues:
    """Merge declared defaults with configured values and validate them.

    Raises:
        OptionValidationFailed: a supplied value has the wrong type or breaks
            a constraint.
    """
    supplied = {o.name: o.default for o in options if o.has_default}
    supplied.update({k: v for k, v in config.options.items() if any(o.name == k for o in options)})

    schema = schema or compile_schema(rule_name, options)
    try:
        validated = schema.model_validate(supplied)
    except ValidationError as e:
        raise OptionValidationFailed(rule_name, _problems(e)) from e

    values = {}
    for i, option in enumerate(options):
        value = getattr(validated, f"option_{i}")
        if value is not UNSET:
            values[option.name] = value
    return OptionValues(rule_name, [o.name for o in options], values)
