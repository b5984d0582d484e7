"""Base rule — abstract class implementing the Strategy Pattern.

Each rule is a standalone, independently testable unit. New rules are added
by registering them with an assistant, without modifying the runner.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel

from appibilities.engine.options import RuleOption, compile_schema

if TYPE_CHECKING:
    from appibilities.engine.context import RuleContext


@dataclass(frozen=True)
class Static:
    """Text that does not depend on configuration."""

    text: str

    def render(self, options: Mapping[str, Any]) -> str:
        return self.text


@dataclass(frozen=True)
class Derived:
    """Text computed from the rule's option values."""

    fn: Callable[[Mapping[str, Any]], str]

    def render(self, options: Mapping[str, Any]) -> str:
        return self.fn(options)


RuleText = Union[Static, Derived]


def as_text(value: Union[str, RuleText, Callable[[Mapping[str, Any]], str]]) -> RuleText:
    """Normalize a plain string or callable into a ``RuleText`` variant."""
    if isinstance(value, (Static, Derived)):
        return value
    if isinstance(value, str):
        return Static(value)
    if callable(value):
        return Derived(value)
    raise TypeError(f"Rule text must be a string or callable, got {type(value).__name__}")


class BaseRule(ABC):
    """Abstract base for all document rules.

    Contract:
        - check() is deterministic: same document and options → same reports
        - check() reports through the context and returns nothing
        - check() may be a coroutine; the runner awaits it before moving on
    """

    _schema: Optional[type[BaseModel]] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Globally unique rule name, e.g. ``appibilities/symbols-min-size``."""
        ...

    @property
    def title(self) -> Union[str, RuleText]:
        return self.name

    @property
    def description(self) -> Union[str, RuleText]:
        return ""

    @property
    def options(self) -> list[RuleOption]:
        """Declared options. Default: none."""
        return []

    @abstractmethod
    async def check(self, context: "RuleContext") -> None:
        """Inspect ``context.objects`` and call ``context.report()`` per violation."""
        ...

    def option_schema(self) -> type[BaseModel]:
        """Compiled pydantic model for the declared options (built once per rule)."""
        if self._schema is None:
            self._schema = compile_schema(self.name, self.options)
        return self._schema

    def render_title(self, options: Mapping[str, Any]) -> str:
        return as_text(self.title).render(options)

    def render_description(self, options: Mapping[str, Any]) -> str:
        return as_text(self.description).render(options)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
