"""Assistant engine — resolves configuration and runs an assistant's rules.

This is the main entry point for linting a document with the bundled assistant.

Usage:
    engine = AssistantEngine()
    result = await engine.run(document_json, {"appibilities/symbols-min-size": {"min_size": 48}})
    for violation in result.violations:
        ...
"""

import asyncio
from typing import Any, Mapping, Optional, Union

import structlog

from appibilities.config import get_settings
from appibilities.document.models import Document
from appibilities.engine.assistant import Assistant
from appibilities.engine.base import BaseRule, Static, as_text
from appibilities.engine.config_loader import load_rule_config_file
from appibilities.engine.models import AssistantResult
from appibilities.engine.options import RESERVED_KEYS, RuleConfig, resolve_options
from appibilities.engine.runner import RuleRunner, is_active
from appibilities.errors import DuplicateRule, RuleOptionError
from appibilities.rules import build_assistant

logger = structlog.get_logger()

RuleOverrides = Mapping[str, Mapping[str, Any]]


class AssistantEngine:
    """Runs one assistant's rules with layered configuration.

    Config layers, later wins:
        1. option defaults declared by each rule
        2. the assistant's default config
        3. the JSON file at ``config_path`` (``ASSISTANT_CONFIG_PATH``)
        4. per-call overrides
    """

    def __init__(self, assistant: Optional[Assistant] = None, config_path: Optional[str] = None):
        settings = get_settings()
        self.assistant = assistant or build_assistant()
        self.config_path = settings.ASSISTANT_CONFIG_PATH if config_path is None else config_path
        self.runner = RuleRunner(default_severity=settings.DEFAULT_SEVERITY)

    def resolve_configs(self, overrides: Optional[RuleOverrides] = None) -> dict[str, dict[str, Any]]:
        """Merge config layers into rule name → flat config."""
        layers: list[RuleOverrides] = [self.assistant.config]
        if self.config_path:
            layers.append(load_rule_config_file(self.config_path))
        if overrides:
            layers.append(overrides)

        known = {rule.name for rule in self.assistant.rules}
        merged: dict[str, dict[str, Any]] = {}
        for layer in layers:
            for name, config in layer.items():
                if name not in known:
                    logger.warning("unknown_rule_config", rule=name, assistant=self.assistant.name)
                    continue
                merged[name] = {**merged.get(name, {}), **config}
        return merged

    async def run(
        self,
        document: Union[Document, dict, str],
        overrides: Optional[RuleOverrides] = None,
    ) -> AssistantResult:
        """Lint ``document`` with every active rule of the assistant."""
        registry = self.assistant.registry()
        result = await self.runner.run(document, registry, self.resolve_configs(overrides))

        logger.info(
            "assistant_run_complete",
            assistant=self.assistant.name,
            summary=result.summary,
            rule_errors=[e.rule_name for e in result.rule_errors],
            duration_ms=result.duration_ms,
            rule_timings=result.rule_timings,
        )
        return result

    def run_sync(
        self,
        document: Union[Document, dict, str],
        overrides: Optional[RuleOverrides] = None,
    ) -> AssistantResult:
        """Blocking wrapper around ``run`` for callers without an event loop."""
        return asyncio.run(self.run(document, overrides))

    def describe_rules(self, overrides: Optional[RuleOverrides] = None) -> list[dict[str, Any]]:
        """Rules with titles and descriptions rendered for the resolved config."""
        configs = self.resolve_configs(overrides)
        described = []
        for rule in self.assistant.registry():
            config = configs.get(rule.name, {})
            options = {o.name: o.default for o in rule.options if o.has_default}
            options.update({k: v for k, v in config.items() if k not in RESERVED_KEYS})
            title, description = self._render_texts(rule, config)

            described.append({
                "name": rule.name,
                "title": config.get("rule_title") or config.get("ruleTitle") or title,
                "description": description,
                "active": is_active(configs.get(rule.name)),
                "options": [o.to_schema() for o in rule.options],
                "config": options,
            })
        return described

    @staticmethod
    def _render_texts(rule: BaseRule, config: Mapping[str, Any]) -> tuple[str, str]:
        """Title and description rendered from validated option values.

        When the configured options do not validate, option-derived texts fall
        back to the rule name and an empty description.
        """
        title, description = as_text(rule.title), as_text(rule.description)
        try:
            values = resolve_options(
                rule.name, rule.options, RuleConfig.coerce(rule.name, config), rule.option_schema()
            )
        except RuleOptionError as e:
            logger.warning("rule_texts_unrendered", rule=rule.name, error=str(e))
            return (
                title.render({}) if isinstance(title, Static) else rule.name,
                description.render({}) if isinstance(description, Static) else "",
            )

        options = values.as_dict()
        return title.render(options), description.render(options)

    def add_rule(self, rule: BaseRule, config: Optional[Mapping[str, Any]] = None) -> None:
        """Append a rule, optionally with its default config."""
        if any(r.name == rule.name for r in self.assistant.rules):
            raise DuplicateRule(f"A rule named '{rule.name}' is already registered")
        self.assistant.rules.append(rule)
        if config is not None:
            self.assistant.config[rule.name] = dict(config)

    def remove_rule(self, rule_name: str) -> None:
        """Remove a rule and its default config by name."""
        self.assistant.rules = [r for r in self.assistant.rules if r.name != rule_name]
        self.assistant.config.pop(rule_name, None)


# Module-level singleton
assistant_engine = AssistantEngine()
