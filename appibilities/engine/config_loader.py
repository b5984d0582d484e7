"""Rule config file loader — reads rule overrides from a JSON file.

File format:
    {
      "rules": {
        "appibilities/interactive-element-min-size": {"active": true, "min_size": 48},
        "ios-accessibility-assistant/includes-ellipsis": {"active": false}
      }
    }
"""

import json
from pathlib import Path
from typing import Any, Union

import structlog

from appibilities.errors import ConfigFileInvalid

logger = structlog.get_logger()

# Parsed files by resolved path
_config_cache: dict[str, dict[str, dict[str, Any]]] = {}


def load_rule_config_file(path: Union[str, Path]) -> dict[str, dict[str, Any]]:
    """Load rule name → flat config overrides from a JSON file.

    Raises:
        ConfigFileInvalid: the file is unreadable, not JSON, or not shaped
            like ``{"rules": {name: {...}}}``.
    """
    resolved = str(Path(path).resolve())
    if resolved in _config_cache:
        return _config_cache[resolved]

    try:
        data = json.loads(Path(resolved).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigFileInvalid(f"Cannot read rule config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigFileInvalid(f"Rule config {path} is not valid JSON: {e}") from e

    rules = data.get("rules") if isinstance(data, dict) else None
    if not isinstance(rules, dict) or not all(isinstance(v, dict) for v in rules.values()):
        raise ConfigFileInvalid(f"Rule config {path} must look like {{\"rules\": {{name: {{...}}}}}}")

    logger.info("rule_config_loaded", path=resolved, rules=len(rules))
    _config_cache[resolved] = rules
    return rules


def clear_config_cache() -> None:
    _config_cache.clear()
