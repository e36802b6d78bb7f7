"""YAML loading for agent definition files."""

from __future__ import annotations

from typing import Any, Dict, List

import yaml


class YamlValidationError(ValueError):
    """YAML schema validation error."""


def load_yaml(path: str) -> Dict[str, Any]:
    """Load YAML file and return data."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise YamlValidationError(f"YAMLの構文が不正です: {path}: {e}") from e
    except OSError as e:
        raise YamlValidationError(f"YAMLファイルを読み込めません: {path}: {e}") from e
    if not isinstance(data, dict):
        raise YamlValidationError("YAMLのルートはオブジェクトである必要があります")
    return data


def extract_agent_definitions(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return agent mappings from a single-agent or ``agents:`` list document.

    Field-level checks are left to the catalog; this only checks the shape and
    fills the optional ``description``/``tags`` that YAML authors tend to omit.
    """
    if "agents" in data:
        items = data["agents"]
        if not isinstance(items, list) or not items:
            raise YamlValidationError("agents は配列で指定してください")
    else:
        items = [data]

    definitions = []
    for item in items:
        if not isinstance(item, dict):
            raise YamlValidationError("agents の要素はオブジェクトで指定してください")
        if "name" not in item:
            raise YamlValidationError("必須フィールドが不足しています: name")
        definition = dict(item)
        definition.setdefault("description", "")
        if definition.get("tags") is None:
            definition["tags"] = []
        definitions.append(definition)
    return definitions
