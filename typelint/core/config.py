import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


CONFIG_FILE_NAMES = [
    "typelint.yaml",
    "typelint.yml",
    "typelint.json",
    ".typelint.yaml",
    ".typelint.yml",
    ".typelint.json",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "rules": {
        "enabled": [
            "BOX_VEC",
            "REDUNDANT_ALLOCATION",
            "RC_BUFFER",
            "VEC_BOX",
            "OPTION_OPTION",
            "LINKEDLIST",
            "BORROWED_BOX",
            "TYPE_COMPLEXITY",
        ],
        "severities": {
            "BOX_VEC": "Medium",
            "REDUNDANT_ALLOCATION": "Medium",
            "RC_BUFFER": "Low",
            "VEC_BOX": "Low",
            "OPTION_OPTION": "Low",
            "LINKEDLIST": "Low",
            "BORROWED_BOX": "Low",
            "TYPE_COMPLEXITY": "Medium",
        },
        "confidence": {
            "BOX_VEC": "High",
            "REDUNDANT_ALLOCATION": "High",
            "RC_BUFFER": "Medium",
            "VEC_BOX": "Medium",
            "OPTION_OPTION": "High",
            "LINKEDLIST": "Medium",
            "BORROWED_BOX": "High",
            "TYPE_COMPLEXITY": "High",
        },
    },
    "thresholds": {
        "type_complexity_threshold": 250,
        "vec_box_size_threshold": 4096,
    },
    "suppression": {
        "inline_comment": "typelint:ignore",
    },
    "reporting": {
        "format": "text",
        "fail_on_severity": "High",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _threshold(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Threshold '{name}' must be a non-negative integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    def __post_init__(self) -> None:
        thresholds = self.thresholds()
        for name in ("type_complexity_threshold", "vec_box_size_threshold"):
            _threshold(thresholds.get(name, 0), name)

    @classmethod
    def load(cls, path: Optional[str]) -> "Config":
        if not path:
            return cls(DEFAULT_CONFIG)
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in {".json"}:
            overrides = json.loads(raw)
        else:
            overrides = yaml.safe_load(raw) or {}
        logger.debug("Loaded configuration overrides from %s", config_path)
        return cls(_deep_merge(DEFAULT_CONFIG, overrides))

    @classmethod
    def from_overrides(cls, overrides: Dict[str, Any]) -> "Config":
        return cls(_deep_merge(DEFAULT_CONFIG, overrides))

    def rule_enabled(self, rule_id: str) -> bool:
        enabled = set(self.data.get("rules", {}).get("enabled", []))
        return rule_id in enabled

    def rule_severity(self, rule_id: str) -> str:
        return self.data.get("rules", {}).get("severities", {}).get(rule_id, "Medium")

    def rule_confidence(self, rule_id: str) -> str:
        return self.data.get("rules", {}).get("confidence", {}).get(rule_id, "Medium")

    def suppression_marker(self) -> str:
        return self.data.get("suppression", {}).get("inline_comment", "typelint:ignore")

    def thresholds(self) -> Dict[str, Any]:
        return self.data.get("thresholds", {})

    def type_complexity_threshold(self) -> int:
        return self.thresholds().get("type_complexity_threshold", 250)

    def vec_box_size_threshold(self) -> int:
        return self.thresholds().get("vec_box_size_threshold", 4096)

    def reporting(self) -> Dict[str, Any]:
        return self.data.get("reporting", {})


def find_config(start_path: str = ".") -> Optional[str]:
    """Search ``start_path`` and its parents for a typelint config file."""
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def create_default_config() -> str:
    return yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False)
