"""
Configuration for the Text Translation Tool.

Built-in defaults are merged with an optional ``config.json`` and then an
optional ``config.local.json`` next to the application.  Missing files are
simply skipped, so the tool runs with no configuration at all.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

APP_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_PATH = os.path.join(APP_DIR, "config.json")
CONFIG_LOCAL_PATH = os.path.join(APP_DIR, "config.local.json")
LOG_DIR = os.path.join(APP_DIR, "logs")

DEFAULTS: Dict[str, Any] = {
    "api": {
        "endpoint": "https://api.mymemory.translated.net/get",
        "timeout": None,
        "contact_email": None,
    },
    "languages": {
        "source": "auto",
        "target": "en",
        "speech_fallback": "en",
    },
    "ui": {
        "toast_ms": 2800,
        "paste_delay_ms": 100,
        "paste_count_limit": 5000,
    },
    "speech": {
        "rate": 0.95,
    },
}


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = json.load(f)
    except FileNotFoundError:
        return {}
    except ValueError as e:
        logger.warning("Ignoring %s: %s", path, e)
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring %s: top-level value is not an object", path)
        return {}
    return value


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _number(section: Dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("Ignoring non-numeric setting %s=%r", key, value)
        return default
    return value


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def endpoint(self) -> str:
        value = _section(self.raw, "api").get("endpoint")
        return value if isinstance(value, str) and value else DEFAULTS["api"]["endpoint"]

    @property
    def timeout(self) -> Optional[float]:
        value = _section(self.raw, "api").get("timeout")
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
        return None

    @property
    def contact_email(self) -> Optional[str]:
        value = _section(self.raw, "api").get("contact_email")
        return value if isinstance(value, str) and value else None

    @property
    def default_source(self) -> str:
        return str(_section(self.raw, "languages").get("source") or "auto")

    @property
    def default_target(self) -> str:
        return str(_section(self.raw, "languages").get("target") or "en")

    @property
    def speech_fallback(self) -> str:
        return str(_section(self.raw, "languages").get("speech_fallback") or "en")

    @property
    def toast_ms(self) -> int:
        return int(_number(_section(self.raw, "ui"), "toast_ms", DEFAULTS["ui"]["toast_ms"]))

    @property
    def paste_delay_ms(self) -> int:
        return int(_number(_section(self.raw, "ui"), "paste_delay_ms", DEFAULTS["ui"]["paste_delay_ms"]))

    @property
    def paste_count_limit(self) -> int:
        return int(_number(_section(self.raw, "ui"), "paste_count_limit", DEFAULTS["ui"]["paste_count_limit"]))

    @property
    def speech_rate(self) -> float:
        return float(_number(_section(self.raw, "speech"), "rate", DEFAULTS["speech"]["rate"]))


def build_settings(*overrides: Dict[str, Any]) -> Settings:
    """Merges the given override dicts, in order, on top of the defaults."""
    raw = copy.deepcopy(DEFAULTS)
    for override in overrides:
        raw = _merge_dicts(raw, copy.deepcopy(override))
    return Settings(raw=raw)


_settings: Optional[Settings] = None


def load_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = build_settings(_load_json(CONFIG_PATH), _load_json(CONFIG_LOCAL_PATH))
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = None
    settings = load_settings()
    logger.info("Settings reloaded (endpoint=%s)", settings.endpoint)
    return settings
