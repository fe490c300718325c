from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

USER_CONFIG_PATH = Path.home() / ".taskg_config.yaml"

THEME_ENV = "TASKG_THEME"
TASK_BIN_ENV = "TASKG_TASK_BIN"
LOG_FILE_ENV = "TASKG_LOG_FILE"

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _get_str(key: str, env: Optional[str] = None) -> str:
    if env:
        value = os.getenv(env, "").strip()
        if value:
            return value
    raw = _load_config().get(key, "")
    return str(raw).strip() if raw is not None else ""


def get_user_theme() -> str:
    return _get_str("theme", THEME_ENV)


def get_user_task_binary() -> str:
    return _get_str("task_binary", TASK_BIN_ENV)


def get_user_log_file() -> str:
    return _get_str("log_file", LOG_FILE_ENV)


def get_user_lang() -> str:
    return _get_str("lang")


def get_user_mouse(default: bool = True) -> bool:
    raw = _load_config().get("mouse", default)
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return default
