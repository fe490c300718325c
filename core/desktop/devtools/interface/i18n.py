"""UI string lookup over LANG_PACK.

Language order: TASKG_LANG, the caller's choice, the ``lang`` config key, then
the process locale (LC_ALL, LC_MESSAGES, LANG). Anything that does not name a
packaged language resolves to English, and tests always see English.
"""

import os
from typing import Optional

from config import get_user_lang
from core.desktop.devtools.interface.constants import LANG_PACK

BASE_LANG = "en"
LOCALE_ENV = ("LC_ALL", "LC_MESSAGES", "LANG")


def normalize_lang(value: Optional[str]) -> str:
    """Map a language tag or locale name ('ru_RU.UTF-8') to a packaged language, or ''."""
    if not value:
        return ""
    tag = value.strip().split(".", 1)[0].split("@", 1)[0].replace("-", "_").lower()
    for candidate in (tag, tag.split("_", 1)[0]):
        if candidate in LANG_PACK:
            return candidate
    return ""


def _locale_lang() -> str:
    for name in LOCALE_ENV:
        lang = normalize_lang(os.getenv(name))
        if lang:
            return lang
    return ""


def effective_lang(preferred: Optional[str] = None) -> str:
    env_lang = os.getenv("TASKG_LANG")
    if env_lang:
        return normalize_lang(env_lang) or BASE_LANG
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    for candidate in (preferred, get_user_lang(), _locale_lang()):
        lang = normalize_lang(candidate)
        if lang:
            return lang
    return BASE_LANG


class _KeepMissing(dict):
    def __missing__(self, key):
        return "{" + key + "}"


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Look ``key`` up in the active language, then English, then echo the key.

    Placeholders without a matching keyword stay in the text verbatim.
    """
    template = LANG_PACK[effective_lang(lang)].get(key) or LANG_PACK[BASE_LANG].get(key, key)
    try:
        return template.format_map(_KeepMissing(kwargs))
    except (IndexError, ValueError):
        return template


__all__ = ["BASE_LANG", "effective_lang", "normalize_lang", "translate"]
