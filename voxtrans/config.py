"""
Project-wide configuration.

Constants live at module level so they can be imported directly; each one
can be overridden through an environment variable. ``Settings`` bundles the
values a running translator needs and is what the CLI and
``create_orchestrator`` consume.

Environment variables:
    VOXTRANS_MYMEMORY_URL: MyMemory endpoint
    VOXTRANS_API_TIMEOUT: HTTP timeout in seconds for the online call
    VOXTRANS_MYMEMORY_EMAIL: contact e-mail sent as ``de`` (raises the daily quota)
    VOXTRANS_OFFLINE: start with the connectivity observer reporting offline
    VOXTRANS_ONLINE_FALLBACK: set to 0 to never consult the online service
    VOXTRANS_DEFAULT_SOURCE / VOXTRANS_DEFAULT_TARGET: default language pair

Example:
    >>> from voxtrans.config import Settings
    >>> settings = Settings.from_env()
    >>> settings.api_timeout
    10.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Application name for display and identification
APP_NAME = "VoxTrans"

# MyMemory translation API (free, no key required)
MYMEMORY_URL = "https://api.mymemory.translated.net/get"

# Seconds before the HTTP transport gives up
API_TIMEOUT = 10.0

# Default language pair shown on start-up
DEFAULT_SOURCE_LANG = "pt-BR"
DEFAULT_TARGET_LANG = "en-US"

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable, falling back to ``default``."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class Settings:
    """Runtime settings for the translation pipeline."""
    mymemory_url: str = MYMEMORY_URL
    api_timeout: float = API_TIMEOUT
    contact_email: str | None = None
    start_offline: bool = False
    online_fallback: bool = True
    default_source: str = DEFAULT_SOURCE_LANG
    default_target: str = DEFAULT_TARGET_LANG

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the process environment."""
        return cls(
            mymemory_url=os.getenv("VOXTRANS_MYMEMORY_URL", MYMEMORY_URL),
            api_timeout=env_float("VOXTRANS_API_TIMEOUT", API_TIMEOUT),
            contact_email=os.getenv("VOXTRANS_MYMEMORY_EMAIL") or None,
            start_offline=env_flag("VOXTRANS_OFFLINE", False),
            online_fallback=env_flag("VOXTRANS_ONLINE_FALLBACK", True),
            default_source=os.getenv("VOXTRANS_DEFAULT_SOURCE", DEFAULT_SOURCE_LANG),
            default_target=os.getenv("VOXTRANS_DEFAULT_TARGET", DEFAULT_TARGET_LANG),
        )

    def to_dict(self) -> dict:
        """Serialize settings for display (the e-mail is masked)."""
        return {
            "mymemory_url": self.mymemory_url,
            "api_timeout": self.api_timeout,
            "contact_email": "set" if self.contact_email else "not set",
            "start_offline": self.start_offline,
            "online_fallback": self.online_fallback,
            "default_source": self.default_source,
            "default_target": self.default_target,
        }
