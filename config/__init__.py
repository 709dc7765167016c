"""Central configuration for the identity-verification form steps app.

Each setting is resolved from Streamlit secrets first, then from environment
variables (a local ``.env`` file is loaded through ``python-dotenv``), and
finally falls back to a default.

``FORM_STEPS_AUTO_FOCUS`` moves focus to the first step heading on mount,
``FORM_STEPS_HISTORY_PARAM`` names the query parameter mirroring the active
step and ``FORM_STEPS_DEBUG`` reveals technical error details in the UI.
"""

import os
import warnings

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_SUPPORTED_LANGUAGES: tuple[str, ...] = ("de", "en")
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _coerce_secret_value(value: object) -> str:
    """Return ``value`` as a trimmed string without raising on unexpected types."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def get_setting(name: str, default: str = "") -> str:
    """Return the configured value for ``name`` from secrets, env or ``default``."""

    try:
        secret = st.secrets[name]
    except Exception:
        secret = None
    value = _coerce_secret_value(secret)
    if value:
        return value

    env_value = _coerce_secret_value(os.getenv(name))
    if env_value:
        return env_value
    return default


def normalise_language(value: object | None, *, default: str = "en") -> str:
    """Return a supported language code or ``default`` when invalid."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().lower()[:2]
    if not candidate:
        return default
    if candidate in _SUPPORTED_LANGUAGES:
        return candidate
    warnings.warn(
        "Unsupported LANGUAGE '%s'; falling back to '%s'." % (value, default),
        RuntimeWarning,
    )
    return default


def normalise_log_level(value: object | None, *, default: str = "INFO") -> str:
    """Return a logging level name understood by :mod:`logging`."""

    if not isinstance(value, str) or not value.strip():
        return default
    candidate = value.strip().upper()
    if candidate in _LOG_LEVELS:
        return candidate
    warnings.warn(
        "Unsupported LOG_LEVEL '%s'; falling back to '%s'." % (value, default),
        RuntimeWarning,
    )
    return default


DEFAULT_LANGUAGE = normalise_language(get_setting("LANGUAGE", "en"))
LOG_LEVEL = normalise_log_level(get_setting("LOG_LEVEL", "INFO"))
FORM_STEPS_AUTO_FOCUS = _is_truthy_flag(get_setting("FORM_STEPS_AUTO_FOCUS", "0"))
FORM_STEPS_HISTORY_PARAM = get_setting("FORM_STEPS_HISTORY_PARAM", "step")
FORM_STEPS_DEBUG = _is_truthy_flag(get_setting("FORM_STEPS_DEBUG", "0"))


__all__ = [
    "DEFAULT_LANGUAGE",
    "FORM_STEPS_AUTO_FOCUS",
    "FORM_STEPS_DEBUG",
    "FORM_STEPS_HISTORY_PARAM",
    "LOG_LEVEL",
    "get_setting",
    "normalise_language",
    "normalise_log_level",
]
