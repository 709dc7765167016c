"""Simple i18n helper utilities."""

from __future__ import annotations

from typing import Final

import streamlit as st

import config
from constants.keys import StateKeys


FORM_STEPS_CONTINUE_LABEL: Final[tuple[str, str]] = (
    "Weiter",
    "Continue",
)
FORM_STEPS_SUBMIT_LABEL: Final[tuple[str, str]] = (
    "Absenden",
    "Submit",
)
FORM_STEPS_REQUIRED_HINT: Final[tuple[str, str]] = (
    "Bitte fülle die Pflichtfelder aus, bevor du fortfährst.",
    "Please complete the required fields before continuing.",
)
FORM_STEPS_STEP_COUNTER: Final[tuple[str, str]] = (
    "Schritt {current} von {total}",
    "Step {current} of {total}",
)
FORM_STEPS_RENDER_ERROR: Final[tuple[str, str]] = (
    "Beim Anzeigen des Schritts „{title}“ ist ein Fehler aufgetreten. Bitte lade die Seite neu.",
    "We couldn't display the “{title}” step. Please reload the page.",
)


def current_language() -> str:
    """Return the active UI language code (``"de"`` or ``"en"``)."""

    code = st.session_state.get(StateKeys.LANG)
    if isinstance(code, str) and code:
        return code
    return config.DEFAULT_LANGUAGE


def tr(de: str, en: str, lang: str | None = None) -> str:
    """Return the string matching the current language.

    Args:
        de: German text.
        en: English text.
        lang: Optional language override (``"de"`` or ``"en"``).

    Returns:
        The localized string for the requested language.
    """
    code = lang or current_language()
    return de if code == "de" else en


__all__ = [
    "FORM_STEPS_CONTINUE_LABEL",
    "FORM_STEPS_RENDER_ERROR",
    "FORM_STEPS_REQUIRED_HINT",
    "FORM_STEPS_STEP_COUNTER",
    "FORM_STEPS_SUBMIT_LABEL",
    "current_language",
    "tr",
]
