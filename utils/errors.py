"""Utility helpers for rendering error messages in Streamlit."""

from __future__ import annotations

import logging
from typing import Final

import streamlit as st

import config
from utils.i18n import FORM_STEPS_RENDER_ERROR, tr

logger = logging.getLogger(__name__)

LocalizedMessage = str | tuple[str, str]
_DETAILS_LABEL: Final[tuple[str, str]] = (
    "Technische Details",
    "Technical details",
)


def resolve_message(message: LocalizedMessage, *, lang: str | None = None) -> str:
    """Return the localized string for ``message`` (plain text or ``(de, en)``)."""

    if isinstance(message, tuple):
        de, en = message
        return tr(de, en, lang=lang)
    return message


def display_error(
    msg: LocalizedMessage,
    detail: str | None = None,
    *,
    lang: str | None = None,
) -> None:
    """Render a user-facing error; ``detail`` is only shown with ``FORM_STEPS_DEBUG``."""

    st.error(resolve_message(msg, lang=lang))
    if detail and config.FORM_STEPS_DEBUG:
        with st.expander(resolve_message(_DETAILS_LABEL, lang=lang)):
            st.code(detail)


def display_step_error(
    step_name: str,
    step_title: LocalizedMessage,
    error: BaseException,
    *,
    lang: str | None = None,
) -> None:
    """Report an exception raised while rendering a form step.

    The traceback goes to the log. The page names the step and shows the
    exception only when ``FORM_STEPS_DEBUG`` is set.
    """

    logger.warning("Failed to render form step '%s'", step_name, exc_info=error)
    title = resolve_message(step_title, lang=lang)
    message_de, message_en = FORM_STEPS_RENDER_ERROR
    display_error(
        (message_de.format(title=title), message_en.format(title=title)),
        detail=f"{type(error).__name__}: {error}",
        lang=lang,
    )


__all__ = ["LocalizedMessage", "display_error", "display_step_error", "resolve_message"]
