# app.py - identity verification entrypoint
from __future__ import annotations

import logging
import uuid
from typing import Mapping

import streamlit as st

import config
from constants.keys import StateKeys, UIKeys
from form_steps import FormStepsController, render_form_steps
from idv import build_idv_steps, summarize_submission
from utils.i18n import tr
from utils.logging_context import configure_logging, set_session_id

configure_logging(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

IDV_WIZARD_ID = "idv"
_LANGUAGE_OPTIONS: tuple[str, ...] = ("en", "de")


def _store_submission(values: Mapping[str, object]) -> None:
    st.session_state[StateKeys.IDV_RESULT] = dict(values)
    logger.info("Identity verification submitted with %d field(s)", len(values))


def _render_language_select() -> None:
    current = st.session_state.get(StateKeys.LANG, config.DEFAULT_LANGUAGE)
    index = _LANGUAGE_OPTIONS.index(current) if current in _LANGUAGE_OPTIONS else 0
    choice = st.sidebar.selectbox(
        tr("Sprache", "Language"),
        _LANGUAGE_OPTIONS,
        index=index,
        key=UIKeys.LANG_SELECT,
    )
    st.session_state[StateKeys.LANG] = choice


def _render_confirmation(values: Mapping[str, object]) -> None:
    st.success(tr("Danke! Deine Angaben wurden übermittelt.", "Thanks! Your information was submitted."))
    for label in summarize_submission(values):
        st.markdown(f"- {label}")


def main() -> None:
    session_id = st.session_state.get(StateKeys.SESSION_ID)
    if not isinstance(session_id, str):
        session_id = uuid.uuid4().hex
        st.session_state[StateKeys.SESSION_ID] = session_id
    set_session_id(session_id)

    _render_language_select()
    st.title(tr("Identität bestätigen", "Verify your identity"))

    controller = FormStepsController(
        steps=build_idv_steps(),
        auto_focus=config.FORM_STEPS_AUTO_FOCUS,
        on_complete=_store_submission,
        wizard_id=IDV_WIZARD_ID,
        history_param=config.FORM_STEPS_HISTORY_PARAM,
    )
    render_form_steps(controller)
    if controller.is_completed:
        result = st.session_state.get(StateKeys.IDV_RESULT)
        _render_confirmation(result if isinstance(result, Mapping) else controller.values)


st.set_page_config(page_title="Identity verification", page_icon="🪪", layout="centered")
main()
