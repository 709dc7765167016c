from __future__ import annotations

import html
from typing import Sequence

import streamlit as st

from form_steps.controller import FormStepsController
from form_steps.focus import emit_focus_script
from form_steps.types import LocalizedText, StepDefinition
from utils.errors import display_step_error, resolve_message
from utils.i18n import (
    FORM_STEPS_CONTINUE_LABEL,
    FORM_STEPS_REQUIRED_HINT,
    FORM_STEPS_STEP_COUNTER,
    FORM_STEPS_SUBMIT_LABEL,
    tr,
)

_FORM_STEPS_STYLE = """
<style>
.form-steps-heading {
    margin: 0.2rem 0 0.9rem;
}

.form-steps-heading:focus {
    outline: 2px solid var(--primary-color, #2563eb);
    outline-offset: 4px;
    border-radius: 6px;
}

.form-steps-warning {
    display: flex;
    align-items: flex-start;
    gap: 0.45rem;
    margin: 0.45rem 0 0;
    padding: 0.6rem 0.85rem;
    border-radius: 12px;
    border: 1px solid rgba(245, 158, 11, 0.35);
    background: rgba(251, 191, 36, 0.18);
    font-size: 0.92rem;
    line-height: 1.35;
}
</style>
"""


def inject_form_steps_style() -> None:
    st.markdown(_FORM_STEPS_STYLE, unsafe_allow_html=True)


def resolve_step_title(step: StepDefinition, *, lang: str | None = None) -> str:
    return resolve_message(step.title, lang=lang)


def resolve_primary_label(controller: FormStepsController) -> LocalizedText:
    """Return the label pair for the button that advances ``controller``."""

    return FORM_STEPS_SUBMIT_LABEL if controller.is_last_step else FORM_STEPS_CONTINUE_LABEL


def render_step_heading(controller: FormStepsController, step: StepDefinition, *, lang: str | None = None) -> None:
    """Render the focusable heading that announces ``step``."""

    counter = tr(*FORM_STEPS_STEP_COUNTER, lang=lang).format(
        current=controller.current_step_index + 1,
        total=len(controller.steps),
    )
    st.caption(counter)
    title = html.escape(resolve_step_title(step, lang=lang))
    element_id = controller.session_keys.heading_id(controller.current_step_index, step.name)
    st.markdown(
        f'<h2 id="{element_id}" class="form-steps-heading" tabindex="-1">{title}</h2>',
        unsafe_allow_html=True,
    )


def render_validation_warnings(missing_fields: Sequence[str], *, lang: str | None = None) -> None:
    if not missing_fields:
        return
    message = html.escape(tr(*FORM_STEPS_REQUIRED_HINT, lang=lang))
    st.markdown(
        f"""
        <div class="form-steps-warning" role="alert">
            {message}
        </div>
        """,
        unsafe_allow_html=True,
    )


def _render_guarded(controller: FormStepsController, step: StepDefinition, *, footer: bool, lang: str | None) -> bool:
    try:
        if footer:
            controller.render_footer()
        else:
            controller.render_step()
    except Exception as error:
        display_step_error(step.name, step.title, error, lang=lang)
        return False
    return True


def render_form_steps(controller: FormStepsController, *, lang: str | None = None) -> bool:
    """Render the active step of ``controller`` and handle its primary button.

    Returns ``True`` when the button advanced the form during this run. A
    successful advance triggers ``st.rerun`` so the next step renders with a
    fresh field registry.
    """

    step = controller.current_step
    if step is None:
        return False
    controller.sync_history()
    step = controller.current_step
    if step is None or controller.is_completed:
        return False

    inject_form_steps_style()
    render_step_heading(controller, step, lang=lang)
    if not _render_guarded(controller, step, footer=False, lang=lang):
        return False

    label = tr(*resolve_primary_label(controller), lang=lang)
    advanced = False
    if st.button(label, key=controller.session_keys.button("primary"), type="primary"):
        advanced = controller.advance()
    if advanced:
        st.rerun()

    render_validation_warnings(controller.invalid_fields, lang=lang)
    _render_guarded(controller, step, footer=True, lang=lang)

    request = controller.consume_focus_request()
    if request is not None:
        emit_focus_script(request)
    return advanced


__all__ = [
    "inject_form_steps_style",
    "render_form_steps",
    "render_step_heading",
    "render_validation_warnings",
    "resolve_primary_label",
    "resolve_step_title",
]
