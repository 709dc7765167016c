"""Step definitions for the identity-verification flow.

Values are collected verbatim; formatting and storage of the PII happen
server-side and are not part of this package.
"""

from __future__ import annotations

from typing import Final, Mapping

import streamlit as st

from form_steps.types import LocalizedText, StepDefinition, StepRenderContext
from form_steps.validation import is_value_present
from form_steps.widgets import bound_checkbox, bound_text_input
from utils.i18n import tr

CONSENT_FIELD: Final[str] = "ial2_consent_given"
SSN_FIELD: Final[str] = "ssn"

IDV_FIELD_LABELS: Final[dict[str, LocalizedText]] = {
    CONSENT_FIELD: ("Einwilligung", "Consent"),
    SSN_FIELD: ("Sozialversicherungsnummer", "Social Security number"),
}


def _render_welcome(context: StepRenderContext) -> None:
    st.markdown(
        tr(
            "Wir überprüfen deine Identität anhand deiner Angaben und Dokumente.",
            "We'll verify your identity using the information and documents you provide.",
        )
    )
    bound_checkbox(
        context,
        CONSENT_FIELD,
        tr(
            "Ich stimme der Überprüfung meiner Identität zu.",
            "I consent to having my identity verified.",
        ),
        is_required=True,
    )


def _render_ssn(context: StepRenderContext) -> None:
    bound_text_input(
        context,
        SSN_FIELD,
        tr(*IDV_FIELD_LABELS[SSN_FIELD]),
        is_required=True,
        placeholder="123-45-6789",
    )


def _render_review(context: StepRenderContext) -> None:
    st.markdown(tr("Bitte prüfe deine Angaben.", "Please review your information."))
    for field, label in IDV_FIELD_LABELS.items():
        provided = is_value_present(context.value.get(field))
        status = tr("angegeben", "provided") if provided else tr("fehlt", "missing")
        st.markdown(f"- **{tr(*label)}**: {status}")


def _render_review_footer(_context: StepRenderContext) -> None:
    st.caption(
        tr(
            "Über die Zurück-Funktion deines Browsers kannst du Angaben ändern.",
            "Use your browser's back button to change your answers.",
        )
    )


def build_idv_steps() -> tuple[StepDefinition, ...]:
    """Return the ordered steps of the identity-verification flow."""

    return (
        StepDefinition(
            name="welcome",
            title=("Willkommen", "Welcome"),
            render=_render_welcome,
        ),
        StepDefinition(
            name="ssn",
            title=("Sozialversicherungsnummer", "Social Security number"),
            render=_render_ssn,
        ),
        StepDefinition(
            name="review",
            title=("Angaben prüfen", "Review your information"),
            render=_render_review,
            footer=_render_review_footer,
        ),
    )


def summarize_submission(values: Mapping[str, object]) -> list[str]:
    """Return the labels of known fields that were submitted with a value."""

    return [
        tr(*label)
        for field, label in IDV_FIELD_LABELS.items()
        if is_value_present(values.get(field))
    ]


__all__ = ["CONSENT_FIELD", "IDV_FIELD_LABELS", "SSN_FIELD", "build_idv_steps", "summarize_submission"]
