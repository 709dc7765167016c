from __future__ import annotations

from typing import Any

import pytest
import streamlit as st

from constants.keys import StateKeys
from form_steps.controller import FormStepsController
from form_steps.history import MemoryHistory
from idv import CONSENT_FIELD, SSN_FIELD, build_idv_steps, summarize_submission


@pytest.fixture(autouse=True)
def _english(monkeypatch: pytest.MonkeyPatch, _stub_streamlit_session_state: None) -> list[str]:
    st.session_state[StateKeys.LANG] = "en"
    rendered: list[str] = []
    monkeypatch.setattr(st, "markdown", lambda value, **_: rendered.append(value))
    monkeypatch.setattr(st, "caption", lambda value, **_: rendered.append(value))
    return rendered


def _widget_returning(answers: dict[str, Any]):
    def _widget(label: str, *, key: str, **_kwargs: Any) -> Any:
        if key in answers:
            st.session_state[key] = answers[key]
        return st.session_state[key]

    return _widget


def _controller(**kwargs: Any) -> tuple[FormStepsController, MemoryHistory]:
    history = MemoryHistory()
    controller = FormStepsController(
        steps=build_idv_steps(),
        wizard_id="idv",
        history=history,
        session_state={},
        **kwargs,
    )
    return controller, history


def test_idv_steps_are_ordered() -> None:
    steps = build_idv_steps()

    assert [step.name for step in steps] == ["welcome", "ssn", "review"]
    assert steps[-1].footer is not None
    assert all(step.footer is None for step in steps[:-1])


def test_welcome_requires_consent(monkeypatch: pytest.MonkeyPatch) -> None:
    controller, _history = _controller()
    monkeypatch.setattr(st, "checkbox", _widget_returning({}))

    controller.render_step()

    assert controller.advance() is False
    assert controller.invalid_fields == (CONSENT_FIELD,)


def test_checked_consent_advances_to_ssn(monkeypatch: pytest.MonkeyPatch) -> None:
    controller, history = _controller()
    key = controller.session_keys.widget(CONSENT_FIELD)
    monkeypatch.setattr(st, "checkbox", _widget_returning({key: True}))

    controller.render_step()

    assert controller.values == {CONSENT_FIELD: True}
    assert controller.advance() is True
    assert controller.current_step.name == "ssn"
    assert history.location_hash == "#step=ssn"


def test_ssn_input_is_seeded_from_values(monkeypatch: pytest.MonkeyPatch) -> None:
    controller, history = _controller(initial_values={SSN_FIELD: "123-45-6789"})
    seen: dict[str, Any] = {}

    def _text_input(label: str, *, key: str, **kwargs: Any) -> str:
        seen.update(kwargs, label=label)
        return st.session_state[key]

    monkeypatch.setattr(st, "text_input", _text_input)
    history.set_hash("#step=ssn")

    controller.render_step()

    assert seen["label"] == "Social Security number"
    assert seen["placeholder"] == "123-45-6789"
    assert controller.is_step_valid()


def test_review_lists_field_status_without_values(_english: list[str]) -> None:
    controller, history = _controller(initial_values={CONSENT_FIELD: True, SSN_FIELD: "123-45-6789"})
    history.set_hash("#step=review")

    controller.render_step()
    controller.render_footer()

    assert "- **Consent**: provided" in _english
    assert "- **Social Security number**: provided" in _english
    assert not any("123-45-6789" in entry for entry in _english)
    assert _english[-1] == "Use your browser's back button to change your answers."


def test_submitting_review_completes(_english: list[str]) -> None:
    submitted: list[dict[str, object]] = []
    controller, history = _controller(initial_values={SSN_FIELD: "1"}, on_complete=submitted.append)
    history.set_hash("#step=review")
    controller.render_step()

    assert controller.advance() is True

    assert controller.is_completed
    assert submitted == [{SSN_FIELD: "1"}]


def test_summarize_submission_lists_present_fields() -> None:
    assert summarize_submission({CONSENT_FIELD: True, SSN_FIELD: "  "}) == ["Consent"]
    assert summarize_submission({}) == []


def test_summarize_submission_localizes() -> None:
    st.session_state[StateKeys.LANG] = "de"

    assert summarize_submission({SSN_FIELD: "123"}) == ["Sozialversicherungsnummer"]
