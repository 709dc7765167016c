from __future__ import annotations

from typing import Any

import pytest

from form_steps.controller import FormStepsController
from form_steps.history import (
    MemoryHistory,
    QueryParamHistory,
    format_step_fragment,
    parse_step_fragment,
)
from form_steps.types import StepDefinition


STEPS = (
    StepDefinition(name="first", title="First", render=lambda _context: "First"),
    StepDefinition(name="second", title="Second", render=lambda _context: "Second"),
    StepDefinition(name="last", title="Last", render=lambda _context: "Last"),
)


@pytest.mark.parametrize(
    ("step_name", "expected"),
    [
        (None, ""),
        ("", ""),
        ("second", "#step=second"),
        ("two words", "#step=two%20words"),
    ],
)
def test_format_step_fragment(step_name: str | None, expected: str) -> None:
    assert format_step_fragment(step_name) == expected


@pytest.mark.parametrize(
    ("fragment", "expected"),
    [
        (None, None),
        ("", None),
        ("#", None),
        ("#step=second", "second"),
        ("step=second", "second"),
        ("#step=two%20words", "two words"),
        ("#other=1", None),
        ("#other=1&step=last", "last"),
    ],
)
def test_parse_step_fragment(fragment: str | None, expected: str | None) -> None:
    assert parse_step_fragment(fragment) == expected


def test_memory_history_push_truncates_forward_entries() -> None:
    history = MemoryHistory()
    history.push_state("#step=second")
    history.push_state("#step=last")
    history.back()
    history.back()

    history.push_state("#step=other")

    assert history.entries == ("", "#step=other")
    assert history.index == 1


def test_memory_history_notifies_only_on_navigation() -> None:
    history = MemoryHistory()
    events: list[str] = []
    history.subscribe(events.append)

    history.push_state("#step=second")
    history.replace_state("#step=last")
    assert events == []

    history.back()
    history.forward()
    history.forward()

    assert events == ["", "#step=last"]


def test_memory_history_set_hash_pushes_and_notifies() -> None:
    history = MemoryHistory("#step=second")
    events: list[str] = []
    history.subscribe(events.append)

    history.set_hash("#step=second")
    history.set_hash("#step=last")

    assert events == ["#step=last"]
    assert history.entries == ("#step=second", "#step=last")


def test_memory_history_unsubscribe() -> None:
    history = MemoryHistory()
    events: list[str] = []
    unsubscribe = history.subscribe(events.append)
    history.push_state("#step=second")

    unsubscribe()
    unsubscribe()
    history.back()

    assert events == []


def test_query_param_history_seeds_from_url(query_params: Any) -> None:
    query_params["step"] = "last"
    storage: dict[str, object] = {}

    history = QueryParamHistory(storage=storage, storage_key="history")

    assert history.location_hash == "#step=last"
    assert storage["history"] == {"entries": ["#step=last"], "index": 0}


def test_query_param_history_mirrors_pushes_into_url(query_params: Any) -> None:
    history = QueryParamHistory(storage={}, storage_key="history")

    history.push_state("#step=second")
    assert query_params.get_all("step") == ["second"]

    history.push_state("")
    assert "step" not in query_params
    assert history.entries == ("", "#step=second", "")


def test_query_param_history_sync_without_change_is_silent(query_params: Any) -> None:
    history = QueryParamHistory(storage={}, storage_key="history")
    events: list[str] = []
    history.subscribe(events.append)
    history.push_state("#step=second")

    history.sync()

    assert events == []


def test_query_param_history_sync_adopts_previous_entry(query_params: Any) -> None:
    history = QueryParamHistory(storage={}, storage_key="history")
    events: list[str] = []
    history.subscribe(events.append)
    history.push_state("#step=second")
    history.push_state("#step=last")

    query_params["step"] = "second"
    history.sync()

    assert events == ["#step=second"]
    assert history.location_hash == "#step=second"
    assert history.entries == ("", "#step=second", "#step=last")


def test_query_param_history_sync_appends_unknown_url(query_params: Any) -> None:
    history = QueryParamHistory(storage={}, storage_key="history")
    events: list[str] = []
    history.subscribe(events.append)
    assert history.location_hash == ""

    query_params["step"] = "last"
    history.sync()

    assert events == ["#step=last"]
    assert history.entries == ("", "#step=last")


def test_query_param_history_recovers_from_corrupted_storage(query_params: Any) -> None:
    storage: dict[str, object] = {"history": {"entries": [], "index": 3}}

    history = QueryParamHistory(storage=storage, storage_key="history")

    assert history.location_hash == ""
    assert history.entries == ("",)


def test_query_param_history_supports_custom_param(query_params: Any) -> None:
    history = QueryParamHistory(storage={}, storage_key="history", param="page")

    history.push_state("#step=second")

    assert query_params.get_all("page") == ["second"]
    assert "step" not in query_params


def test_controller_mount_clears_step_left_in_url(query_params: Any) -> None:
    query_params["step"] = "last"

    controller = FormStepsController(steps=STEPS, session_state={})

    assert controller.current_step_index == 0
    assert "step" not in query_params


def test_controller_adopts_browser_back_between_reruns(query_params: Any) -> None:
    session_state: dict[str, object] = {}
    controller = FormStepsController(steps=STEPS, session_state=session_state)
    controller.render_step()
    controller.advance()
    assert query_params.get_all("step") == ["second"]

    # The browser went back: the URL no longer carries the step on the next run.
    query_params.pop("step")
    rerun = FormStepsController(steps=STEPS, session_state=session_state)
    rerun.sync_history()

    assert rerun.current_step_index == 0
    assert rerun.history.location_hash == ""


def test_controller_uses_configured_history_param(query_params: Any) -> None:
    controller = FormStepsController(steps=STEPS, session_state={}, history_param="page")
    controller.render_step()

    controller.advance()

    assert query_params.get_all("page") == ["second"]
