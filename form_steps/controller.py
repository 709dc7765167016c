from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Mapping, MutableMapping, Sequence, cast

import streamlit as st

from form_steps.focus import FocusRequest, FocusTarget
from form_steps.history import (
    STEP_FRAGMENT_KEY,
    NavigationHistory,
    QueryParamHistory,
    format_step_fragment,
    parse_step_fragment,
)
from form_steps.keys import FormStepsSessionKeys, widget_container_class
from form_steps.registry import FieldRegistry
from form_steps.types import FieldBinding, StepDefinition, StepRenderContext, StepValues
from form_steps.validation import is_value_present, resolve_missing_required_fields
from utils.logging_context import log_context, set_wizard_id, set_wizard_step

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[StepValues], None]

STATUS_COMPLETED = "completed"


def get_step_index_by_name(steps: Sequence[StepDefinition], name: str | None) -> int:
    """Return the index of the first step called ``name`` or ``-1``."""

    for index, step in enumerate(steps):
        if step.name == name:
            return index
    return -1


class FormStepsController:
    """Drive a multi-step form: sequencing, validation, history and completion.

    State lives in ``session_state`` under a key namespaced by ``wizard_id`` so
    it survives Streamlit reruns. The first construction for a given id mounts
    the wizard: it starts at step 0, seeds values from ``initial_values`` and
    clears any step left in the URL. Later constructions reuse that state.
    """

    def __init__(
        self,
        *,
        steps: Sequence[StepDefinition],
        initial_values: Mapping[str, object] | None = None,
        auto_focus: bool = False,
        on_complete: CompletionCallback | None = None,
        wizard_id: str = "default",
        history: NavigationHistory | None = None,
        session_state: MutableMapping[str, object] | None = None,
        history_param: str = STEP_FRAGMENT_KEY,
    ) -> None:
        self._steps: tuple[StepDefinition, ...] = tuple(step for step in steps if isinstance(step, StepDefinition))
        if len(self._steps) != len(steps):
            logger.warning("Ignoring %d entry(ies) that are not step definitions", len(steps) - len(self._steps))
        self._initial_values: StepValues = dict(initial_values or {})
        self._auto_focus = auto_focus
        self._on_complete = on_complete
        self._wizard_id = wizard_id
        self._session_keys = FormStepsSessionKeys(wizard_id=wizard_id)
        self._session_state = cast(
            MutableMapping[str, object],
            session_state if session_state is not None else st.session_state,
        )
        self._history: NavigationHistory = (
            history
            if history is not None
            else QueryParamHistory(
                storage=self._session_state,
                storage_key=self._session_keys.history,
                param=history_param,
            )
        )
        self._registry = FieldRegistry(self._session_keys.widget)
        self._unsubscribe: Callable[[], None] | None = self._history.subscribe(self.handle_history_event)
        set_wizard_id(wizard_id)
        if not self.is_mounted:
            self._mount()
        step = self.current_step
        self._registry.begin_render(step.name if step else None)
        set_wizard_step(step.name if step else None)

    @property
    def steps(self) -> tuple[StepDefinition, ...]:
        return self._steps

    @property
    def wizard_id(self) -> str:
        return self._wizard_id

    @property
    def session_keys(self) -> FormStepsSessionKeys:
        return self._session_keys

    @property
    def history(self) -> NavigationHistory:
        return self._history

    @property
    def auto_focus(self) -> bool:
        return self._auto_focus

    @property
    def is_mounted(self) -> bool:
        return self._is_usable_state(self._session_state.get(self._session_keys.state))

    @property
    def _state(self) -> dict[str, object]:
        raw = self._session_state.get(self._session_keys.state)
        if not self._is_usable_state(raw):
            logger.warning("Form steps state for '%s' is missing or corrupted; remounting", self._wizard_id)
            self._mount()
            raw = self._session_state[self._session_keys.state]
        return cast(dict[str, object], raw)

    @property
    def current_step_index(self) -> int:
        return cast(int, self._state["current_step_index"])

    @property
    def current_step(self) -> StepDefinition | None:
        if not self._steps:
            return None
        return self._steps[self.current_step_index]

    @property
    def values(self) -> StepValues:
        return dict(self._values)

    @property
    def _values(self) -> StepValues:
        return cast(StepValues, self._state["values"])

    @property
    def valid_steps(self) -> frozenset[str]:
        return frozenset(cast(list[str], self._state["valid"]))

    @property
    def invalid_fields(self) -> tuple[str, ...]:
        """Required fields that blocked the most recent ``advance`` call."""

        return tuple(cast(list[str], self._state["invalid_fields"]))

    @property
    def is_completed(self) -> bool:
        return bool(self._state["completed"])

    @property
    def is_last_step(self) -> bool:
        return bool(self._steps) and self.current_step_index == len(self._steps) - 1

    @property
    def status(self) -> str | None:
        """Return the active step name, ``"completed"`` or ``None`` without steps."""

        if self.is_completed:
            return STATUS_COMPLETED
        step = self.current_step
        return step.name if step else None

    @property
    def registered_fields(self) -> tuple[FieldBinding, ...]:
        return self._registry.bindings()

    @property
    def pending_focus(self) -> FocusRequest | None:
        raw = self._state.get("focus")
        if not isinstance(raw, Mapping):
            return None
        return FocusRequest.from_mapping(raw)

    def consume_focus_request(self) -> FocusRequest | None:
        request = self.pending_focus
        self._state["focus"] = None
        return request

    def register_field(self, name: str, *, is_required: bool = False) -> FieldBinding:
        """Bind ``name`` to the current step; required fields gate ``advance``."""

        return self._registry.register(name, is_required=is_required)

    def on_change(self, partial_values: Mapping[str, object]) -> None:
        """Merge ``partial_values`` into the accumulated values."""

        if not partial_values:
            return
        values = self._values
        values.update(partial_values)
        invalid = [field for field in self.invalid_fields if not is_value_present(values.get(field))]
        self._state["invalid_fields"] = invalid
        logger.debug("Merged field(s) %s into form steps '%s'", ", ".join(partial_values), self._wizard_id)
        self.validate()

    def render_context(self) -> StepRenderContext:
        return StepRenderContext(
            value=MappingProxyType(self._values),
            on_change=self.on_change,
            register_field=self.register_field,
        )

    def begin_render(self) -> StepRenderContext:
        """Start a render pass of the current step and return its context."""

        step = self.current_step
        self._registry.begin_render(step.name if step else None)
        return self.render_context()

    def render_step(self) -> object:
        step = self.current_step
        if step is None:
            return None
        context = self.begin_render()
        with log_context(wizard_id=self._wizard_id, wizard_step=step.name):
            result = step.render(context)
        self.validate()
        return result

    def render_footer(self) -> object:
        step = self.current_step
        if step is None or step.footer is None:
            return None
        with log_context(wizard_id=self._wizard_id, wizard_step=step.name):
            return step.footer(self.render_context())

    def validate(self) -> list[str]:
        """Recompute validity of the current step from the registered fields."""

        step = self.current_step
        if step is None:
            return []
        missing = resolve_missing_required_fields(self._registry.required_fields(), self._values)
        valid = cast(list[str], self._state["valid"])
        if missing and step.name in valid:
            valid.remove(step.name)
        elif not missing and step.name not in valid:
            valid.append(step.name)
        return missing

    def is_step_valid(self) -> bool:
        return not self.validate()

    def advance(self) -> bool:
        """Move to the next step or complete the form.

        Returns ``False`` without side effects on the step index when a
        registered required field is still empty; focus then moves to the
        first such field.
        """

        step = self.current_step
        if step is None or self.is_completed:
            return False
        state = self._state
        missing = self.validate()
        if missing:
            state["invalid_fields"] = missing
            binding = self._registry.binding_for(missing[0])
            widget_key = binding.widget_key if binding else self._session_keys.widget(missing[0])
            self._request_focus(
                state,
                FocusRequest(
                    target=FocusTarget.FIELD,
                    step_name=step.name,
                    element_id=widget_container_class(widget_key),
                    field_name=missing[0],
                ),
            )
            logger.info("Step '%s' is incomplete; missing required field(s): %s", step.name, ", ".join(missing))
            return False

        state["invalid_fields"] = []
        next_index = self.current_step_index + 1
        if next_index >= len(self._steps):
            state["completed"] = True
            self._history.push_state("")
            set_wizard_step(STATUS_COMPLETED)
            logger.info("Form steps '%s' completed after step '%s'", self._wizard_id, step.name)
            if self._on_complete is not None:
                with log_context(wizard_id=self._wizard_id, wizard_step=STATUS_COMPLETED):
                    self._on_complete(self.values)
            return True

        self._set_step(next_index)
        self._history.push_state(format_step_fragment(self._steps[next_index].name))
        return True

    def retreat(self, fragment: str | None = None) -> None:
        """Adopt the step named by ``fragment`` (defaults to the current URL)."""

        if not self._steps:
            return
        if fragment is None:
            fragment = self._history.location_hash
        name = parse_step_fragment(fragment)
        index = get_step_index_by_name(self._steps, name) if name else 0
        if index == -1:
            logger.info("Unknown step '%s' in URL; returning to the first step", name)
            index = 0
            self._history.replace_state("")
        self._set_step(index)

    def handle_history_event(self, fragment: str) -> None:
        self.retreat(fragment)

    def sync_history(self) -> None:
        self._history.sync()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session_state.pop(self._session_keys.state, None)
        self._registry.begin_render(None)
        logger.debug("Unmounted form steps '%s'", self._wizard_id)

    def _mount(self) -> None:
        state: dict[str, object] = {
            "current_step_index": 0,
            "values": dict(self._initial_values),
            "valid": [],
            "invalid_fields": [],
            "completed": False,
            "focus": None,
            "focus_nonce": 0,
        }
        if self._auto_focus and self._steps:
            self._request_focus(state, self._heading_focus(0))
        self._session_state[self._session_keys.state] = state
        if self._history.location_hash:
            self._history.replace_state("")
        logger.info("Mounted form steps '%s' with %d step(s)", self._wizard_id, len(self._steps))

    def _set_step(self, index: int) -> None:
        state = self._state
        previous = self.current_step_index
        if index == previous and not self.is_completed:
            return
        state["current_step_index"] = index
        state["completed"] = False
        state["invalid_fields"] = []
        step = self._steps[index]
        self._registry.begin_render(step.name)
        self._request_focus(state, self._heading_focus(index))
        set_wizard_step(step.name)
        logger.info("Moved from step '%s' to '%s'", self._steps[previous].name, step.name)

    def _heading_focus(self, index: int) -> FocusRequest:
        step = self._steps[index]
        return FocusRequest(
            target=FocusTarget.HEADING,
            step_name=step.name,
            element_id=self._session_keys.heading_id(index, step.name),
        )

    def _request_focus(self, state: dict[str, object], request: FocusRequest) -> None:
        nonce = state.get("focus_nonce")
        nonce = nonce + 1 if isinstance(nonce, int) and not isinstance(nonce, bool) else 1
        state["focus_nonce"] = nonce
        state["focus"] = replace(request, nonce=nonce).to_dict()

    def _is_usable_state(self, raw: object) -> bool:
        if not isinstance(raw, dict):
            return False
        index = raw.get("current_step_index")
        if not isinstance(index, int) or isinstance(index, bool):
            return False
        if self._steps and not 0 <= index < len(self._steps):
            return False
        if not self._steps and index != 0:
            return False
        if not isinstance(raw.get("values"), dict):
            return False
        if not isinstance(raw.get("valid"), list) or not isinstance(raw.get("invalid_fields"), list):
            return False
        return "completed" in raw


__all__ = [
    "CompletionCallback",
    "FormStepsController",
    "STATUS_COMPLETED",
    "get_step_index_by_name",
]
