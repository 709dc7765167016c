"""Multi-step form state machine with URL history sync for Streamlit."""

from __future__ import annotations

from form_steps.controller import FormStepsController, get_step_index_by_name
from form_steps.focus import FocusRequest, FocusTarget
from form_steps.history import (
    MemoryHistory,
    NavigationHistory,
    QueryParamHistory,
    format_step_fragment,
    parse_step_fragment,
)
from form_steps.types import FieldBinding, Renderer, StepDefinition, StepRenderContext
from form_steps.ui import render_form_steps

__all__ = [
    "FieldBinding",
    "FocusRequest",
    "FocusTarget",
    "FormStepsController",
    "MemoryHistory",
    "NavigationHistory",
    "QueryParamHistory",
    "Renderer",
    "StepDefinition",
    "StepRenderContext",
    "format_step_fragment",
    "get_step_index_by_name",
    "parse_step_fragment",
    "render_form_steps",
]
