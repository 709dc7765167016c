"""Streamlit widgets bound to form steps values.

Streamlit drops the state of widgets that are not rendered in a run, so every
helper seeds the widget from the accumulated values before rendering it. That
keeps answers intact when the user returns to a step through the browser
history.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from form_steps.types import FieldBinding, StepRenderContext


def _seed_widget(context: StepRenderContext, binding: FieldBinding, default: object) -> None:
    if binding.widget_key not in st.session_state:
        st.session_state[binding.widget_key] = context.value.get(binding.name, default)


def _emit_change(context: StepRenderContext, binding: FieldBinding, value: object, default: object) -> None:
    if context.value.get(binding.name, default) != value:
        context.on_change({binding.name: value})


def bound_text_input(
    context: StepRenderContext,
    name: str,
    label: str,
    *,
    is_required: bool = False,
    **kwargs: Any,
) -> str:
    """Render a text input registered as ``name`` and sync it into the values."""

    binding = context.register_field(name, is_required=is_required)
    _seed_widget(context, binding, "")
    value = st.text_input(label, key=binding.widget_key, **kwargs)
    _emit_change(context, binding, value, "")
    return value


def bound_checkbox(
    context: StepRenderContext,
    name: str,
    label: str,
    *,
    is_required: bool = False,
    **kwargs: Any,
) -> bool:
    """Render a checkbox registered as ``name``; unchecked counts as empty."""

    binding = context.register_field(name, is_required=is_required)
    _seed_widget(context, binding, False)
    value = bool(st.checkbox(label, key=binding.widget_key, **kwargs))
    _emit_change(context, binding, value, False)
    return value


__all__ = ["bound_checkbox", "bound_text_input"]
