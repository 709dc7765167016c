"""Shared types for the form steps package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Protocol


# Bilingual text pair ``(de, en)`` used throughout the UI
LocalizedText = tuple[str, str]

StepTitle = str | LocalizedText
StepValues = dict[str, object]


@dataclass(frozen=True)
class FieldBinding:
    """Token returned by ``register_field`` and attached to a Streamlit widget."""

    name: str
    widget_key: str
    is_required: bool = False


class RegisterField(Protocol):
    def __call__(self, name: str, *, is_required: bool = False) -> FieldBinding: ...


@dataclass(frozen=True)
class StepRenderContext:
    """Context passed to step render and footer callables."""

    value: Mapping[str, object]
    on_change: Callable[[Mapping[str, object]], None]
    register_field: RegisterField


class Renderer(Protocol):
    def __call__(self, context: StepRenderContext) -> object: ...


@dataclass(frozen=True)
class StepDefinition:
    """A single named step of a multi-step form."""

    name: str
    title: StepTitle
    render: Renderer
    footer: Renderer | None = None


__all__ = [
    "FieldBinding",
    "LocalizedText",
    "RegisterField",
    "Renderer",
    "StepDefinition",
    "StepRenderContext",
    "StepTitle",
    "StepValues",
]
