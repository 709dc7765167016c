"""Per-render registry of fields bound to the active step."""

from __future__ import annotations

import logging
from typing import Callable

from form_steps.types import FieldBinding

logger = logging.getLogger(__name__)


class FieldRegistry:
    """Track the fields a step registers while it renders.

    The registry belongs to a single render pass: :meth:`begin_render` discards
    every entry so that fields which are rendered conditionally only take part
    in validation while they are on screen.
    """

    def __init__(self, widget_key_factory: Callable[[str], str]) -> None:
        self._widget_key = widget_key_factory
        self._bindings: dict[str, FieldBinding] = {}
        self._step_name: str | None = None

    @property
    def step_name(self) -> str | None:
        return self._step_name

    def begin_render(self, step_name: str | None) -> None:
        self._bindings.clear()
        self._step_name = step_name

    def register(self, name: str, *, is_required: bool = False) -> FieldBinding:
        existing = self._bindings.get(name)
        if existing is not None and existing.is_required == is_required:
            return existing
        if existing is not None:
            logger.debug("Field '%s' re-registered with is_required=%s", name, is_required)
        binding = FieldBinding(name=name, widget_key=self._widget_key(name), is_required=is_required)
        self._bindings[name] = binding
        return binding

    def bindings(self) -> tuple[FieldBinding, ...]:
        return tuple(self._bindings.values())

    def binding_for(self, name: str) -> FieldBinding | None:
        return self._bindings.get(name)

    def required_fields(self) -> tuple[str, ...]:
        return tuple(binding.name for binding in self._bindings.values() if binding.is_required)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)


__all__ = ["FieldRegistry"]
