from __future__ import annotations

import re
from dataclasses import dataclass

_UNSAFE_CLASS_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def widget_container_class(widget_key: str) -> str:
    """Return the CSS class Streamlit puts on the container of ``widget_key``."""

    if not widget_key:
        return ""
    return "st-key-" + _UNSAFE_CLASS_CHARS.sub("-", widget_key.strip())


@dataclass(frozen=True)
class FormStepsSessionKeys:
    """Namespaced session-state keys for a single form steps instance."""

    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"form_steps:{self.wizard_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def state(self) -> str:
        return self.namespace("state")

    @property
    def history(self) -> str:
        return self.namespace("history")

    def widget(self, field_name: str) -> str:
        return self.namespace(f"field:{field_name}")

    def button(self, name: str) -> str:
        return self.namespace(f"button:{name}")

    def heading_id(self, step_index: int, step_name: str) -> str:
        """Return the DOM id of the heading rendered for the step at ``step_index``.

        The index keeps ids distinct for names that only differ in characters
        replaced by ``-``.
        """

        raw = f"form-steps-{self.wizard_id}-{step_index}-{step_name}-title"
        return _UNSAFE_CLASS_CHARS.sub("-", raw)
