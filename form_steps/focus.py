"""Focus management for step changes and refused submissions.

Screen-reader users rely on focus moving to the heading of the new step, so
the controller records a :class:`FocusRequest` on every step change and the UI
layer turns it into a small script that runs in the page document.

Every request carries a ``nonce`` that increases per wizard. Streamlit keeps
an element whose markup did not change between runs, so two identical
requests would otherwise run the script only once.
"""

from __future__ import annotations

import inspect
import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

import streamlit as st
import streamlit.components.v1 as components


class FocusTarget(StrEnum):
    """Kinds of elements that can receive focus."""

    HEADING = "heading"
    FIELD = "field"


@dataclass(frozen=True)
class FocusRequest:
    """A pending request to move focus to a rendered element.

    ``element_id`` is the DOM id of a heading, or the container class of the
    widget for field targets.
    """

    target: FocusTarget
    step_name: str
    element_id: str
    field_name: str | None = None
    nonce: int = 0

    def to_dict(self) -> dict[str, str | int | None]:
        return {
            "target": self.target.value,
            "step_name": self.step_name,
            "element_id": self.element_id,
            "field_name": self.field_name,
            "nonce": self.nonce,
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "FocusRequest | None":
        target = payload.get("target")
        step_name = payload.get("step_name")
        element_id = payload.get("element_id")
        field_name = payload.get("field_name")
        nonce = payload.get("nonce", 0)
        if not isinstance(step_name, str) or not isinstance(element_id, str):
            return None
        try:
            resolved = FocusTarget(str(target))
        except ValueError:
            return None
        return cls(
            target=resolved,
            step_name=step_name,
            element_id=element_id,
            field_name=field_name if isinstance(field_name, str) else None,
            nonce=nonce if isinstance(nonce, int) and not isinstance(nonce, bool) else 0,
        )


def build_focus_script(request: FocusRequest) -> str:
    """Return the ``<script>`` element that moves focus for ``request``."""

    # ``<\/`` keeps the JSON payload from closing the script tag early.
    payload = json.dumps(request.to_dict(), ensure_ascii=False).replace("</", "<\\/")
    return f"""<script data-form-steps-focus="{request.nonce}">
(function() {{
  const request = {payload};
  const doc = window.parent?.document || window.document;
  const resolveTarget = () => {{
    if (request.target === "heading") {{
      return doc.getElementById(request.element_id);
    }}
    const container = doc.querySelector("." + CSS.escape(request.element_id));
    if (!container) {{
      return null;
    }}
    return container.querySelector("input, textarea, select, button, [tabindex]") || container;
  }};
  const applyFocus = (attempt) => {{
    const target = resolveTarget();
    if (target) {{
      target.focus({{ preventScroll: false }});
      return;
    }}
    if (attempt < 10) {{
      setTimeout(() => applyFocus(attempt + 1), 50);
    }}
  }};
  applyFocus(0);
}})();
</script>"""


def _focus_document(script: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  {script}
</head>
<body></body>
</html>
"""


def _supports_inline_scripts() -> bool:
    html = getattr(st, "html", None)
    if html is None:
        return False
    return "unsafe_allow_javascript" in inspect.signature(html).parameters


def emit_focus_script(request: FocusRequest) -> None:
    """Run the focus script for ``request`` on the page.

    Streamlit releases whose ``st.html`` can execute scripts run it inline;
    older ones fall back to an invisible component iframe.
    """

    script = build_focus_script(request)
    if _supports_inline_scripts():
        st.html(script, unsafe_allow_javascript=True)
    else:
        components.html(_focus_document(script), height=0, width=0, scrolling=False)


__all__ = ["FocusRequest", "FocusTarget", "build_focus_script", "emit_focus_script"]
