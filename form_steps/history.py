"""Navigation history adapters for the form steps controller.

The controller treats the URL fragment (``#step=<name>``) as an external mirror
of the active step. Forward navigation pushes a new entry; back/forward
navigation is reported by the history through subscribed listeners and adopted
by the controller.
"""

from __future__ import annotations

import logging
from typing import Callable, MutableMapping, Protocol, cast
from urllib.parse import parse_qs, quote

import streamlit as st

logger = logging.getLogger(__name__)

STEP_FRAGMENT_KEY = "step"

HistoryListener = Callable[[str], None]


def format_step_fragment(step_name: str | None) -> str:
    """Return ``#step=<step_name>`` or an empty string for the initial state."""

    if not step_name:
        return ""
    return f"#{STEP_FRAGMENT_KEY}={quote(step_name, safe='')}"


def parse_step_fragment(fragment: str | None) -> str | None:
    """Return the step name encoded in ``fragment`` or ``None``."""

    if not fragment:
        return None
    raw = fragment[1:] if fragment.startswith("#") else fragment
    values = parse_qs(raw).get(STEP_FRAGMENT_KEY)
    if not values:
        return None
    return values[0] or None


class NavigationHistory(Protocol):
    @property
    def location_hash(self) -> str: ...

    def push_state(self, fragment: str) -> None: ...

    def replace_state(self, fragment: str) -> None: ...

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]: ...

    def sync(self) -> None: ...


class _ListenerRegistry:
    def __init__(self) -> None:
        self._listeners: list[HistoryListener] = []

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _dispatch(self, fragment: str) -> None:
        for listener in list(self._listeners):
            listener(fragment)


class MemoryHistory(_ListenerRegistry):
    """In-memory session history with browser-like back/forward semantics.

    ``push_state`` and ``replace_state`` never notify listeners, exactly like
    ``history.pushState``; ``back``, ``forward`` and ``set_hash`` do.
    """

    def __init__(self, initial_fragment: str = "") -> None:
        super().__init__()
        self._entries: list[str] = [initial_fragment]
        self._index = 0

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def location_hash(self) -> str:
        return self._entries[self._index]

    def push_state(self, fragment: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(fragment)
        self._index = len(self._entries) - 1

    def replace_state(self, fragment: str) -> None:
        self._entries[self._index] = fragment

    def set_hash(self, fragment: str) -> None:
        """Assign the fragment the way ``location.hash = ...`` does."""

        if fragment == self.location_hash:
            return
        self.push_state(fragment)
        self._dispatch(fragment)

    def go(self, delta: int) -> None:
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return
        self._index = target
        self._dispatch(self.location_hash)

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def sync(self) -> None:
        return None


class QueryParamHistory(_ListenerRegistry):
    """History adapter that mirrors the active fragment into Streamlit query params.

    Streamlit does not expose the URL fragment to Python, so the step name is
    written to a query parameter instead. The entry stack is stored in the
    session mapping; :meth:`sync` compares it with the URL at the start of each
    script run and reports a history event when the browser moved elsewhere.
    """

    def __init__(
        self,
        *,
        storage: MutableMapping[str, object],
        storage_key: str,
        query_params: MutableMapping[str, object] | None = None,
        param: str = STEP_FRAGMENT_KEY,
    ) -> None:
        super().__init__()
        self._storage = storage
        self._storage_key = storage_key
        self._query_params = cast(MutableMapping[str, object], query_params if query_params is not None else st.query_params)
        self._param = param

    @property
    def _state(self) -> dict[str, object]:
        raw = self._storage.get(self._storage_key)
        if isinstance(raw, dict):
            entries = raw.get("entries")
            index = raw.get("index")
            if isinstance(entries, list) and entries and isinstance(index, int) and 0 <= index < len(entries):
                return raw
        state: dict[str, object] = {"entries": [format_step_fragment(self._read_param())], "index": 0}
        self._storage[self._storage_key] = state
        return state

    @property
    def _entries(self) -> list[str]:
        return cast(list[str], self._state["entries"])

    @property
    def _index(self) -> int:
        return cast(int, self._state["index"])

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def location_hash(self) -> str:
        return self._entries[self._index]

    def push_state(self, fragment: str) -> None:
        state = self._state
        entries = cast(list[str], state["entries"])
        del entries[self._index + 1 :]
        entries.append(fragment)
        state["index"] = len(entries) - 1
        self._write_param(fragment)

    def replace_state(self, fragment: str) -> None:
        self._entries[self._index] = fragment
        self._write_param(fragment)

    def sync(self) -> None:
        current_step = parse_step_fragment(self.location_hash)
        url_step = self._read_param()
        if url_step == current_step:
            return
        fragment = format_step_fragment(url_step)
        state = self._state
        entries = cast(list[str], state["entries"])
        index = self._index
        candidates = [index - 1, index + 1, *range(len(entries))]
        for candidate in candidates:
            if 0 <= candidate < len(entries) and entries[candidate] == fragment:
                state["index"] = candidate
                break
        else:
            del entries[index + 1 :]
            entries.append(fragment)
            state["index"] = len(entries) - 1
        logger.debug("Adopting history entry '%s' from the URL", fragment)
        self._dispatch(fragment)

    def _read_param(self) -> str | None:
        if hasattr(self._query_params, "get_all"):
            values = list(getattr(self._query_params, "get_all")(self._param))
        else:
            raw = self._query_params.get(self._param)
            values = list(raw) if isinstance(raw, (list, tuple)) else ([raw] if raw is not None else [])
        for value in values:
            if isinstance(value, str) and value:
                return value
        return None

    def _write_param(self, fragment: str) -> None:
        step_name = parse_step_fragment(fragment)
        if step_name:
            self._query_params[self._param] = step_name
        else:
            self._query_params.pop(self._param, None)


__all__ = [
    "HistoryListener",
    "MemoryHistory",
    "NavigationHistory",
    "QueryParamHistory",
    "STEP_FRAGMENT_KEY",
    "format_step_fragment",
    "parse_step_fragment",
]
