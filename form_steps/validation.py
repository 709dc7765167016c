"""Required-field checks for form steps."""

from __future__ import annotations

from typing import Iterable, Mapping


def is_value_present(value: object | None) -> bool:
    """Return ``True`` when ``value`` should count as filled in."""

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(is_value_present(item) for item in value)
    if isinstance(value, Mapping):
        return any(is_value_present(item) for item in value.values())
    return True


def resolve_missing_required_fields(
    required_fields: Iterable[str],
    values: Mapping[str, object],
) -> list[str]:
    """Return required fields without a usable value, in registration order."""

    missing: list[str] = []
    for field in required_fields:
        if not is_value_present(values.get(field)):
            missing.append(field)
    return list(dict.fromkeys(missing))


__all__ = ["is_value_present", "resolve_missing_required_fields"]
