"""Form value parsing helpers shared across plugins."""

from __future__ import annotations

from typing import Any, Mapping

FormDataLike = Mapping[str, Any] | Any


def _lookup(data: FormDataLike, key: str) -> Any:
    if data is None:
        return None
    getter = getattr(data, "get", None)
    if callable(getter):
        return getter(key)
    return data[key] if isinstance(data, Mapping) and key in data else None


def get_str(
    data: FormDataLike,
    key: str,
    default: str | None = None,
    *,
    strip: bool = True,
) -> str | None:
    """Extract a string from *data*.

    Missing values fall back to ``default``; numbers are converted with
    ``str``. With ``strip`` set, surrounding whitespace is removed.
    """

    raw = _lookup(data, key)
    if raw is None:
        return default
    if isinstance(raw, bool):
        value = "true" if raw else "false"
    elif isinstance(raw, (int, float, str)):
        value = str(raw)
    else:
        return default
    return value.strip() if strip else value


def get_bool(
    data: FormDataLike,
    key: str,
    default: bool = False,
    *,
    truthy: tuple[str, ...] = ("1", "true", "on", "yes"),
) -> bool:
    """Extract a boolean flag from *data*."""

    raw = _lookup(data, key)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    if isinstance(raw, str):
        return raw.strip().lower() in truthy
    return default


__all__ = ["FormDataLike", "get_str", "get_bool"]
