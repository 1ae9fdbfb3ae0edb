from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

"""Deep-path helpers for messages and stored objects.

A deep path is a ``.`` separated string such as ``payload.files.path``.
Empty segments (``a..b``, trailing dots) are ignored.
"""

__all__ = [
    "split_path",
    "get_property",
    "message_path",
    "set_deep",
]

_MISSING = object()


def split_path(path: str | None) -> list[str]:
    if not path:
        return []
    return [part.strip() for part in path.split(".") if part.strip()]


def get_property(obj: Any, path: str | list[str], default: Any = None) -> Any:
    """Walk ``path`` into nested mappings; missing segments yield ``default``."""
    parts = split_path(path) if isinstance(path, str) else path
    cur = obj
    for part in parts:
        if not isinstance(cur, MutableMapping):
            return default
        cur = cur.get(part, _MISSING)
        if cur is _MISSING:
            return default
    return cur


def set_deep(obj: MutableMapping[str, Any], parts: list[str], value: Any) -> None:
    """Set ``value`` at ``parts`` inside ``obj``.

    Missing or non-mapping intermediates are replaced by fresh dicts; sibling
    keys at every level are left alone.
    """
    if not parts:
        raise ValueError("deep path must contain at least one segment")
    cur = obj
    for part in parts[:-1]:
        nxt = cur.get(part)
        if not isinstance(nxt, MutableMapping):
            nxt = {}
            cur[part] = nxt
        cur = nxt
    cur[parts[-1]] = value


def message_path(path: str | None) -> list[str]:
    """split_path for message properties; a leading ``msg.`` is dropped."""
    parts = split_path(path)
    if parts and parts[0] == "msg":
        return parts[1:]
    return parts
