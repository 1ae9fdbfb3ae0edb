from __future__ import annotations

import os
from typing import Any

from ..host.context import Message, NodeHost, has_store_capability
from ..host.properties import get_property, message_path, split_path
from ..models.config_models import PathSpec, SourceKind

"""Resolve the configured input path.

The expression is interpreted according to its source kind:

- str:    the expression itself
- msg:    deep property of the incoming message (``msg.`` prefix optional)
- flow:   first segment is the flow store key, the rest is walked into it
- global: same as flow, against the global store
- env:    environment variable named by the expression
"""

__all__ = [
    "ConfigurationError",
    "resolve_path",
]


class ConfigurationError(Exception):
    """Raised when the reader configuration cannot produce a usable value."""


def _from_store(store: Any, expression: str) -> Any:
    if not has_store_capability(store):
        return None
    parts = split_path(expression)
    if not parts:
        return None
    return get_property(store.get(parts[0]), parts[1:])


def _lookup(spec: PathSpec, msg: Message, host: NodeHost | None) -> Any:
    kind = spec.source_kind
    if kind is SourceKind.LITERAL:
        return spec.expression
    if kind is SourceKind.MESSAGE_FIELD:
        parts = message_path(spec.expression)
        return get_property(msg, parts) if parts else None
    if kind is SourceKind.FLOW_VAR:
        return _from_store(host.flow if host is not None else None, spec.expression)
    if kind is SourceKind.GLOBAL_VAR:
        return _from_store(host.global_ if host is not None else None, spec.expression)
    if kind is SourceKind.ENV_VAR:
        return os.environ.get(spec.expression.strip()) if spec.expression else None
    raise ConfigurationError(f"unsupported path source: {kind}")


def resolve_path(spec: PathSpec, msg: Message, host: NodeHost | None = None) -> str:
    """Return the concrete filesystem path for ``spec``.

    Raises:
        ConfigurationError: the resolved value is missing, empty or blank,
            or a falsy non-string such as ``False`` or ``0``
    """
    value = _lookup(spec, msg, host)
    if not isinstance(value, str) and not value:
        raise ConfigurationError("No path specified.")
    path = str(value)
    if not path.strip():
        raise ConfigurationError("No path specified.")
    return path
