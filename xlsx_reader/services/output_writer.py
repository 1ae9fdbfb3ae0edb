from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from ..host.context import Message, NodeHost, has_store_capability
from ..host.properties import message_path, set_deep, split_path
from ..models.config_models import DEFAULT_OUTPUT_PATH, OutputScope, OutputTarget

"""Place the aggregated payload into the configured destination.

msg scope writes into the message at the deep path (``data`` when the path
is blank). flow/global scope writes
into the host store: the first path segment is the store key, deeper
segments are set inside the stored object without disturbing siblings. A
store that can't get/set falls back to the message write.
"""

__all__ = [
    "DEFAULT_STORE_KEY",
    "write_output",
]

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "xlsxReader"


def _write_message(msg: Message, path: str, value: Any) -> None:
    set_deep(msg, message_path(path) or [DEFAULT_OUTPUT_PATH], value)


def _write_store(store: Any, path: str, value: Any) -> None:
    parts = split_path(path)
    if not parts:
        store.set(DEFAULT_STORE_KEY, value)
        return

    root_key, rest = parts[0], parts[1:]
    if not rest:
        store.set(root_key, value)
        return

    root = store.get(root_key)
    if not isinstance(root, MutableMapping):
        root = {}
    set_deep(root, rest, value)
    store.set(root_key, root)


def write_output(target: OutputTarget, value: Any, msg: Message, host: NodeHost | None = None) -> None:
    """Commit ``value`` to the message or to a flow/global store."""
    if target.scope is OutputScope.MESSAGE:
        _write_message(msg, target.deep_path, value)
        return

    if host is None:
        store = None
    elif target.scope is OutputScope.FLOW_STORE:
        store = host.flow
    else:
        store = host.global_

    if not has_store_capability(store):
        logger.warning(
            f"{target.scope.value} store has no get/set, writing to msg.{target.deep_path} instead"
        )
        _write_message(msg, target.deep_path, value)
        return

    _write_store(store, target.deep_path, value)
