from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..models.error_record import ErrorRecord
from ..services.status import NodeStatus

"""Host runtime collaborators.

The reader never touches ambient global state: the flow and global stores,
the status indicator and the error channel all come from a NodeHost passed
in explicitly. LocalHost is the in-memory implementation used by the CLI and
the tests.
"""

__all__ = [
    "Message",
    "SendFn",
    "DoneFn",
    "ContextStore",
    "MemoryContextStore",
    "NodeHost",
    "LocalHost",
    "has_store_capability",
]

logger = logging.getLogger(__name__)

Message = dict[str, Any]
SendFn = Callable[[Message], None]
DoneFn = Callable[[BaseException | None], None]


@runtime_checkable
class ContextStore(Protocol):
    """Keyed store shared across invocations (flow or global scope)."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryContextStore:
    """dict backed ContextStore."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def has_store_capability(store: Any) -> bool:
    return (
        store is not None
        and callable(getattr(store, "get", None))
        and callable(getattr(store, "set", None))
    )


class NodeHost(Protocol):
    """What the reader needs from the hosting runtime."""

    @property
    def flow(self) -> Any: ...

    @property
    def global_(self) -> Any: ...

    def status(self, status: NodeStatus) -> None: ...

    def error(self, record: ErrorRecord, msg: Message) -> None: ...


@dataclass
class LocalHost:
    """In-process host: memory stores, recorded statuses and errors."""
    flow: Any = field(default_factory=MemoryContextStore)
    global_: Any = field(default_factory=MemoryContextStore)
    statuses: list[NodeStatus] = field(default_factory=list)
    errors: list[tuple[ErrorRecord, Message]] = field(default_factory=list)

    def status(self, status: NodeStatus) -> None:
        self.statuses.append(status)
        logger.debug(f"status: {status.text}")

    def error(self, record: ErrorRecord, msg: Message) -> None:
        self.errors.append((record, msg))
        logger.error(f"{record.error_type}: {record.message}")
