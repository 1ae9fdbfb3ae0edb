from __future__ import annotations

from dataclasses import dataclass

from ..models.payload import Summary

"""Status indicator values shown by the host while a read is running.

Three states: in progress, success with summary counts, error. They are
observability only and never affect control flow.
"""

__all__ = [
    "NodeStatus",
    "reading",
    "succeeded",
    "failed",
]


@dataclass(frozen=True)
class NodeStatus:
    fill: str   # blue | green | red
    shape: str  # dot | ring
    text: str


def reading() -> NodeStatus:
    return NodeStatus(fill="blue", shape="dot", text="reading...")


def succeeded(summary: Summary) -> NodeStatus:
    return NodeStatus(
        fill="green",
        shape="dot",
        text=f"files:{summary.file_count} sheets:{summary.sheet_count}",
    )


def failed() -> NodeStatus:
    return NodeStatus(fill="red", shape="ring", text="error")
