from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the xlsx reader.

These describe one reader instance as configured by the host: where the path
comes from, how files are enumerated, which columns get forward-filled and
where the aggregated payload is written. They are built once at construction
and never mutated during an invocation.
"""

__all__ = [
    "SourceKind",
    "ReadMode",
    "OutputScope",
    "PathSpec",
    "EnumerationConfig",
    "FillConfig",
    "OutputTarget",
    "ReaderConfig",
    "parse_merged_columns",
    "DEFAULT_OUTPUT_PATH",
]

DEFAULT_OUTPUT_PATH = "data"


class SourceKind(Enum):
    """Where a configured path expression is resolved from."""
    LITERAL = "str"
    MESSAGE_FIELD = "msg"
    FLOW_VAR = "flow"
    GLOBAL_VAR = "global"
    ENV_VAR = "env"


class ReadMode(Enum):
    SINGLE_FILE = "file"
    DIRECTORY_SCAN = "directory"


class OutputScope(Enum):
    MESSAGE = "msg"
    FLOW_STORE = "flow"
    GLOBAL_STORE = "global"


@dataclass(frozen=True)
class PathSpec:
    expression: str
    source_kind: SourceKind = SourceKind.LITERAL


@dataclass(frozen=True)
class EnumerationConfig:
    mode: ReadMode = ReadMode.SINGLE_FILE
    exclude_pattern: str | None = None  # sheet name regex (search semantics)
    include_hidden: bool = False


@dataclass(frozen=True)
class FillConfig:
    """Forward-fill settings for merged-cell columns.

    Column names are matched case-sensitively against sheet headers.
    """
    enabled: bool = False
    columns: tuple[str, ...] = ()

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.columns)


@dataclass(frozen=True)
class OutputTarget:
    scope: OutputScope = OutputScope.MESSAGE
    deep_path: str = DEFAULT_OUTPUT_PATH  # "." separated


@dataclass(frozen=True)
class ReaderConfig:
    """Root configuration of one reader node."""
    path: PathSpec
    enumeration: EnumerationConfig = field(default_factory=EnumerationConfig)
    fill: FillConfig = field(default_factory=FillConfig)
    output: OutputTarget = field(default_factory=OutputTarget)


def parse_merged_columns(raw: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Turn ``"Dept, Region,,"`` (or a list) into ``("Dept", "Region")``.

    Order is kept, names are trimmed, empty names are dropped. No case folding.
    """
    if raw is None:
        return ()
    parts = raw.split(",") if isinstance(raw, str) else [str(p) for p in raw]
    return tuple(p.strip() for p in parts if p.strip())
