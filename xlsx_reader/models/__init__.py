"""Domain models for the xlsx reader.

This package contains the configuration, workbook, payload and error models
shared by the services, the host adapter and the CLI.
"""

from .config_models import (
    EnumerationConfig,
    FillConfig,
    OutputScope,
    OutputTarget,
    PathSpec,
    ReaderConfig,
    ReadMode,
    SourceKind,
)
from .error_record import ErrorRecord
from .payload import AggregatedPayload, CellValue, Row, SheetResult, Summary
from .workbook import ParsedWorkbook

__all__ = [
    # Configuration models
    "EnumerationConfig",
    "FillConfig",
    "OutputScope",
    "OutputTarget",
    "PathSpec",
    "ReaderConfig",
    "ReadMode",
    "SourceKind",
    # Processing models
    "AggregatedPayload",
    "CellValue",
    "ErrorRecord",
    "ParsedWorkbook",
    "Row",
    "SheetResult",
    "Summary",
]
