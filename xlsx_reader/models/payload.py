from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Union

from .config_models import EnumerationConfig, FillConfig

"""Payload models produced by one aggregation run.

CellValue is the closed set of values a normalized row may carry. Row order
inside a SheetResult is the source sheet order and must be preserved, since
forward-fill depends on it.
"""

__all__ = [
    "CellValue",
    "Row",
    "SheetResult",
    "Summary",
    "AggregatedPayload",
]

CellValue = Union[str, int, float, bool, datetime, date, time, None]
Row = dict[str, CellValue]
SheetResult = list[Row]


@dataclass
class Summary:
    file_count: int = 0   # files actually opened
    sheet_count: int = 0  # sheets that passed hidden/exclude filters
    row_count: int = 0    # sum of SheetResult lengths

    def to_dict(self) -> dict[str, int]:
        return {
            "file_count": self.file_count,
            "sheet_count": self.sheet_count,
            "row_count": self.row_count,
        }


@dataclass
class AggregatedPayload:
    """Result of reading every enumerated workbook.

    ``data`` maps file path -> sheet name -> rows, in enumeration and
    workbook declaration order.
    """
    data: dict[str, dict[str, SheetResult]] = field(default_factory=dict)
    summary: Summary = field(default_factory=Summary)
    enumeration: EnumerationConfig = field(default_factory=EnumerationConfig)
    fill: FillConfig = field(default_factory=FillConfig)

    @property
    def options(self) -> dict[str, Any]:
        """Echo of the settings applied, kept next to the data for traceability."""
        return {
            "mode": self.enumeration.mode.value,
            "exclude_pattern": self.enumeration.exclude_pattern or None,
            "include_hidden": self.enumeration.include_hidden,
            "fill_merged": self.fill.enabled,
            "merged_columns": list(self.fill.columns),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "summary": self.summary.to_dict(),
            "options": self.options,
        }
