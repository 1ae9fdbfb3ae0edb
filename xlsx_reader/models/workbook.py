from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

"""ParsedWorkbook model: one opened workbook, before any normalization."""

__all__ = [
    "ParsedWorkbook",
]


@dataclass(frozen=True)
class ParsedWorkbook:
    """Sheets of a single workbook as decoded by pandas/openpyxl.

    sheet_names keeps the workbook declaration order. Grids are raw
    (``header=None``) so the header row is still part of the data.
    """
    path: str
    sheet_names: list[str]
    sheets: dict[str, pd.DataFrame] = field(default_factory=dict)
    hidden_flags: dict[str, bool] = field(default_factory=dict)  # hidden or veryHidden

    def is_hidden(self, sheet_name: str) -> bool:
        return self.hidden_flags.get(sheet_name, False)
