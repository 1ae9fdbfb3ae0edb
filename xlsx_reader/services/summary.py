from __future__ import annotations

from ..models.payload import Summary

"""Summary line rendering for the SUMMARY log output."""


def render_summary_line(summary: Summary) -> str:
    """Render a SUMMARY line from the aggregation counters.

    Format:
    SUMMARY files={files} sheets={sheets} rows={rows}

    Examples:
        >>> render_summary_line(Summary(file_count=2, sheet_count=3, row_count=10))
        'SUMMARY files=2 sheets=3 rows=10'
    """
    return (
        f"SUMMARY files={summary.file_count} "
        f"sheets={summary.sheet_count} "
        f"rows={summary.row_count}"
    )
