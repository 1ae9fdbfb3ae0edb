from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from ..excel.reader import normalize_sheet, read_workbook
from ..models.config_models import EnumerationConfig, FillConfig
from ..models.payload import AggregatedPayload
from .path_resolver import ConfigurationError
from .progress import ProgressTracker

"""Aggregation over every enumerated workbook.

Files and sheets are processed one at a time, in enumeration and workbook
declaration order. The first workbook that cannot be read aborts the whole
run: there is no partial payload.
"""

__all__ = [
    "aggregate",
    "compile_exclude_pattern",
]

logger = logging.getLogger(__name__)


def compile_exclude_pattern(pattern: str | None) -> re.Pattern[str] | None:
    """Compile the sheet exclusion regex, ``None`` when unset.

    Raises:
        ConfigurationError: the pattern is not a valid regular expression
    """
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"invalid exclude pattern {pattern!r}: {e}") from e


def aggregate(
    files: Sequence[str],
    enum_cfg: EnumerationConfig,
    fill_cfg: FillConfig,
) -> AggregatedPayload:
    """Read, filter and normalize every sheet of every file.

    Hidden and very hidden sheets are skipped unless ``include_hidden``;
    sheets whose name matches ``exclude_pattern`` (search, not full match)
    are skipped. Skipped sheets do not count towards the summary.

    Raises:
        ConfigurationError: invalid exclude pattern (before any file is read)
        FileReadError: a workbook could not be read (propagated as is)
    """
    exclude = compile_exclude_pattern(enum_cfg.exclude_pattern)
    payload = AggregatedPayload(enumeration=enum_cfg, fill=fill_cfg)
    summary = payload.summary

    with ProgressTracker(len(files)) as progress:
        for file_path in files:
            progress.start_file(file_path)
            workbook = read_workbook(file_path)
            payload.data[file_path] = {}
            summary.file_count += 1

            for sheet_name in workbook.sheet_names:
                if workbook.is_hidden(sheet_name) and not enum_cfg.include_hidden:
                    logger.debug(f"skip hidden sheet {file_path}:{sheet_name}")
                    continue
                if exclude is not None and exclude.search(sheet_name):
                    logger.debug(f"skip excluded sheet {file_path}:{sheet_name}")
                    continue

                rows = normalize_sheet(workbook.sheets[sheet_name], fill_cfg)
                payload.data[file_path][sheet_name] = rows
                summary.sheet_count += 1
                summary.row_count += len(rows)
                logger.debug(f"read {file_path}:{sheet_name} rows={len(rows)}")

            progress.set_postfix(sheets=summary.sheet_count, rows=summary.row_count)
            progress.finish_file()

    return payload
