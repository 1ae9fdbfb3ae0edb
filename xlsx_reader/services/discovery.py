from __future__ import annotations

import logging
import os
import stat

from ..models.config_models import EnumerationConfig, ReadMode

"""Candidate workbook enumeration.

file mode hands the resolved path through untouched (the parser reports a
missing file). directory mode lists the directory non-recursively and keeps
regular files whose name ends in ``.xlsx`` (any case).
"""

__all__ = [
    "NoFilesFoundError",
    "WORKBOOK_EXTENSION",
    "enumerate_files",
    "scan_directory",
]

logger = logging.getLogger(__name__)

WORKBOOK_EXTENSION = ".xlsx"


class NoFilesFoundError(Exception):
    """Raised when enumeration yields no candidate workbook."""


def _is_regular_file(path: str) -> bool:
    # stat failures (broken symlink, permission, race) count as absent
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def scan_directory(directory: str) -> list[str]:
    """List ``.xlsx`` regular files in ``directory``, sorted by name.

    Raises:
        NoFilesFoundError: if the directory can't be listed
    """
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise NoFilesFoundError(f"Error reading directory {directory}: {e}") from e

    candidates = [
        os.path.join(directory, name)
        for name in names
        if name.lower().endswith(WORKBOOK_EXTENSION)
    ]
    files = [p for p in candidates if _is_regular_file(p)]
    if len(files) != len(candidates):
        logger.debug(f"skipped {len(candidates) - len(files)} non-regular entries in {directory}")
    return files


def enumerate_files(path: str, cfg: EnumerationConfig) -> list[str]:
    """Return the ordered list of workbook paths to read.

    Raises:
        NoFilesFoundError: nothing to read for the given path/mode
    """
    if cfg.mode is ReadMode.DIRECTORY_SCAN:
        files = scan_directory(path)
    else:
        files = [path] if path else []

    if not files:
        raise NoFilesFoundError("No .xlsx files found for the provided path/mode.")
    logger.debug(f"enumerated {len(files)} file(s) from {path} (mode={cfg.mode.value})")
    return files
