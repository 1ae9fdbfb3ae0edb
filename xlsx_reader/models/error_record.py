from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error reporting.

One ErrorRecord is produced per failed invocation. The node hands it to the
host error channel together with the original message; the CLI additionally
writes it out as a JSON Lines entry.
"""

__all__ = [
    "ErrorRecord",
]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        path: Resolved input path, or "" when resolution itself failed
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    path: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(path: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, path=path, error_type=error_type, message=message)

    @staticmethod
    def from_exception(exc: BaseException, path: str = "") -> ErrorRecord:
        """Build a record whose error_type is derived from the exception class.

        ``NoFilesFoundError`` -> ``NO_FILES_FOUND_ERROR``.
        """
        error_type = _CAMEL_BOUNDARY.sub("_", type(exc).__name__).upper()
        return ErrorRecord.create(path=path, error_type=error_type, message=str(exc))

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)

    def __str__(self) -> str:
        return self.message
