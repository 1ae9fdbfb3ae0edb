from __future__ import annotations

import logging

from ..models.config_models import ReaderConfig
from ..models.error_record import ErrorRecord
from ..models.payload import AggregatedPayload
from ..services import status as node_status
from ..services.aggregator import aggregate
from ..services.discovery import enumerate_files
from ..services.output_writer import write_output
from ..services.path_resolver import resolve_path
from .context import DoneFn, Message, NodeHost, SendFn

"""Reader node: one input event -> one aggregate-and-write -> one completion.

Every invocation builds its own payload and counters; the node keeps no
per-event state, so overlapping events need no locking.
"""

__all__ = [
    "XlsxReaderNode",
]

logger = logging.getLogger(__name__)


class XlsxReaderNode:
    """Reads the configured workbooks for each input message."""

    def __init__(self, config: ReaderConfig, host: NodeHost) -> None:
        self.config = config
        self.host = host

    def run(self, msg: Message) -> AggregatedPayload:
        """Resolve, enumerate, aggregate and write. Errors propagate."""
        return self._read(resolve_path(self.config.path, msg, self.host), msg)

    def _read(self, path: str, msg: Message) -> AggregatedPayload:
        cfg = self.config
        files = enumerate_files(path, cfg.enumeration)
        logger.info(f"reading {len(files)} workbook(s) from {path}")
        payload = aggregate(files, cfg.enumeration, cfg.fill)
        write_output(cfg.output, payload.to_dict(), msg, self.host)
        return payload

    def handle_input(
        self, msg: Message, send: SendFn, done: DoneFn | None = None
    ) -> AggregatedPayload | None:
        """Host lifecycle hook.

        On success the (mutated) message is sent and ``done()`` is called. On
        failure an ErrorRecord goes to the host error channel and ``done`` gets
        the exception; the message is not sent. The payload is returned on
        success for callers that run the node directly.
        """
        self.host.status(node_status.reading())
        path = ""  # stays empty when resolution itself fails
        try:
            path = resolve_path(self.config.path, msg, self.host)
            payload = self._read(path, msg)
        except Exception as e:
            self.host.error(ErrorRecord.from_exception(e, path=path), msg)
            self.host.status(node_status.failed())
            if done is not None:
                done(e)
            return None

        self.host.status(node_status.succeeded(payload.summary))
        send(msg)
        if done is not None:
            done(None)
        return payload
