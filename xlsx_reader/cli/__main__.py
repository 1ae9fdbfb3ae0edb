from __future__ import annotations

import argparse
import json
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..excel.reader import FileReadError, extract_rows, read_workbook
from ..host.context import LocalHost, Message
from ..host.node import XlsxReaderNode
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..services.discovery import NoFilesFoundError, enumerate_files
from ..services.path_resolver import ConfigurationError, resolve_path
from ..services.summary import render_summary_line

"""CLI entrypoint.

Runs a single reader invocation outside of a host runtime:
- load ``.env`` (so ``path_type: env`` can see its values) and the YAML config
- build the input message from ``--msg`` and an in-memory host
- print the resulting message as JSON and a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/reader.yml")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; existing variables win unless override."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Read .xlsx workbooks into a structured payload")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Reader config YAML")
    p.add_argument("--msg", default="{}", help="Input message as a JSON object")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _parse_message(raw: str) -> Message:
    msg = json.loads(raw)
    if not isinstance(msg, dict):
        raise ValueError("--msg must be a JSON object")
    return msg


def _inspect_data(cfg, msg: Message, host: LocalHost) -> int:
    try:
        path = resolve_path(cfg.path, msg, host)
        files = enumerate_files(path, cfg.enumeration)
    except (ConfigurationError, NoFilesFoundError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    for f in files:
        print(f"FILE: {f}")
        try:
            workbook = read_workbook(f)
        except FileReadError as e:
            print(f"  read_error: {e}")
            continue
        for sname in workbook.sheet_names:
            rows = extract_rows(workbook.sheets[sname])
            hidden = " (hidden)" if workbook.is_hidden(sname) else ""
            columns = list(rows[0].keys()) if rows else []
            print(f"  SHEET: {sname}{hidden} cols={columns}")
            print("    sample_rows=", json.dumps(rows[:3], default=_json_default, ensure_ascii=False))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when nothing was passed, so main([]) in tests stays clean
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        msg = _parse_message(args.msg)
    except ValueError as e:
        logger.error(f"msg: {e}")
        return EXIT_FATAL

    host = LocalHost()
    if args.inspect_data:
        return _inspect_data(cfg, msg, host)

    node = XlsxReaderNode(cfg, host)
    sent: list[Message] = []
    payload = node.handle_input(msg, sent.append)

    if payload is None:
        error_log = ErrorLogBuffer()
        for record, _ in host.errors:
            error_log.append(record)
        written = error_log.flush()
        if written is not None:
            logger.info(f"error log written: {written}")
        return EXIT_FATAL

    # flow/global targets land in the stores, so show them next to the message
    output: dict[str, Any] = {"msg": sent[0]}
    for scope, store in (("flow", host.flow), ("global", host.global_)):
        if store.as_dict():
            output[scope] = store.as_dict()
    print(json.dumps(output, default=_json_default, ensure_ascii=False, indent=2))

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(payload.summary).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
