from __future__ import annotations

import json
from pathlib import Path

from xlsx_reader.cli.__main__ import main as cli_main


def _json_block(out: str) -> dict:
    lines = out.splitlines()
    start = lines.index("{")
    end = lines.index("}", start)
    return json.loads("\n".join(lines[start : end + 1]))


def test_cli_reads_directory(write_config: Path, staff_workbooks: list[Path], capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    result = _json_block(out)["msg"]["data"]
    assert result["summary"] == {"file_count": 2, "sheet_count": 2, "row_count": 5}
    assert "SUMMARY files=2 sheets=2 rows=5" in out


def test_cli_serializes_dates(temp_workdir: Path, make_workbook, capsys):
    from datetime import datetime

    make_workbook(temp_workdir / "data" / "d.xlsx", {"S": [["When"], [datetime(2024, 3, 1)]]})
    (temp_workdir / "config" / "reader.yml").write_text(
        "path: ./data/d.xlsx\noutput_target_path: out\n", encoding="utf-8"
    )
    assert cli_main([]) == 0
    data = _json_block(capsys.readouterr().out)["msg"]["out"]["data"]
    assert data["./data/d.xlsx"]["S"] == [{"When": "2024-03-01T00:00:00"}]


def test_cli_message_path_and_flow_output(temp_workdir: Path, staff_workbooks: list[Path], capsys):
    (temp_workdir / "config" / "reader.yml").write_text(
        "path: payload.dir\npath_type: msg\nmode: directory\n"
        "output_target_type: flow\noutput_target_path: reports.latest\n",
        encoding="utf-8",
    )
    code = cli_main(["--msg", json.dumps({"payload": {"dir": "./data"}})])
    assert code == 0
    block = _json_block(capsys.readouterr().out)
    assert block["flow"]["reports"]["latest"]["summary"]["sheet_count"] == 3
    assert block["msg"] == {"payload": {"dir": "./data"}}


def test_cli_env_path_from_dotenv(temp_workdir: Path, staff_workbooks: list[Path], monkeypatch, capsys):
    monkeypatch.delenv("XLSX_READER_TEST_DIR", raising=False)
    (temp_workdir / ".env").write_text("XLSX_READER_TEST_DIR=./data\n", encoding="utf-8")
    (temp_workdir / "config" / "reader.yml").write_text(
        "path: XLSX_READER_TEST_DIR\npath_type: env\nmode: directory\n", encoding="utf-8"
    )
    try:
        assert cli_main([]) == 0
    finally:
        monkeypatch.delenv("XLSX_READER_TEST_DIR", raising=False)
    assert "SUMMARY files=2" in capsys.readouterr().out


def test_cli_config_missing(temp_workdir: Path, capsys):
    assert cli_main([]) == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_cli_invalid_msg(write_config: Path, capsys):
    assert cli_main(["--msg", "[1, 2]"]) == 1
    assert "ERROR msg:" in capsys.readouterr().out


def test_cli_failure_writes_error_log(temp_workdir: Path, write_config: Path, capsys):
    # ./data is empty -> no files
    assert cli_main([]) == 1
    out = capsys.readouterr().out
    assert "ERROR NO_FILES_FOUND_ERROR: No .xlsx files found" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert record["error_type"] == "NO_FILES_FOUND_ERROR"
    assert record["path"] == "./data"


def test_cli_inspect_data(write_config: Path, staff_workbooks: list[Path], capsys):
    assert cli_main(["--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "FILE: ./data/a_staff.xlsx" in out
    assert "SHEET: Secret (hidden) cols=['Key', 'Value']" in out
    assert "SHEET: Staff cols=['Name', 'Dept']" in out


def test_cli_debug_flag(write_config: Path, staff_workbooks: list[Path], capsys):
    assert cli_main(["--debug"]) == 0
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG skip hidden sheet" in out
