# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from openpyxl import Workbook

from xlsx_reader.logging.init import reset_logging

WorkbookFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handlers bind sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def make_workbook() -> WorkbookFactory:
    """Factory writing a real .xlsx with openpyxl.

    ``sheets`` maps sheet name -> rows (lists of cell values, None = empty).
    Sheets named in ``hidden`` / ``very_hidden`` get that visibility state.
    """

    def _make(
        path: Path,
        sheets: dict[str, list[list[object]]],
        hidden: Iterable[str] = (),
        very_hidden: Iterable[str] = (),
    ) -> Path:
        wb = Workbook()
        wb.remove(wb.active)
        hidden_set, very_hidden_set = set(hidden), set(very_hidden)
        for name, rows in sheets.items():
            ws = wb.create_sheet(title=name)
            for row in rows:
                ws.append(row)
            if name in hidden_set:
                ws.sheet_state = "hidden"
            elif name in very_hidden_set:
                ws.sheet_state = "veryHidden"
        wb.save(path)
        return path

    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """path: ./data
path_type: str
mode: directory
exclude_regex: "^Temp"
include_hidden: false
output_target_type: msg
output_target_path: data
fill_merged: true
merged_columns: "Dept, Region"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "reader.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def staff_workbooks(temp_workdir: Path, make_workbook: WorkbookFactory) -> list[Path]:
    """Two workbooks in ./data: one with a hidden sheet, one with a Temp sheet."""
    data_dir = temp_workdir / "data"
    first = make_workbook(
        data_dir / "a_staff.xlsx",
        {
            "Staff": [
                ["Name", "Dept"],
                ["Alice", "Eng"],
                ["Bob", None],
                ["Carol", "Ops"],
            ],
            "Secret": [
                ["Key", "Value"],
                ["token", "abc"],
            ],
        },
        hidden=["Secret"],
    )
    second = make_workbook(
        data_dir / "b_sites.xlsx",
        {
            "Sites": [
                ["Site", "Region"],
                ["Tokyo", "APAC"],
                ["Osaka", None],
            ],
            "TempCalc": [
                ["x"],
                [1],
            ],
        },
    )
    return [first, second]
