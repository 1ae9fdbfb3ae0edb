from __future__ import annotations

import os
from pathlib import Path

import pytest

from xlsx_reader.models.config_models import EnumerationConfig, ReadMode
from xlsx_reader.services.discovery import NoFilesFoundError, enumerate_files, scan_directory

DIRECTORY = EnumerationConfig(mode=ReadMode.DIRECTORY_SCAN)
SINGLE = EnumerationConfig(mode=ReadMode.SINGLE_FILE)


def test_single_file_mode_returns_path_unchanged(tmp_path: Path):
    # existence is the parser's business
    missing = str(tmp_path / "not-there.xlsx")
    assert enumerate_files(missing, SINGLE) == [missing]


def test_directory_scan_filters_extension_case_insensitive(tmp_path: Path):
    for name in ["b.xlsx", "A.XLSX", "c.Xlsx", "notes.txt", "old.xls", "x.xlsx.bak"]:
        (tmp_path / name).write_bytes(b"")
    files = enumerate_files(str(tmp_path), DIRECTORY)
    assert files == [
        os.path.join(str(tmp_path), "A.XLSX"),
        os.path.join(str(tmp_path), "b.xlsx"),
        os.path.join(str(tmp_path), "c.Xlsx"),
    ]
    assert all(f.lower().endswith(".xlsx") for f in files)


def test_directory_scan_skips_non_regular_entries(tmp_path: Path):
    (tmp_path / "folder.xlsx").mkdir()
    (tmp_path / "real.xlsx").write_bytes(b"")
    os.symlink(tmp_path / "gone.bin", tmp_path / "broken.xlsx")
    assert scan_directory(str(tmp_path)) == [os.path.join(str(tmp_path), "real.xlsx")]


def test_directory_scan_follows_symlink_to_file(tmp_path: Path):
    target = tmp_path / "target.bin"
    target.write_bytes(b"")
    os.symlink(target, tmp_path / "link.xlsx")
    assert scan_directory(str(tmp_path)) == [os.path.join(str(tmp_path), "link.xlsx")]


def test_directory_scan_is_not_recursive(tmp_path: Path):
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "deep.xlsx").write_bytes(b"")
    with pytest.raises(NoFilesFoundError):
        enumerate_files(str(tmp_path), DIRECTORY)


def test_empty_directory_raises(tmp_path: Path):
    with pytest.raises(NoFilesFoundError, match="No .xlsx files found"):
        enumerate_files(str(tmp_path), DIRECTORY)


def test_unreadable_directory_raises(tmp_path: Path):
    with pytest.raises(NoFilesFoundError) as e:
        enumerate_files(str(tmp_path / "missing"), DIRECTORY)
    assert isinstance(e.value.__cause__, OSError)


def test_single_file_mode_empty_path_raises():
    with pytest.raises(NoFilesFoundError):
        enumerate_files("", SINGLE)
