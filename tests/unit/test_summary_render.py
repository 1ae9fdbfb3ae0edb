from __future__ import annotations

import re

from xlsx_reader.models.payload import Summary
from xlsx_reader.services import status
from xlsx_reader.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(r"^SUMMARY\s+files=([0-9]+)\s+sheets=([0-9]+)\s+rows=([0-9]+)$")


def test_render_summary_line():
    line = render_summary_line(Summary(file_count=2, sheet_count=3, row_count=10))
    assert line == "SUMMARY files=2 sheets=3 rows=10"
    assert SUMMARY_PATTERN.match(line)


def test_render_summary_line_zero():
    m = SUMMARY_PATTERN.match(render_summary_line(Summary()))
    assert m and m.groups() == ("0", "0", "0")


def test_status_states():
    assert status.reading().text == "reading..."
    assert status.reading().fill == "blue"
    done = status.succeeded(Summary(file_count=1, sheet_count=4, row_count=9))
    assert (done.fill, done.shape, done.text) == ("green", "dot", "files:1 sheets:4")
    err = status.failed()
    assert (err.fill, err.shape, err.text) == ("red", "ring", "error")
