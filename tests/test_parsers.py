# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering the colon-delimited report parser."""

from __future__ import annotations

import pytest

from hdldiag.models import CandidateRecord
from hdldiag.parsers import (
    ColonReportParser,
    ReportParser,
    iter_candidates,
    parse_line,
    parse_position,
)


def test_parse_line_reconstructs_message_with_colons() -> None:
    candidate = parse_line("tool:3:5:Error: x:y", file_path="/x/foo.sv")

    assert candidate == CandidateRecord(file_path="/x/foo.sv", line=2, column=4, message="Error: x:y")
    assert candidate.is_well_formed()


@pytest.mark.parametrize(
    ("field", "expected"),
    [
        ("1", 0),
        ("42", 41),
        (" 7 ", 6),
        ("0", -1),
        ("", None),
        ("abc", None),
        ("3.5", None),
        ("-2", None),
        (None, None),
    ],
)
def test_parse_position(field: str | None, expected: int | None) -> None:
    assert parse_position(field) == expected


@pytest.mark.parametrize(
    "line",
    [
        "tool:x:5:unknown line",
        "tool:3:y:unknown column",
        "tool:3:5:",
        "tool:3:5",
        "tool:3",
        "no separators at all",
        "tool:0:1:line zero is not 1-based",
    ],
)
def test_malformed_lines_are_not_well_formed(line: str) -> None:
    candidate = parse_line(line, file_path="/x/foo.sv")

    assert not candidate.is_well_formed()


def test_iter_candidates_skips_blank_lines_and_handles_crlf() -> None:
    stdout = "tool:2:1:error: undeclared signal\r\n\r\n   \ntool:5:3:unused variable\n"

    candidates = list(iter_candidates(stdout, file_path="/x/foo.sv"))

    assert [(c.line, c.column, c.message) for c in candidates] == [
        (1, 0, "error: undeclared signal"),
        (4, 2, "unused variable"),
    ]


@pytest.mark.parametrize("stdout", [None, ""])
def test_iter_candidates_without_input_yields_nothing(stdout: str | None) -> None:
    assert list(iter_candidates(stdout, file_path="/x/foo.sv")) == []


def test_iter_candidates_is_lazy() -> None:
    candidates = iter_candidates("a:1:1:first\na:2:2:second", file_path="/x/foo.sv")

    assert next(candidates).message == "first"
    assert next(candidates).message == "second"
    with pytest.raises(StopIteration):
        next(candidates)


def test_colon_report_parser_custom_separator() -> None:
    parser = ColonReportParser(separator="|")

    candidates = list(parser.parse("tool|4|2|bad | thing", file_path="/x/foo.sv"))

    assert isinstance(parser, ReportParser)
    assert candidates[0].line == 3
    assert candidates[0].column == 1
    assert candidates[0].message == "bad | thing"
