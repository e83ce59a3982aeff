# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers that convert colon-delimited lint reports into candidate records."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

from .models import CandidateRecord

DEFAULT_SEPARATOR: Final[str] = ":"
_POSITION_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*(\d+)\s*", re.ASCII)


@runtime_checkable
class ReportParser(Protocol):
    """Turn raw tool stdout into candidate records for one document."""

    def parse(self, stdout: str | None, *, file_path: str) -> Iterable[CandidateRecord]:
        """Return candidate records extracted from ``stdout``."""
        ...


def parse_position(field: str | None) -> int | None:
    """Convert a 1-based report position into a 0-based index.

    Returns:
        int | None: The decremented value, or ``None`` when ``field`` is not a number.
    """

    if field is None:
        return None
    match = _POSITION_PATTERN.fullmatch(field)
    if match is None:
        return None
    return int(match.group(1)) - 1


def parse_line(line: str, *, file_path: str, separator: str = DEFAULT_SEPARATOR) -> CandidateRecord:
    """Split ``line`` as ``<ignored>:<line>:<column>:<message...>``.

    Fields past the column are rejoined with ``separator`` so messages keep
    their own colons. Short lines produce an empty message.
    """

    fields = line.split(separator)
    line_field = fields[1] if len(fields) > 1 else None
    column_field = fields[2] if len(fields) > 2 else None
    return CandidateRecord(
        file_path=file_path,
        line=parse_position(line_field),
        column=parse_position(column_field),
        message=separator.join(fields[3:]),
    )


def iter_candidates(
    stdout: str | None,
    *,
    file_path: str,
    separator: str = DEFAULT_SEPARATOR,
) -> Iterator[CandidateRecord]:
    """Yield one candidate per non-empty line of ``stdout``.

    ``None`` or empty output yields nothing.
    """

    if not stdout:
        return
    for raw_line in stdout.split("\n"):
        line = raw_line.removesuffix("\r")
        if not line.strip():
            continue
        yield parse_line(line, file_path=file_path, separator=separator)


@dataclass(slots=True, frozen=True)
class ColonReportParser:
    """Default :class:`ReportParser` for ``tool:line:col:message`` reports."""

    separator: str = DEFAULT_SEPARATOR

    def parse(self, stdout: str | None, *, file_path: str) -> Iterator[CandidateRecord]:
        return iter_candidates(stdout, file_path=file_path, separator=self.separator)


__all__ = [
    "ColonReportParser",
    "DEFAULT_SEPARATOR",
    "ReportParser",
    "iter_candidates",
    "parse_line",
    "parse_position",
]
