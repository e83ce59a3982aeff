# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the hdldiag package."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class DiagnosticRecord(BaseModel):
    """One structured finding attached to a document position."""

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(min_length=1)
    line: int = Field(ge=0)
    column: int = Field(ge=0)
    severity: Severity
    message: str = Field(min_length=1)


DiagnosticCollection: TypeAlias = MutableMapping[str, list[DiagnosticRecord]]


@dataclass(slots=True, frozen=True)
class CandidateRecord:
    """Raw parse of a single report line prior to classification.

    ``line`` and ``column`` are ``None`` when the report field was not a number.
    """

    file_path: str
    line: int | None
    column: int | None
    message: str

    def is_well_formed(self) -> bool:
        """Return ``True`` when the candidate may become a :class:`DiagnosticRecord`."""

        return (
            bool(self.file_path)
            and self.line is not None
            and self.line >= 0
            and self.column is not None
            and self.column >= 0
            and bool(self.message)
        )

    def to_record(self, severity: Severity) -> DiagnosticRecord:
        """Materialise the candidate with ``severity``; callers check well-formedness first."""

        return DiagnosticRecord(
            file_path=self.file_path,
            line=self.line,
            column=self.column,
            severity=severity,
            message=self.message,
        )


class ProcessResult(BaseModel):
    """Captured outcome of one analysis tool invocation."""

    model_config = ConfigDict(frozen=True)

    error: str | None = None
    stdout: str | None = None
    stderr: str | None = None
    returncode: int | None = None

    @property
    def failed_to_run(self) -> bool:
        """Return ``True`` when the tool could not be executed at all."""
        return self.error is not None and self.returncode is None


@runtime_checkable
class DocumentHandle(Protocol):
    """Source document the analysis ran against."""

    uri: str


@dataclass(slots=True, frozen=True)
class SourceDocument:
    """Minimal :class:`DocumentHandle` backed by a filesystem path."""

    uri: str


__all__ = [
    "CandidateRecord",
    "DiagnosticCollection",
    "DiagnosticRecord",
    "DocumentHandle",
    "ProcessResult",
    "SourceDocument",
]
