# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from hdldiag.models import DiagnosticRecord, SourceDocument
from hdldiag.severity import Severity

DOCUMENT_PATH = "/x/foo.sv"


@pytest.fixture
def document() -> SourceDocument:
    """Return a document handle for :data:`DOCUMENT_PATH`."""
    return SourceDocument(uri=f"file://{DOCUMENT_PATH}")


@pytest.fixture
def stale_record() -> DiagnosticRecord:
    """Return a diagnostic left over from an earlier run."""
    return DiagnosticRecord(
        file_path=DOCUMENT_PATH,
        line=40,
        column=0,
        severity=Severity.WARNING,
        message="old finding",
    )
