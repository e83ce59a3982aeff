# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn HDL lint tool reports into per-document diagnostic collections."""

from __future__ import annotations

from .merger import CollectionMerger, StalePolicy
from .models import (
    CandidateRecord,
    DiagnosticCollection,
    DiagnosticRecord,
    DocumentHandle,
    ProcessResult,
    SourceDocument,
)
from .parsers import ColonReportParser, ReportParser, iter_candidates
from .pipeline import DiagnosticPipeline, build_pipeline, parse_diagnostics
from .severity import RuleTableClassifier, Severity, classify_severity

__all__ = [
    "CandidateRecord",
    "ColonReportParser",
    "CollectionMerger",
    "DiagnosticCollection",
    "DiagnosticPipeline",
    "DiagnosticRecord",
    "DocumentHandle",
    "ProcessResult",
    "ReportParser",
    "RuleTableClassifier",
    "Severity",
    "SourceDocument",
    "StalePolicy",
    "build_pipeline",
    "classify_severity",
    "iter_candidates",
    "parse_diagnostics",
]
