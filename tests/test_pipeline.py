# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the report-to-collection pipeline."""

from __future__ import annotations

import logging

import pytest

from hdldiag.config import DiagnosticsConfig, ToolConfig
from hdldiag.merger import StalePolicy
from hdldiag.models import DiagnosticRecord, ProcessResult, SourceDocument
from hdldiag.pipeline import DiagnosticPipeline, build_pipeline, parse_diagnostics
from hdldiag.severity import Severity

DOCUMENT_PATH = "/x/foo.sv"


def test_example_report_on_empty_collection(document: SourceDocument) -> None:
    stdout = "tool:2:1:error: undeclared signal\ntool:5:3:unused variable\n"
    collection: dict[str, list[DiagnosticRecord]] = {}

    parse_diagnostics(None, stdout, "", document, DOCUMENT_PATH, collection)

    assert collection == {
        DOCUMENT_PATH: [
            DiagnosticRecord(
                file_path=DOCUMENT_PATH,
                line=1,
                column=0,
                severity=Severity.ERROR,
                message="error: undeclared signal",
            ),
            DiagnosticRecord(
                file_path=DOCUMENT_PATH,
                line=4,
                column=2,
                severity=Severity.WARNING,
                message="unused variable",
            ),
        ]
    }


@pytest.mark.parametrize("stdout", [None, ""])
def test_no_input_leaves_collection_unchanged(
    stdout: str | None,
    document: SourceDocument,
    stale_record: DiagnosticRecord,
) -> None:
    collection = {DOCUMENT_PATH: [stale_record]}

    DiagnosticPipeline().run(ProcessResult(stdout=stdout), document, DOCUMENT_PATH, collection)

    assert collection == {DOCUMENT_PATH: [stale_record]}


def test_missing_document_is_a_no_op() -> None:
    collection: dict[str, list[DiagnosticRecord]] = {}

    DiagnosticPipeline().run(ProcessResult(stdout="tool:1:1:error: x"), None, DOCUMENT_PATH, collection)

    assert collection == {}


def test_replace_then_append_drops_stale_entries(document: SourceDocument, stale_record: DiagnosticRecord) -> None:
    collection = {DOCUMENT_PATH: [stale_record]}
    stdout = "t:1:1:first\nt:2:1:second\nt:3:1:third"

    DiagnosticPipeline().run(ProcessResult(stdout=stdout), document, DOCUMENT_PATH, collection)

    assert [record.message for record in collection[DOCUMENT_PATH]] == ["first", "second", "third"]


def test_only_malformed_lines_keep_prior_diagnostics(
    document: SourceDocument,
    stale_record: DiagnosticRecord,
    caplog: pytest.LogCaptureFixture,
) -> None:
    collection = {DOCUMENT_PATH: [stale_record]}
    stdout = "garbage\nt:x:1:bad line\nt:1:1:\n"

    with caplog.at_level(logging.DEBUG, logger="hdldiag.pipeline"):
        DiagnosticPipeline().run(ProcessResult(stdout=stdout), document, DOCUMENT_PATH, collection)

    assert collection == {DOCUMENT_PATH: [stale_record]}
    assert "dropped 3 malformed" in caplog.text


def test_clear_policy_empties_document_without_findings(
    document: SourceDocument,
    stale_record: DiagnosticRecord,
) -> None:
    collection = {DOCUMENT_PATH: [stale_record]}
    pipeline = DiagnosticPipeline(stale_policy=StalePolicy.CLEAR)

    pipeline.run(ProcessResult(stdout="t:oops"), document, DOCUMENT_PATH, collection)

    assert collection == {DOCUMENT_PATH: []}


def test_malformed_lines_between_valid_ones_are_skipped(document: SourceDocument) -> None:
    collection: dict[str, list[DiagnosticRecord]] = {}
    stdout = "t:1:1:first\nnot a diagnostic\nt:2:2:second"

    DiagnosticPipeline().run(ProcessResult(stdout=stdout), document, DOCUMENT_PATH, collection)

    assert [(record.line, record.message) for record in collection[DOCUMENT_PATH]] == [(0, "first"), (1, "second")]


def test_error_and_stderr_are_not_interpreted(document: SourceDocument) -> None:
    collection: dict[str, list[DiagnosticRecord]] = {}
    result = ProcessResult(error="exit 1", stdout="t:1:1:unused wire", stderr="t:9:9:error: from stderr", returncode=1)

    DiagnosticPipeline().run(result, document, DOCUMENT_PATH, collection)

    assert [record.message for record in collection[DOCUMENT_PATH]] == ["unused wire"]


def test_injected_classifier_is_used(document: SourceDocument) -> None:
    collection: dict[str, list[DiagnosticRecord]] = {}
    pipeline = DiagnosticPipeline(classifier=lambda message: Severity.ERROR)

    pipeline.run(ProcessResult(stdout="t:1:1:unused wire"), document, DOCUMENT_PATH, collection)

    assert collection[DOCUMENT_PATH][0].severity is Severity.ERROR


def test_build_pipeline_from_config(document: SourceDocument, stale_record: DiagnosticRecord) -> None:
    pipeline = build_pipeline(
        DiagnosticsConfig(severity_rules=["verible:unused=error"], stale_policy="clear", separator=":"),
        ToolConfig(),
    )
    collection = {DOCUMENT_PATH: [stale_record], "/y/bar.sv": [stale_record]}

    pipeline.run(ProcessResult(stdout="t:3:4:unused variable"), document, DOCUMENT_PATH, collection)

    assert pipeline.stale_policy is StalePolicy.CLEAR
    assert collection[DOCUMENT_PATH][0].severity is Severity.ERROR
    assert collection["/y/bar.sv"] == [stale_record]


def test_build_pipeline_for_other_tool_keeps_error_rule(document: SourceDocument) -> None:
    pipeline = build_pipeline(DiagnosticsConfig(), ToolConfig(name="verilator", executable="verilator"))
    collection: dict[str, list[DiagnosticRecord]] = {}

    pipeline.run(
        ProcessResult(stdout="t:2:1:error: undeclared signal\nt:5:3:unused variable\n"),
        document,
        DOCUMENT_PATH,
        collection,
    )

    assert [record.severity for record in collection[DOCUMENT_PATH]] == [Severity.ERROR, Severity.WARNING]
