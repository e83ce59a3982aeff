# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Single-pass pipeline turning one tool report into committed diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .config import DiagnosticsConfig, ToolConfig
from .merger import CollectionMerger, StalePolicy
from .models import DiagnosticCollection, DocumentHandle, ProcessResult
from .parsers import ColonReportParser, ReportParser
from .severity import RuleTableClassifier, Severity, build_severity_rules

LOGGER = logging.getLogger(__name__)

Classifier = Callable[[str | None], Severity]


@dataclass(slots=True)
class DiagnosticPipeline:
    """Parse, classify and merge one report into a diagnostic collection.

    Attributes:
        parser: Splits stdout into candidate records.
        classifier: Maps a message to a :class:`Severity`.
        stale_policy: Handling of documents the run committed nothing for.
    """

    parser: ReportParser = field(default_factory=ColonReportParser)
    classifier: Classifier = field(default_factory=RuleTableClassifier)
    stale_policy: StalePolicy = StalePolicy.PRESERVE

    def run(
        self,
        result: ProcessResult,
        document: DocumentHandle | None,
        document_path: str,
        collection: DiagnosticCollection,
    ) -> None:
        """Commit the diagnostics reported in ``result.stdout`` into ``collection``.

        ``result.error`` and ``result.stderr`` are not interpreted. Malformed
        lines are dropped; nothing is raised for any report content.
        """

        if not document:
            return
        merger = CollectionMerger(collection, policy=self.stale_policy)
        if result.stdout:
            dropped = 0
            for candidate in self.parser.parse(result.stdout, file_path=document_path):
                if not candidate.is_well_formed():
                    dropped += 1
                    continue
                merger.commit(candidate.to_record(self.classifier(candidate.message)))
            if dropped:
                LOGGER.debug("dropped %d malformed report line(s) for %s", dropped, document_path)
        merger.finalize((document_path,))


def build_pipeline(diagnostics: DiagnosticsConfig, tool: ToolConfig | None = None) -> DiagnosticPipeline:
    """Return a pipeline configured from ``diagnostics`` and ``tool`` settings.

    Raises:
        ConfigError: If a severity override is malformed.
    """

    tool_name = tool.name if tool is not None else ToolConfig().name
    return DiagnosticPipeline(
        parser=ColonReportParser(separator=diagnostics.separator),
        classifier=RuleTableClassifier(tool=tool_name, rules=build_severity_rules(diagnostics.severity_rules)),
        stale_policy=StalePolicy.from_name(diagnostics.stale_policy),
    )


def parse_diagnostics(
    error: str | None,
    stdout: str | None,
    stderr: str | None,
    document: DocumentHandle | None,
    document_path: str,
    collection: DiagnosticCollection,
    *,
    pipeline: DiagnosticPipeline | None = None,
) -> None:
    """Functional form of :meth:`DiagnosticPipeline.run` taking the raw process fields."""

    active = pipeline if pipeline is not None else DiagnosticPipeline()
    active.run(ProcessResult(error=error, stdout=stdout, stderr=stderr), document, document_path, collection)


__all__ = ["Classifier", "DiagnosticPipeline", "build_pipeline", "parse_diagnostics"]
