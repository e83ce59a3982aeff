# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console formatters for diagnostic collections."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import OutputConfig
from .models import DiagnosticRecord
from .severity import Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


@dataclass(slots=True, frozen=True)
class Summary:
    """Counts of diagnostics by severity across a collection."""

    documents: int
    errors: int
    warnings: int

    @property
    def total(self) -> int:
        return self.errors + self.warnings

    @property
    def has_errors(self) -> bool:
        return self.errors > 0


def _iter_records(collection: Mapping[str, Sequence[DiagnosticRecord]]) -> Iterator[DiagnosticRecord]:
    for records in collection.values():
        yield from records


def summarize(collection: Mapping[str, Sequence[DiagnosticRecord]]) -> Summary:
    """Return severity totals for ``collection``."""

    errors = warnings = 0
    for record in _iter_records(collection):
        if record.severity is Severity.ERROR:
            errors += 1
        else:
            warnings += 1
    return Summary(documents=len(collection), errors=errors, warnings=warnings)


def _format_location(record: DiagnosticRecord) -> str:
    # Positions are stored 0-based; people read 1-based.
    return f"{record.file_path}:{record.line + 1}:{record.column + 1}"


def render(collection: Mapping[str, Sequence[DiagnosticRecord]], cfg: OutputConfig, console: Console) -> None:
    match cfg.format:
        case "json":
            _render_json(collection, console)
        case "concise":
            _render_concise(collection, console)
        case "table" | _:
            _render_table(collection, cfg, console)


def _render_table(
    collection: Mapping[str, Sequence[DiagnosticRecord]],
    cfg: OutputConfig,
    console: Console,
) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
    table.add_column("Location", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Message", overflow="fold")
    for record in _iter_records(collection):
        severity = Text(record.severity.value)
        if cfg.color:
            severity.stylize(_SEVERITY_STYLES[record.severity])
        table.add_row(Text(_format_location(record)), severity, Text(record.message))
    if table.row_count:
        console.print(table)
    summary = summarize(collection)
    console.print(
        f"{summary.total} diagnostic(s) in {summary.documents} document(s): "
        f"{summary.errors} error(s), {summary.warnings} warning(s)",
        highlight=False,
    )


def _render_concise(collection: Mapping[str, Sequence[DiagnosticRecord]], console: Console) -> None:
    for record in _iter_records(collection):
        console.print(
            f"{_format_location(record)}: {record.severity.value}: {record.message}",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )


def collection_to_payload(
    collection: Mapping[str, Sequence[DiagnosticRecord]],
) -> dict[str, list[dict[str, object]]]:
    """Return a JSON-compatible mapping of ``collection``."""

    return {path: [record.model_dump(mode="json") for record in records] for path, records in collection.items()}


def _render_json(collection: Mapping[str, Sequence[DiagnosticRecord]], console: Console) -> None:
    payload = json.dumps(collection_to_payload(collection), indent=2)
    console.print(payload, markup=False, highlight=False, emoji=False, soft_wrap=True)


__all__ = ["Summary", "collection_to_payload", "render", "summarize"]
