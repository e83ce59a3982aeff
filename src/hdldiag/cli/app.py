# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the ``lint`` and ``parse`` commands."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from ..config import Config, ConfigError
from ..models import DiagnosticRecord, ProcessResult, SourceDocument
from ..pipeline import DiagnosticPipeline, build_pipeline
from ..reporting import render, summarize
from ..runner import run_tool
from .shared import (
    CLIError,
    CLILogger,
    ConfigOverrides,
    build_cli_logger,
    configure_debug_logging,
    resolve_config,
)

app = typer.Typer(
    name="hdldiag",
    help="Turn HDL lint reports into structured diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)

RULE_HELP = "Severity override as tool:regex=level (repeatable)."


def _fallback_logger(overrides: ConfigOverrides) -> CLILogger:
    cfg = Config()
    cfg.output.emoji = not overrides.no_emoji
    cfg.output.color = not overrides.no_color
    return build_cli_logger(cfg)


def _prepare(root: Path, overrides: ConfigOverrides) -> tuple[Config, CLILogger, DiagnosticPipeline]:
    try:
        cfg = resolve_config(root, overrides)
    except CLIError as exc:
        _fallback_logger(overrides).error_panel(exc)
        raise typer.Exit(code=exc.exit_code) from exc
    logger = build_cli_logger(cfg)
    try:
        pipeline = build_pipeline(cfg.diagnostics, cfg.tool)
    except ConfigError as exc:
        error = CLIError(str(exc), exit_code=2)
        logger.error_panel(error)
        raise typer.Exit(code=error.exit_code) from exc
    return cfg, logger, pipeline


def _finish(collection: dict[str, list[DiagnosticRecord]], cfg: Config, logger: CLILogger) -> None:
    render(collection, cfg.output, logger.console)
    summary = summarize(collection)
    if summary.has_errors:
        raise typer.Exit(code=1)
    if cfg.output.format == "table" and not summary.total:
        logger.ok("No diagnostics reported")


@app.command("lint")
def lint_command(
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Source documents to analyse."),
    root: Path = typer.Option(Path.cwd(), "--root", "-r", help="Project root used to load configuration."),
    rule: list[str] = typer.Option([], "--rule", help=RULE_HELP),
    clear_stale: bool = typer.Option(False, "--clear-stale", help="Empty diagnostics of documents with no findings."),
    output_format: str | None = typer.Option(None, "--format", "-f", help="table, json or concise."),
    executable: str | None = typer.Option(None, "--executable", help="Override the lint executable."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour output."),
    debug: bool = typer.Option(False, "--debug", help="Log internal debug records to stderr."),
) -> None:
    """Run the lint tool on each file and report its diagnostics."""

    configure_debug_logging(debug)
    overrides = ConfigOverrides(
        rules=tuple(rule),
        clear_stale=clear_stale,
        output_format=output_format,
        no_emoji=no_emoji,
        no_color=no_color,
        executable=executable,
    )
    cfg, logger, pipeline = _prepare(root.resolve(), overrides)

    collection: dict[str, list[DiagnosticRecord]] = {}
    analysed = 0
    for file in files:
        resolved = file.resolve()
        document_path = str(resolved)
        result = run_tool(document_path, config=cfg.tool, cwd=root.resolve())
        if result.failed_to_run:
            logger.warn(f"{document_path}: {result.error}")
            continue
        analysed += 1
        if result.error:
            logger.warn(f"{document_path}: {result.error}")
        pipeline.run(result, SourceDocument(uri=resolved.as_uri()), document_path, collection)
    if not analysed:
        error = CLIError(f"{cfg.tool.executable} could not be run on any file", exit_code=2)
        logger.error_panel(error)
        raise typer.Exit(code=error.exit_code)
    _finish(collection, cfg, logger)


@app.command("parse")
def parse_command(
    report: Path | None = typer.Argument(None, metavar="[REPORT]", help="Saved tool output; stdin when omitted."),
    document: str = typer.Option(..., "--document", "-d", help="Document path the report belongs to."),
    root: Path = typer.Option(Path.cwd(), "--root", "-r", help="Project root used to load configuration."),
    rule: list[str] = typer.Option([], "--rule", help=RULE_HELP),
    output_format: str | None = typer.Option(None, "--format", "-f", help="table, json or concise."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour output."),
    debug: bool = typer.Option(False, "--debug", help="Log internal debug records to stderr."),
) -> None:
    """Convert previously captured tool output into diagnostics."""

    configure_debug_logging(debug)
    overrides = ConfigOverrides(
        rules=tuple(rule),
        output_format=output_format,
        no_emoji=no_emoji,
        no_color=no_color,
    )
    cfg, logger, pipeline = _prepare(root.resolve(), overrides)

    if report is None:
        stdout = sys.stdin.read()
    else:
        try:
            stdout = report.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error_panel(CLIError(f"Cannot read report {report}: {exc}"))
            raise typer.Exit(code=2) from exc

    collection: dict[str, list[DiagnosticRecord]] = {}
    pipeline.run(ProcessResult(stdout=stdout), SourceDocument(uri=document), document, collection)
    _finish(collection, cfg, logger)


__all__ = ["app"]
