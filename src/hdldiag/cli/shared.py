# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, configuration)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..config import Config, ConfigError, OutputConfig
from ..config_loader import load_config
from ..logging import Status, console_for, status_line


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Console plus the output settings every CLI message honours."""

    console: Console
    output: OutputConfig

    def warn(self, message: str) -> None:
        status_line(self.console, message, Status.WARN, output=self.output)

    def ok(self, message: str) -> None:
        status_line(self.console, message, Status.OK, output=self.output)

    def error_panel(self, exc: CLIError) -> None:
        """Render ``exc`` as a red panel."""

        if self.output.color:
            self.console.print(Panel(Text(str(exc), style="red"), border_style="red"))
        else:
            self.console.print(Panel(Text(str(exc))))


def build_cli_logger(cfg: Config) -> CLILogger:
    """Return a :class:`CLILogger` bound to the console matching ``cfg.output``."""

    return CLILogger(console=console_for(cfg.output), output=cfg.output)


def configure_debug_logging(enabled: bool) -> None:
    """Route internal ``logging`` records to stderr at DEBUG level when ``enabled``."""

    if enabled:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@dataclass(slots=True, frozen=True)
class ConfigOverrides:
    """Command-line values that take precedence over loaded configuration."""

    rules: Sequence[str] = ()
    clear_stale: bool = False
    output_format: str | None = None
    no_emoji: bool = False
    no_color: bool = False
    executable: str | None = None


def resolve_config(root: Path, overrides: ConfigOverrides) -> Config:
    """Load configuration for ``root`` and apply ``overrides``.

    Raises:
        CLIError: With exit code ``2`` when configuration is invalid.
    """

    try:
        cfg = load_config(root)
        if overrides.rules:
            cfg.diagnostics.severity_rules = [*cfg.diagnostics.severity_rules, *overrides.rules]
        if overrides.clear_stale:
            cfg.diagnostics.stale_policy = "clear"
        if overrides.output_format is not None:
            cfg.output.format = overrides.output_format
        if overrides.no_emoji:
            cfg.output.emoji = False
        if overrides.no_color:
            cfg.output.color = False
        if overrides.executable is not None:
            cfg.tool.executable = overrides.executable
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=2) from exc
    except ValueError as exc:
        raise CLIError(f"Invalid option: {exc}", exit_code=2) from exc
    return cfg


__all__ = [
    "CLIError",
    "CLILogger",
    "ConfigOverrides",
    "build_cli_logger",
    "configure_debug_logging",
    "resolve_config",
]
