# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles and status lines driven by :class:`OutputConfig`."""

from __future__ import annotations

import sys
from enum import Enum
from functools import lru_cache

from rich.console import Console
from rich.text import Text

from .config import OutputConfig


class Status(str, Enum):
    """Kinds of one-line status messages the CLI prints."""

    OK = "ok"
    WARN = "warn"


_MARKERS: dict[Status, tuple[str, str]] = {
    Status.OK: ("✅", "green"),
    Status.WARN: ("⚠️", "yellow"),
}


def stdout_is_terminal() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=None)
def _console(styled: bool, emoji: bool, terminal: bool) -> Console:
    return Console(
        color_system="auto" if styled else None,
        force_terminal=terminal,
        no_color=not styled,
        emoji=emoji,
        soft_wrap=True,
    )


def console_for(output: OutputConfig) -> Console:
    """Return the shared console for ``output``.

    Colour is only emitted when ``output.color`` is set and stdout is a
    terminal; one console exists per distinct combination.
    """

    terminal = stdout_is_terminal()
    return _console(output.color and terminal, output.emoji, terminal)


def status_line(console: Console, message: str, status: Status, *, output: OutputConfig) -> None:
    """Print ``message`` prefixed with the marker for ``status``."""

    symbol, style = _MARKERS[status]
    text = Text(f"{symbol} " if output.emoji else "")
    text.append(message, style=style if output.color else None)
    console.print(text)


__all__ = ["Status", "console_for", "status_line", "stdout_is_terminal"]
