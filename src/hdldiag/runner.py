# SPDX-License-Identifier: MIT
"""Safe wrappers around running the analysis tool with ``subprocess``."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from .config import ToolConfig
from .models import ProcessResult

LOGGER = logging.getLogger(__name__)


def build_command(document_path: str, *, config: ToolConfig) -> list[str]:
    """Return the argv used to analyse ``document_path``.

    Raises:
        FileNotFoundError: If the configured executable cannot be located.
    """

    head_path = Path(config.executable)
    if head_path.is_absolute():
        executable = str(head_path)
    else:
        resolved = shutil.which(config.executable)
        if resolved is None:
            msg = f"Executable '{config.executable}' was not found on PATH"
            raise FileNotFoundError(msg)
        executable = resolved
    return [executable, *config.args, document_path]


def run_tool(document_path: str, *, config: ToolConfig, cwd: Path | None = None) -> ProcessResult:
    """Run the analysis tool against ``document_path`` and capture its output.

    Launch failures are reported through :attr:`ProcessResult.error` rather
    than raised. Lint tools exit non-zero when they report findings, so the
    return code is recorded without being treated as an error.
    """

    try:
        command = build_command(document_path, config=config)
    except FileNotFoundError as exc:
        return ProcessResult(error=str(exc))

    LOGGER.debug("running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            check=False,
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        return ProcessResult(error=f"{config.executable} timed out after {exc.timeout}s")
    except OSError as exc:
        return ProcessResult(error=f"{config.executable} failed to start: {exc}")

    error = None
    if completed.returncode != 0 and not completed.stdout:
        error = f"{config.executable} exited with status {completed.returncode}"
    return ProcessResult(
        error=error,
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


__all__ = ["build_command", "run_tool"]
