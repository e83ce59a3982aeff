# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the hdldiag lint-to-diagnostics package."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ToolConfig(BaseModel):
    """How the external analysis tool is invoked."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = "verible"
    executable: str = "verible-verilog-lint"
    args: list[str] = Field(default_factory=list)
    timeout: float | None = None

    @field_validator("executable")
    @classmethod
    def _require_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("executable must not be empty")
        return value.strip()


class DiagnosticsConfig(BaseModel):
    """Parsing, classification and merge behaviour."""

    model_config = ConfigDict(validate_assignment=True)

    severity_rules: list[str] = Field(default_factory=list)
    stale_policy: Literal["preserve", "clear"] = "preserve"
    separator: str = ":"

    @field_validator("separator")
    @classmethod
    def _require_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("separator must not be empty")
        return value


class OutputConfig(BaseModel):
    """Configuration for controlling terminal output."""

    model_config = ConfigDict(validate_assignment=True)

    format: Literal["table", "json", "concise"] = "table"
    emoji: bool = True
    color: bool = True


class Config(BaseModel):
    """Top-level configuration aggregating every section."""

    model_config = ConfigDict(validate_assignment=True)

    tool: ToolConfig = Field(default_factory=ToolConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the configuration."""
        return self.model_dump(mode="json")


__all__ = [
    "Config",
    "ConfigError",
    "DiagnosticsConfig",
    "OutputConfig",
    "ToolConfig",
]
