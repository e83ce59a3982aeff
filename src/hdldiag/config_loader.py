# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence (defaults, pyproject, TOML)."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from .config import Config, ConfigError

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "hdldiag"
CONFIG_FILENAME: Final[str] = ".hdldiag.toml"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigSource(Protocol):
    """Provide a configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return a mapping of configuration sections."""
        ...


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Any, env: Mapping[str, str]) -> Any:
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), data)
    if isinstance(data, Mapping):
        return {key: _expand_env(value, env) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env(item, env) for item in data]
    return data


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None, env: Mapping[str, str] | None = None) -> None:
        self._path = path
        self.name = name or str(path)
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        return _expand_env(dict(data), self._env)


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.hdldiag]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


@dataclass(slots=True)
class ConfigLoader:
    """Merge configuration sources in order; later sources win."""

    sources: Sequence[ConfigSource] = field(default_factory=list)

    @classmethod
    def for_root(cls, root: Path) -> ConfigLoader:
        """Return a loader reading defaults, ``pyproject.toml`` and ``.hdldiag.toml`` under ``root``."""

        sources: list[ConfigSource] = [DefaultConfigSource()]
        pyproject = root / "pyproject.toml"
        if pyproject.exists():
            sources.append(PyProjectConfigSource(pyproject))
        local = root / CONFIG_FILENAME
        if local.exists():
            sources.append(TomlConfigSource(local))
        return cls(sources=sources)

    def load(self) -> Config:
        """Return the merged configuration.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self.sources:
            merged = _deep_merge(merged, source.load())
        try:
            return Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(root: Path) -> Config:
    """Load configuration for the project rooted at ``root``."""

    return ConfigLoader.for_root(root).load()


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
