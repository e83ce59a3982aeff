# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Replace-then-append merging of diagnostics into a caller-owned collection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .config import ConfigError
from .models import DiagnosticCollection, DiagnosticRecord


class StalePolicy(str, Enum):
    """What a run does to documents it committed nothing for."""

    PRESERVE = "preserve"
    CLEAR = "clear"

    @classmethod
    def from_name(cls, name: str) -> StalePolicy:
        """Return the policy called ``name``.

        Raises:
            ConfigError: If ``name`` is not a known policy.
        """

        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            choices = ", ".join(policy.value for policy in cls)
            raise ConfigError(f"Unknown stale policy '{name}'. Expected one of: {choices}") from exc


@dataclass(slots=True)
class CollectionMerger:
    """Commit records for a single pipeline run.

    The first record committed for a document replaces that document's entry;
    every later record in the same run is appended. Build a new merger per run.
    """

    collection: DiagnosticCollection
    policy: StalePolicy = StalePolicy.PRESERVE
    _visited: set[str] = field(default_factory=set, init=False, repr=False)

    @property
    def visited(self) -> frozenset[str]:
        """Documents that have received a commit during this run."""
        return frozenset(self._visited)

    def commit(self, record: DiagnosticRecord) -> None:
        key = record.file_path
        if key in self._visited:
            self.collection[key].append(record)
            return
        self.collection[key] = [record]
        self._visited.add(key)

    def commit_all(self, records: Iterable[DiagnosticRecord]) -> None:
        for record in records:
            self.commit(record)

    def finalize(self, document_paths: Iterable[str]) -> None:
        """Apply the stale policy to ``document_paths`` that received no commit."""

        if self.policy is not StalePolicy.CLEAR:
            return
        for path in document_paths:
            if path not in self._visited:
                self.collection[path] = []


__all__ = ["CollectionMerger", "StalePolicy"]
