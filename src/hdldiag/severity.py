# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and the message-driven classification rules."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, MutableMapping
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from itertools import chain
from typing import Final, cast

from .config import ConfigError


class Severity(str, Enum):
    """Severity levels a report line can be classified as."""

    ERROR = "error"
    WARNING = "warning"


SeverityRule = tuple[re.Pattern[str], Severity]
SeverityRuleMap = MutableMapping[str, list[SeverityRule]]
SeverityRuleView = Mapping[str, Iterable[SeverityRule]]

DEFAULT_TOOL: Final[str] = "verible"
ANY_TOOL: Final[str] = "*"
DEFAULT_FALLBACK: Final[Severity] = Severity.WARNING

# Lint reports carry no structured severity field; error lines say "error".
# Rules under ANY_TOOL apply after the tool's own entry, whatever the tool is.
DEFAULT_SEVERITY_RULES: Final[dict[str, list[SeverityRule]]] = {
    ANY_TOOL: [(re.compile("error"), Severity.ERROR)],
}


def classify_severity(
    message: str | None,
    *,
    tool: str = DEFAULT_TOOL,
    rules: SeverityRuleView | None = None,
    fallback: Severity = DEFAULT_FALLBACK,
) -> Severity:
    """Return the severity for ``message`` using the rule table for ``tool``.

    Empty or missing messages are always classified as errors. Otherwise the
    first matching rule wins, checking the ``tool`` entry before the
    :data:`ANY_TOOL` entry, and ``fallback`` applies when nothing matches.

    Args:
        message: Reconstructed diagnostic message.
        tool: Name of the tool whose rules apply.
        rules: Optional rule table; defaults to :data:`DEFAULT_SEVERITY_RULES`.
        fallback: Severity used when no rule matches a non-empty message.

    Returns:
        Severity: Classified severity.
    """

    if not message:
        return Severity.ERROR
    active_rules: SeverityRuleView = rules if rules is not None else DEFAULT_SEVERITY_RULES
    candidates = chain(
        active_rules.get(tool, cast(Iterable[SeverityRule], ())),
        active_rules.get(ANY_TOOL, cast(Iterable[SeverityRule], ())) if tool != ANY_TOOL else (),
    )
    for pattern, sev in candidates:
        if pattern.search(message):
            return Severity(sev)
    return fallback


@dataclass(slots=True)
class RuleTableClassifier:
    """Callable classifier bound to one tool's entry (plus the shared entry) in a rule table."""

    tool: str = DEFAULT_TOOL
    rules: SeverityRuleView = field(default_factory=lambda: deepcopy(DEFAULT_SEVERITY_RULES))
    fallback: Severity = DEFAULT_FALLBACK

    def __call__(self, message: str | None) -> Severity:
        return classify_severity(message, tool=self.tool, rules=self.rules, fallback=self.fallback)


def add_custom_rule(
    spec: str,
    *,
    rules: SeverityRuleMap,
) -> str | None:
    """Add a custom severity override defined as ``tool:regex=level`` to ``rules``.

    A tool name of ``*`` applies the override to every tool.

    Returns:
        str | None: An error description when ``spec`` is malformed.
    """

    try:
        tool, rest = spec.split(":", 1)
        regex, level_str = rest.rsplit("=", 1)
        level = Severity(level_str.strip().lower())
        pattern = re.compile(regex)
    except (ValueError, re.error) as exc:
        return f"invalid rule '{spec}': {exc}"
    if not tool.strip():
        return f"invalid rule '{spec}': missing tool name"

    # Custom rules take precedence over the shipped ones.
    rules.setdefault(tool.strip(), []).insert(0, (pattern, level))
    return None


def build_severity_rules(custom_rules: Iterable[str]) -> dict[str, list[SeverityRule]]:
    """Return the default severity rules with ``custom_rules`` applied.

    Raises:
        ConfigError: If any custom rule is malformed.
    """

    rules = deepcopy(DEFAULT_SEVERITY_RULES)
    errors = [error for rule in custom_rules if (error := add_custom_rule(rule, rules=rules))]
    if errors:
        raise ConfigError("; ".join(errors))
    return rules


__all__ = [
    "ANY_TOOL",
    "DEFAULT_FALLBACK",
    "DEFAULT_SEVERITY_RULES",
    "DEFAULT_TOOL",
    "RuleTableClassifier",
    "Severity",
    "SeverityRule",
    "SeverityRuleMap",
    "SeverityRuleView",
    "add_custom_rule",
    "build_severity_rules",
    "classify_severity",
]
