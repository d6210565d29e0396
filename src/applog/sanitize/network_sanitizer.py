"""
Module: network_sanitizer.py
Location: src/applog/sanitize/

Cleans up and redacts network traffic messages before they are logged.

Rules are kept as an ordered tuple; each rule is applied to the output
of the previous one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Sequence, Tuple, Union

TRAILING_NOISE = "\r\n,"

RuleLike = Union["NetworkFilterRule", Tuple[str, str]]


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


@dataclass(frozen=True)
class NetworkFilterRule:
    pattern: str
    replacement: str = ""

    def compiled(self) -> Optional[re.Pattern]:
        return _compile(self.pattern)

    def is_valid(self) -> bool:
        return self.compiled() is not None

    def apply(self, message: str) -> str:
        regex = self.compiled()
        if regex is None:
            return message
        # Replacement is literal text, no group references.
        return regex.sub(lambda _m: self.replacement, message)


def to_rules(rules: Iterable[RuleLike]) -> Tuple[NetworkFilterRule, ...]:
    out = []
    for rule in rules:
        if isinstance(rule, NetworkFilterRule):
            out.append(rule)
        else:
            pattern, replacement = rule
            out.append(NetworkFilterRule(str(pattern), str(replacement)))
    return tuple(out)


def parse_filter_rules(blob: str) -> Tuple[NetworkFilterRule, ...]:
    """
    Parse a line-oriented, tab-delimited rule blob:

        <pattern>\\t<replacement>

    A line without a tab gets an empty replacement. Blank lines are skipped.
    """
    rules = []
    for line in blob.splitlines():
        if not line.strip():
            continue
        pattern, _, replacement = line.partition("\t")
        rules.append(NetworkFilterRule(pattern, replacement))
    return tuple(rules)


def format_filter_rules(rules: Sequence[NetworkFilterRule]) -> str:
    return "\n".join(f"{r.pattern}\t{r.replacement}" for r in rules)


def strip_trailing_noise(message: str) -> str:
    return message.rstrip(TRAILING_NOISE)


def sanitize(message: str, rules: Sequence[NetworkFilterRule] = ()) -> str:
    """
    1. strip trailing LF / CR / comma
    2. CRLF -> CR
    3. apply each rule in order

    An empty result means the message should not be logged.
    """
    message = strip_trailing_noise(message)
    message = message.replace("\r\n", "\r")
    for rule in rules:
        message = rule.apply(message)
    return message
