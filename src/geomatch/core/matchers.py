"""Primitive domain matchers.

Each matcher is an immutable predicate over a normalized domain. On a hit
it returns the primitive condition it stands for, otherwise ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional, Union

from geomatch.core.conditions import DOMAIN, FULL, KEYWORD, REGEXP, Condition
from geomatch.core.errors import InvalidPattern
from geomatch.core.models import DomainRecord, DomainType


def normalize_domain(domain: str) -> str:
    """Strip a single trailing dot (FQDN form)."""

    if domain.endswith("."):
        return domain[:-1]
    return domain


@dataclass(frozen=True)
class KeywordMatcher:
    keyword: str

    def match(self, domain: str) -> Optional[Condition]:
        if self.keyword in domain:
            return Condition(KEYWORD, self.keyword)
        return None


@dataclass(frozen=True)
class FullMatcher:
    value: str

    def match(self, domain: str) -> Optional[Condition]:
        if domain == self.value:
            return Condition(FULL, self.value)
        return None


@dataclass(frozen=True)
class SubdomainMatcher:
    """Matches the suffix itself and any domain below it on a label boundary."""

    suffix: str

    def match(self, domain: str) -> Optional[Condition]:
        diff = len(domain) - len(self.suffix)
        if diff < 0 or not domain.endswith(self.suffix):
            return None
        # ibaidu.com must not match baidu.com
        if diff == 0 or domain[diff - 1] == ".":
            return Condition(DOMAIN, self.suffix)
        return None


@dataclass(frozen=True)
class RegexMatcher:
    pattern: re.Pattern

    @classmethod
    def compile(cls, pattern: str) -> "RegexMatcher":
        try:
            return cls(re.compile(pattern))
        except re.error as exc:
            raise InvalidPattern(pattern, str(exc)) from exc

    def match(self, domain: str) -> Optional[Condition]:
        if self.pattern.search(domain):
            return Condition(REGEXP, self.pattern.pattern)
        return None


Matcher = Union[KeywordMatcher, FullMatcher, SubdomainMatcher, RegexMatcher]


def build_matcher(record: DomainRecord) -> Matcher:
    """Compile a dataset record into the matcher for its type."""

    if record.type == DomainType.PLAIN:
        return KeywordMatcher(record.value)
    if record.type == DomainType.FULL:
        return FullMatcher(record.value)
    if record.type == DomainType.DOMAIN:
        return SubdomainMatcher(record.value)
    if record.type == DomainType.REGEX:
        return RegexMatcher.compile(record.value)
    raise ValueError(f"Unsupported domain type: {record.type!r}")
