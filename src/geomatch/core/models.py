"""Core domain models.

These dataclasses are shared between the core and the dataset adapters so
the builder never depends on a particular file format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Tuple

from geomatch.core.conditions import Condition


class DomainType(IntEnum):
    """Domain record type, numbered like the GeoSite ``Domain.Type`` enum."""

    PLAIN = 0
    REGEX = 1
    DOMAIN = 2
    FULL = 3


@dataclass(frozen=True)
class DomainRecord:
    """One entry of a group's domain list."""

    type: DomainType
    value: str
    attributes: FrozenSet[str] = field(default_factory=frozenset)

    def has_attribute(self, key: str) -> bool:
        return key in self.attributes


@dataclass(frozen=True)
class Classification:
    """Result of classifying a single hostname."""

    domain: str
    matches: Tuple[Condition, ...]

    @property
    def matched(self) -> bool:
        return bool(self.matches)

    @property
    def explanations(self) -> list[str]:
        return [str(match) for match in self.matches]
