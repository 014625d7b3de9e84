"""Error types raised while building a domain matcher.

Every error here is raised at build time. Matching itself never fails.
"""

from __future__ import annotations


class GeoMatchError(Exception):
    """Base class for all geomatch errors."""


class MalformedRule(GeoMatchError):
    def __init__(self, rule: str) -> None:
        super().__init__(f"invalid condition format: {rule}")
        self.rule = rule


class MalformedGroupPayload(GeoMatchError):
    def __init__(self, payload: str) -> None:
        super().__init__(f"invalid group content: group:{payload}")
        self.payload = payload


class DatasetError(GeoMatchError):
    """Base class for dataset loading failures."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path


class DatasetUnavailable(DatasetError):
    """The dataset could not be read."""


class DatasetCorrupt(DatasetError):
    """The dataset was read but could not be decoded."""


class GroupNotFound(GeoMatchError):
    def __init__(self, payload: str, code: str) -> None:
        super().__init__(f"domain list for group:{payload} not found")
        self.payload = payload
        self.code = code


class InvalidPattern(GeoMatchError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid regexp {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ConfigError(GeoMatchError):
    """Configuration file or environment is invalid."""
