"""geomatch: explainable domain matching against routing rules and geosite lists."""

from geomatch.core.builder import DomainMatcherBuilder
from geomatch.core.conditions import Condition, format_conditions, parse_condition
from geomatch.core.domain_matcher import DomainMatcher
from geomatch.core.errors import (
    ConfigError,
    DatasetCorrupt,
    DatasetError,
    DatasetUnavailable,
    GeoMatchError,
    GroupNotFound,
    InvalidPattern,
    MalformedGroupPayload,
    MalformedRule,
)
from geomatch.core.models import Classification, DomainRecord, DomainType

__version__ = "0.1.0"

__all__ = [
    "Classification",
    "Condition",
    "ConfigError",
    "DatasetCorrupt",
    "DatasetError",
    "DatasetUnavailable",
    "DomainMatcher",
    "DomainMatcherBuilder",
    "DomainRecord",
    "DomainType",
    "GeoMatchError",
    "GroupNotFound",
    "InvalidPattern",
    "MalformedGroupPayload",
    "MalformedRule",
    "format_conditions",
    "parse_condition",
]
