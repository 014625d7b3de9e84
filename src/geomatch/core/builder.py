"""Compilation of rule strings into a DomainMatcher (core domain)."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from geomatch.core.conditions import (
    DOMAIN,
    FULL,
    GROUP,
    KEYWORD,
    REGEXP,
    Condition,
    parse_condition,
    split_group_payload,
)
from geomatch.core.domain_matcher import DomainMatcher, MatcherRecord
from geomatch.core.errors import DatasetUnavailable, GroupNotFound
from geomatch.core.matchers import build_matcher
from geomatch.core.models import DomainRecord, DomainType
from geomatch.core.ports import DatasetHandle, DatasetLoader, DomainListSource

LOGGER = logging.getLogger(__name__)

KIND_TO_DOMAIN_TYPE = {
    KEYWORD: DomainType.PLAIN,
    REGEXP: DomainType.REGEX,
    FULL: DomainType.FULL,
    DOMAIN: DomainType.DOMAIN,
}


def extract_domain_list(payload: str, source: DomainListSource) -> List[DomainRecord]:
    """Resolve ``IDENTIFIER[@attribute]`` to the group's records.

    Lookup is case-insensitive. An attribute filter that leaves nothing is
    not an error; the rule simply never fires.
    """

    identifier, attribute = split_group_payload(payload)
    code = identifier.upper()
    records = source.get(code)
    if records is None:
        raise GroupNotFound(payload, code)
    if not attribute:
        return list(records)

    filtered = [record for record in records if record.has_attribute(attribute)]
    if not filtered:
        LOGGER.debug("group:%s has no records tagged %r", identifier, attribute)
    return filtered


class DomainMatcherBuilder:
    """Collects a dataset handle and rule strings, then builds a matcher.

    The builder can be reused: ``build`` never changes its configuration
    and a failing build returns nothing.
    """

    def __init__(self) -> None:
        self._handle: Optional[DatasetHandle] = None
        self._loader: Optional[DatasetLoader] = None
        self._source: Optional[DomainListSource] = None
        self._rules: List[str] = []

    def from_dataset(self, handle: DatasetHandle) -> "DomainMatcherBuilder":
        self._handle = handle
        self._source = None
        return self

    def from_source(self, source: DomainListSource) -> "DomainMatcherBuilder":
        """Use an already loaded source instead of reading a file."""

        self._source = source
        self._handle = None
        return self

    def with_loader(self, loader: DatasetLoader) -> "DomainMatcherBuilder":
        self._loader = loader
        return self

    def add_conditions(self, *rules: str) -> "DomainMatcherBuilder":
        self._rules.extend(rules)
        return self

    @property
    def rules(self) -> Sequence[str]:
        return tuple(self._rules)

    def _load_source(self) -> DomainListSource:
        if self._source is not None:
            return self._source
        if self._handle is None:
            raise DatasetUnavailable("no dataset configured for the matcher builder")
        loader = self._loader
        if loader is None:
            # Imported here so the core does not depend on adapters at import time.
            from geomatch.adapters.datasets import load_dataset

            loader = load_dataset
        return loader(self._handle)

    def build(self) -> DomainMatcher:
        """Parse, expand and compile all rules.

        Raises a GeoMatchError subclass on the first failure.
        """

        conditions = [parse_condition(rule) for rule in self._rules]
        source = self._load_source()

        records: List[MatcherRecord] = []
        for index, condition in enumerate(conditions):
            for domain in self._expand(condition, source):
                records.append(MatcherRecord(build_matcher(domain), index))

        matcher = DomainMatcher(records, conditions)
        LOGGER.info("Built domain matcher: %s rules, %s matchers", len(conditions), len(records))
        return matcher

    @staticmethod
    def _expand(condition: Condition, source: DomainListSource) -> List[DomainRecord]:
        if condition.kind != GROUP:
            return [DomainRecord(KIND_TO_DOMAIN_TYPE[condition.kind], condition.payload)]
        domains = extract_domain_list(condition.payload, source)
        LOGGER.debug("Expanded group:%s into %s records", condition.payload, len(domains))
        return domains
