"""Hostname classification pipeline.

This module only relies on a built DomainMatcher, so any frontend (CLI,
proxy hook, batch job) can feed it hostnames.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from geomatch.core.domain_matcher import DomainMatcher
from geomatch.core.models import Classification

LOGGER = logging.getLogger(__name__)


class HostnameClassifier:
    """Runs hostnames through a matcher and keeps simple counters."""

    def __init__(self, matcher: DomainMatcher) -> None:
        self._matcher = matcher
        self.checked = 0
        self.matched = 0

    def classify(self, domain: str) -> Classification:
        result = Classification(domain=domain, matches=tuple(self._matcher.match(domain)))
        self.checked += 1
        if result.matched:
            self.matched += 1
            LOGGER.debug("%s matched %s", domain, ", ".join(result.explanations))
        return result

    def classify_all(self, lines: Iterable[str]) -> Iterator[Classification]:
        """Classify one hostname per line.

        Blank lines and ``#`` comments are skipped.
        """

        for raw in lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            yield self.classify(line)

    def log_summary(self) -> None:
        LOGGER.info("Classification complete: hostnames=%s, matched=%s", self.checked, self.matched)
