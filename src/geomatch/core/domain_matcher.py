"""Evaluation of a compiled rule set against domain names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from geomatch.core.conditions import Condition
from geomatch.core.matchers import Matcher, normalize_domain


@dataclass(frozen=True)
class MatcherRecord:
    """A compiled matcher and the index of the condition it came from."""

    matcher: Matcher
    condition_index: int


class DomainMatcher:
    """Immutable set of compiled matchers.

    Built by DomainMatcherBuilder. Every call to ``match`` creates its own
    result conditions, so one instance can be shared between threads.
    """

    def __init__(self, records: Iterable[MatcherRecord], conditions: Iterable[Condition]) -> None:
        self._records: Tuple[MatcherRecord, ...] = tuple(records)
        self._conditions: Tuple[Condition, ...] = tuple(conditions)

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return self._conditions

    @property
    def records(self) -> Tuple[MatcherRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def match(self, domain: str) -> List[Condition]:
        """Return every condition that fires for ``domain``.

        Results follow rule order, then dataset order inside a group. A
        group rule appears once per expanded record that fired.
        """

        domain = normalize_domain(domain)
        results: List[Condition] = []
        for record in self._records:
            hit = record.matcher.match(domain)
            if hit is None:
                continue
            condition = self._conditions[record.condition_index]
            if condition.is_group:
                condition = condition.with_children((hit,))
            results.append(condition)
        return results

    def explain(self, domain: str) -> List[str]:
        return [str(condition) for condition in self.match(domain)]

    def __repr__(self) -> str:
        return f"DomainMatcher(conditions={len(self._conditions)}, matchers={len(self._records)})"
