"""Rule conditions and the rule string grammar."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from geomatch.core.errors import MalformedGroupPayload, MalformedRule

KEYWORD = "keyword"
FULL = "full"
DOMAIN = "domain"
REGEXP = "regexp"
GROUP = "group"

CONDITION_KINDS = (KEYWORD, REGEXP, FULL, DOMAIN, GROUP)


@dataclass(frozen=True)
class Condition:
    """A single routing rule, or the trace of why it matched.

    Templates built from rule strings never carry children. A group
    condition returned by a match carries the primitive condition of the
    dataset record that fired.
    """

    kind: str
    payload: str
    children: Tuple["Condition", ...] = ()

    @property
    def is_group(self) -> bool:
        return self.kind == GROUP

    def with_children(self, children: Iterable["Condition"]) -> "Condition":
        """Return a copy with ``children`` appended to the existing ones."""

        return replace(self, children=self.children + tuple(children))

    def __str__(self) -> str:
        text = f"{self.kind}:{self.payload}"
        for child in self.children:
            text += "/" + str(child)
        return text


def parse_condition(rule: str) -> Condition:
    """Parse ``prefix:payload`` into a condition template."""

    kind, sep, payload = rule.partition(":")
    if not sep or kind not in CONDITION_KINDS:
        raise MalformedRule(rule)
    return Condition(kind, payload)


def split_group_payload(payload: str) -> Tuple[str, str]:
    """Split ``IDENTIFIER[@attribute]`` on the first ``@``.

    A payload whose first ``@`` is its last character is rejected. An
    empty payload is rejected the same way.
    """

    idx = payload.find("@")
    if idx == len(payload) - 1:
        raise MalformedGroupPayload(payload)
    if idx == -1:
        return payload, ""
    return payload[:idx], payload[idx + 1 :]


def format_conditions(conditions: Iterable[Condition]) -> str:
    """Render a match result as ``[a b c]``."""

    return "[" + " ".join(str(condition) for condition in conditions) + "]"
