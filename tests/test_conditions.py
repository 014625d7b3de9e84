from __future__ import annotations

import pytest

from geomatch.core.conditions import (
    Condition,
    format_conditions,
    parse_condition,
    split_group_payload,
)
from geomatch.core.errors import MalformedGroupPayload, MalformedRule


def test_parse_condition_known_prefixes() -> None:
    assert parse_condition("keyword:video") == Condition("keyword", "video")
    assert parse_condition("full:www.baidu.com") == Condition("full", "www.baidu.com")
    assert parse_condition("domain:baidu.com") == Condition("domain", "baidu.com")
    assert parse_condition("regexp:^a:b$") == Condition("regexp", "^a:b$")
    assert parse_condition("group:google@ads") == Condition("group", "google@ads")


def test_parse_condition_allows_empty_payload() -> None:
    assert parse_condition("keyword:") == Condition("keyword", "")


@pytest.mark.parametrize("rule", ["baidu.com", "geoip:cn", "Keyword:video", ":baidu.com", ""])
def test_parse_condition_rejects_unknown_prefix(rule: str) -> None:
    with pytest.raises(MalformedRule) as excinfo:
        parse_condition(rule)
    assert excinfo.value.rule == rule


def test_split_group_payload() -> None:
    assert split_group_payload("google") == ("google", "")
    assert split_group_payload("google@ads") == ("google", "ads")
    # Only the first @ separates the attribute.
    assert split_group_payload("google@ads@x") == ("google", "ads@x")


@pytest.mark.parametrize("payload", ["google@", ""])
def test_split_group_payload_rejects_bare_at(payload: str) -> None:
    with pytest.raises(MalformedGroupPayload):
        split_group_payload(payload)


def test_condition_string_includes_children_chain() -> None:
    leaf = Condition("domain", "youtube.com")
    group = Condition("group", "gfw").with_children((leaf,))
    assert str(leaf) == "domain:youtube.com"
    assert str(group) == "group:gfw/domain:youtube.com"


def test_with_children_returns_new_condition() -> None:
    template = Condition("group", "gfw")
    result = template.with_children((Condition("domain", "youtube.com"),))
    assert template.children == ()
    assert result is not template
    assert len(result.children) == 1


def test_format_conditions() -> None:
    assert format_conditions([]) == "[]"
    assert format_conditions([Condition("keyword", "video")]) == "[keyword:video]"
    assert (
        format_conditions([Condition("full", "a.com"), Condition("domain", "b.com")])
        == "[full:a.com domain:b.com]"
    )
