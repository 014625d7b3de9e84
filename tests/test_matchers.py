from __future__ import annotations

import pytest

from geomatch.core.conditions import Condition
from geomatch.core.errors import InvalidPattern
from geomatch.core.matchers import (
    FullMatcher,
    KeywordMatcher,
    RegexMatcher,
    SubdomainMatcher,
    build_matcher,
    normalize_domain,
)
from geomatch.core.models import DomainRecord, DomainType


def test_normalize_domain_strips_one_trailing_dot() -> None:
    assert normalize_domain("www.google.com.") == "www.google.com"
    assert normalize_domain("www.google.com..") == "www.google.com."
    assert normalize_domain("www.google.com") == "www.google.com"
    assert normalize_domain("") == ""


def test_keyword_matcher_is_substring_and_case_sensitive() -> None:
    matcher = KeywordMatcher("video")
    assert matcher.match("www.googlevideo.com") == Condition("keyword", "video")
    assert matcher.match("video") is not None
    assert matcher.match("www.VIDEO.com") is None
    assert matcher.match("google.com") is None


def test_full_matcher_requires_equality() -> None:
    matcher = FullMatcher("www.baidu.com")
    assert matcher.match("www.baidu.com") == Condition("full", "www.baidu.com")
    assert matcher.match("baidu.com") is None
    assert matcher.match("a.www.baidu.com") is None


def test_subdomain_matcher_respects_label_boundary() -> None:
    matcher = SubdomainMatcher("baidu.com")
    assert matcher.match("baidu.com") == Condition("domain", "baidu.com")
    assert matcher.match("www.baidu.com") is not None
    assert matcher.match("a.b.baidu.com") is not None
    assert matcher.match("ibaidu.com") is None
    assert matcher.match("xbaidu.com") is None
    assert matcher.match("aidu.com") is None
    assert matcher.match("baidu.com.cn") is None


def test_regex_matcher_searches_unanchored() -> None:
    matcher = RegexMatcher.compile(r"baidu\.com")
    assert matcher.match("www.baidu.com.cn") == Condition("regexp", r"baidu\.com")
    assert matcher.match("google.com") is None


def test_regex_matcher_rejects_invalid_pattern() -> None:
    with pytest.raises(InvalidPattern) as excinfo:
        RegexMatcher.compile("*baidu.com")
    assert excinfo.value.pattern == "*baidu.com"


def test_build_matcher_dispatches_on_record_type() -> None:
    assert isinstance(build_matcher(DomainRecord(DomainType.PLAIN, "qq")), KeywordMatcher)
    assert isinstance(build_matcher(DomainRecord(DomainType.FULL, "a.com")), FullMatcher)
    assert isinstance(build_matcher(DomainRecord(DomainType.DOMAIN, "a.com")), SubdomainMatcher)
    assert isinstance(build_matcher(DomainRecord(DomainType.REGEX, "^a")), RegexMatcher)
