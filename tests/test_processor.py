from __future__ import annotations

import logging
from pathlib import Path

from geomatch.core.builder import DomainMatcherBuilder
from geomatch.core.processor import HostnameClassifier

DATASET = Path(__file__).parent / "data" / "geosite.json"


def _classifier() -> HostnameClassifier:
    matcher = (
        DomainMatcherBuilder()
        .from_dataset(DATASET)
        .add_conditions("group:cn", "group:gfw", "keyword:video")
        .build()
    )
    return HostnameClassifier(matcher)


def test_classify_reports_matches() -> None:
    classifier = _classifier()
    result = classifier.classify("www.youtube.com.")
    assert result.domain == "www.youtube.com."
    assert result.matched
    assert result.explanations == ["group:gfw/domain:youtube.com"]

    miss = classifier.classify("example.org")
    assert not miss.matched
    assert miss.matches == ()


def test_classify_all_skips_blank_and_comment_lines() -> None:
    classifier = _classifier()
    lines = ["# hosts seen today\n", "www.baidu.com\n", "\n", "  googlevideo.com  \n", "example.org"]
    results = list(classifier.classify_all(lines))
    assert [result.domain for result in results] == ["www.baidu.com", "googlevideo.com", "example.org"]
    assert results[1].explanations == ["keyword:video"]
    assert classifier.checked == 3
    assert classifier.matched == 2


def test_log_summary(caplog) -> None:
    classifier = _classifier()
    list(classifier.classify_all(["www.bilibili.com", "example.org"]))
    with caplog.at_level(logging.INFO, logger="geomatch.core.processor"):
        classifier.log_summary()
    assert "hostnames=2, matched=1" in caplog.text
