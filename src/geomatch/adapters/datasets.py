"""Dataset adapters for the DomainListSource port.

Implements an in-memory source, a JSON loader and the suffix-based
``load_dataset`` used by the builder when no loader is configured.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from geomatch.core.errors import DatasetCorrupt, DatasetUnavailable
from geomatch.core.models import DomainRecord, DomainType
from geomatch.core.ports import DatasetHandle

LOGGER = logging.getLogger(__name__)

# JSON type names, including the rule-prefix spellings.
TYPE_NAMES = {
    "plain": DomainType.PLAIN,
    "keyword": DomainType.PLAIN,
    "regex": DomainType.REGEX,
    "regexp": DomainType.REGEX,
    "domain": DomainType.DOMAIN,
    "full": DomainType.FULL,
}


class InMemoryDomainList:
    """DomainListSource backed by a dict of upper-cased group codes."""

    def __init__(self, groups: Mapping[str, Iterable[DomainRecord]]) -> None:
        self._groups: Dict[str, Tuple[DomainRecord, ...]] = {}
        for code, records in groups.items():
            # First occurrence wins, like a linear scan over dataset entries.
            self._groups.setdefault(code.upper(), tuple(records))

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[str, Iterable[DomainRecord]]]) -> "InMemoryDomainList":
        groups: Dict[str, Tuple[DomainRecord, ...]] = {}
        for code, records in entries:
            groups.setdefault(code.upper(), tuple(records))
        return cls(groups)

    def get(self, code: str) -> Optional[Sequence[DomainRecord]]:
        return self._groups.get(code)

    def codes(self) -> List[str]:
        return list(self._groups)

    def __len__(self) -> int:
        return len(self._groups)


def _parse_record(raw: Any, handle: DatasetHandle) -> DomainRecord:
    if not isinstance(raw, dict) or "value" not in raw:
        raise DatasetCorrupt(f"invalid domain entry in {handle}: {raw!r}", handle)
    type_name = str(raw.get("type", "plain")).lower()
    domain_type = TYPE_NAMES.get(type_name)
    if domain_type is None:
        raise DatasetCorrupt(f"unknown domain type {type_name!r} in {handle}", handle)
    attributes = raw.get("attributes", []) or []
    if not isinstance(attributes, list):
        raise DatasetCorrupt(f"attributes must be a list in {handle}: {raw!r}", handle)
    return DomainRecord(domain_type, str(raw["value"]), frozenset(str(attr) for attr in attributes))


def parse_json_dataset(data: Any, handle: DatasetHandle = "<json>") -> InMemoryDomainList:
    """Build a source from decoded JSON (``{"entries": [...]}``)."""

    entries = data.get("entries") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise DatasetCorrupt(f"dataset {handle} has no entries list", handle)

    parsed = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("code"):
            raise DatasetCorrupt(f"invalid group entry in {handle}: {entry!r}", handle)
        domains = entry.get("domains", []) or []
        if not isinstance(domains, list):
            raise DatasetCorrupt(f"domains must be a list in {handle}: {entry['code']}", handle)
        parsed.append((str(entry["code"]), [_parse_record(raw, handle) for raw in domains]))
    return InMemoryDomainList.from_entries(parsed)


def load_json_dataset(handle: DatasetHandle) -> InMemoryDomainList:
    try:
        with open(handle, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise DatasetUnavailable(f"cannot read dataset {handle}: {exc}", handle) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DatasetCorrupt(f"cannot decode dataset {handle}: {exc}", handle) from exc
    source = parse_json_dataset(data, handle)
    LOGGER.info("Loaded %s groups from %s", len(source), handle)
    return source


def load_dataset(handle: DatasetHandle) -> InMemoryDomainList:
    """Load ``handle`` with the loader matching its file suffix.

    ``.json`` files use the JSON format, everything else is decoded as a
    geosite.dat GeoSiteList.
    """

    if os.fspath(handle).lower().endswith(".json"):
        return load_json_dataset(handle)

    from geomatch.adapters.geosite_dat import load_geosite_dat

    return load_geosite_dat(handle)
