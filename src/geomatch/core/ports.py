"""Ports (interfaces) used by the matcher builder.

Ports define the minimal contracts for dataset adapters so that the core
can be reused with different domain-list formats.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Protocol, Sequence, Union

from geomatch.core.models import DomainRecord

DatasetHandle = Union[str, os.PathLike]


class DomainListSource(Protocol):
    """Lookup of named domain groups."""

    def get(self, code: str) -> Optional[Sequence[DomainRecord]]:
        """Return the records of group ``code`` (upper case), or None."""
        ...

    def codes(self) -> Iterable[str]:
        ...


class DatasetLoader(Protocol):
    """Reads a dataset handle into a source.

    Implementations raise DatasetUnavailable on I/O failures and
    DatasetCorrupt on decode failures.
    """

    def __call__(self, handle: DatasetHandle) -> DomainListSource:
        ...
