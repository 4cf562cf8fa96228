from __future__ import annotations

from typing import Dict, Iterator, List, Set

import dns.rdatatype
from dns.rdatatype import RdataType

from .models import Record, RecordTag, to_tag


class RecordStore:
    """
    Parsed DNS records: one flat list in insertion order plus the same records
    grouped by type.

    `by_type` is always a partition of `all`. Snapshots returned by list() and
    records_of_type() are copies; the records themselves are immutable.
    """

    def __init__(self) -> None:
        self._all: List[Record] = []
        self._by_type: Dict[RdataType, List[Record]] = {}

    def add(self, record: Record) -> None:
        self._all.append(record)
        self._by_type.setdefault(record.rtype, []).append(record)

    def merge(self, other: "RecordStore") -> "RecordStore":
        """Append every record of `other` after the records already held."""
        # Snapshot first so merging a store into itself terminates.
        incoming = list(other._all)
        buckets = {t: list(rs) for t, rs in other._by_type.items()}
        self._all.extend(incoming)
        for t, rs in buckets.items():
            self._by_type.setdefault(t, []).extend(rs)
        return self

    def list(self) -> List[Record]:
        return list(self._all)

    def records_of_type(self, rtype: RecordTag) -> List[Record]:
        return list(self._by_type.get(to_tag(rtype), []))

    def types_present(self) -> Set[RdataType]:
        return {t for t, rs in self._by_type.items() if rs}

    def types_text(self) -> List[str]:
        return sorted(dns.rdatatype.to_text(t) for t in self.types_present())

    def __len__(self) -> int:
        return len(self._all)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._all))

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._all)}, types={self.types_text()})"
