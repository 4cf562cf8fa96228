from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, List, Optional

import dns.exception
import dns.ipv4
import dns.ipv6
import dns.reversename
from dns.rdatatype import RdataType

from zones.models import Record
from zones.records import RecordStore

from .errors import CheckerError, MalformedAddressError, MalformedPTROwnerError

logger = logging.getLogger(__name__)

IPV4_REVERSE_SUFFIX = ".in-addr.arpa."
IPV6_REVERSE_SUFFIX = ".ip6.arpa."

# name -> {reverse-lookup key -> A/AAAA record}, or owner -> {target -> PTR record}
Index = Dict[str, Dict[str, Record]]


class IndexState(enum.Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"
    FAILED = "failed"


def reverse_key(record: Record) -> str:
    """
    Reverse-lookup name for an A or AAAA record, e.g. 10.0.0.1 -> 1.0.0.10.in-addr.arpa.

    The address must be a literal of the record's own family.
    """
    try:
        if record.rtype == RdataType.A:
            dns.ipv4.inet_aton(record.value)
        else:
            dns.ipv6.inet_aton(record.value)
        return dns.reversename.from_address(record.value).to_text()
    except (dns.exception.SyntaxError, ValueError, TypeError) as e:
        raise MalformedAddressError(record, str(e) or None) from e


def is_reverse_name(name: str) -> bool:
    return name.endswith(IPV4_REVERSE_SUFFIX) or name.endswith(IPV6_REVERSE_SUFFIX)


class _IndexSlot:
    """One lazily built index plus the state of its last build."""

    def __init__(self, kind: str, builder: Callable[[], Index]):
        self.kind = kind
        self.builder = builder
        self.state = IndexState.UNBUILT
        self.index: Optional[Index] = None
        self.error: Optional[CheckerError] = None

    def ensure(self) -> Optional[CheckerError]:
        if self.state is IndexState.UNBUILT:
            try:
                self.index = self.builder()
            except CheckerError as e:
                # A partial index is never kept.
                self.index = None
                self.error = e
                self.state = IndexState.FAILED
                logger.error("failed to build %s index: %s", self.kind, e)
            else:
                self.error = None
                self.state = IndexState.BUILT
                logger.debug("built %s index with %d names", self.kind, len(self.index))
        return self.error

    def reset(self) -> None:
        self.state = IndexState.UNBUILT
        self.index = None
        self.error = None


class ConsistencyChecker:
    """
    Cross-checks forward (A/AAAA) and reverse (PTR) records held in a RecordStore.

    The store is shared, not copied, and is never mutated here. Indexes are
    built on the first check and cached; a failed build is remembered until
    reset(). One instance is not safe for concurrent use: callers serialize
    access (see CheckerHandle).
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._a = _IndexSlot("A", lambda: self._build_forward(RdataType.A))
        self._aaaa = _IndexSlot("AAAA", lambda: self._build_forward(RdataType.AAAA))
        self._ptr = _IndexSlot("PTR", self._build_ptr)

    @property
    def store(self) -> RecordStore:
        return self._store

    # ----------------------------
    # Index state
    # ----------------------------

    def state(self, kind: str) -> IndexState:
        return self._slot(kind).state

    def index(self, kind: str) -> Optional[Index]:
        """The built index for "a", "aaaa" or "ptr"; None unless BUILT."""
        return self._slot(kind).index

    def _slot(self, kind: str) -> _IndexSlot:
        slots = {"a": self._a, "aaaa": self._aaaa, "ptr": self._ptr}
        try:
            return slots[kind.lower()]
        except KeyError:
            raise ValueError(f"unknown index kind: {kind}") from None

    def prepare(self) -> None:
        """
        Build every index that is still unbuilt.

        All three builds are attempted in the same pass; if any of them failed
        (now or on an earlier call) the first error is raised and no check
        should run. Calling it again on a prepared checker does nothing.
        """
        errors = [slot.ensure() for slot in (self._a, self._aaaa, self._ptr)]
        for err in errors:
            if err is not None:
                raise err

    def reset(self) -> None:
        """Drop all indexes so the next check rebuilds them."""
        for slot in (self._a, self._aaaa, self._ptr):
            slot.reset()

    def _build_forward(self, rtype: RdataType) -> Index:
        index: Index = {}
        for r in self._store.records_of_type(rtype):
            key = reverse_key(r)
            index.setdefault(r.name, {})[key] = r
        return index

    def _build_ptr(self) -> Index:
        index: Index = {}
        for r in self._store.records_of_type(RdataType.PTR):
            if not is_reverse_name(r.name):
                raise MalformedPTROwnerError(r)
            index.setdefault(r.name, {})[r.target] = r
        return index

    # ----------------------------
    # Checks
    # ----------------------------

    def check_a(self) -> List[Record]:
        """A records whose name has no PTR for any of its addresses."""
        self.prepare()
        failed = self._check_forward(self._a.index)
        logger.info("A check: %d failed records", len(failed))
        return failed

    def check_aaaa(self) -> List[Record]:
        """AAAA records whose name has no PTR for any of its addresses."""
        self.prepare()
        failed = self._check_forward(self._aaaa.index)
        logger.info("AAAA check: %d failed records", len(failed))
        return failed

    def check_ptr(self) -> List[Record]:
        """
        PTR records whose owner is not pointed back to by any of its targets.

        ip6.arpa. owners are matched against AAAA records, everything else
        against A records.
        """
        self.prepare()
        a, aaaa, ptr = self._a.index, self._aaaa.index, self._ptr.index

        failed: List[Record] = []
        for owner, by_target in ptr.items():
            forward = aaaa if owner.endswith(IPV6_REVERSE_SUFFIX) else a
            if any(owner in forward.get(target, {}) for target in by_target):
                continue
            failed.extend(by_target.values())

        logger.info("PTR check: %d failed records", len(failed))
        return failed

    def _check_forward(self, index: Index) -> List[Record]:
        # One PTR for any of a name's addresses is enough for the whole name.
        ptr = self._ptr.index
        failed: List[Record] = []
        for by_key in index.values():
            if any(key in ptr for key in by_key):
                continue
            failed.extend(by_key.values())
        return failed
