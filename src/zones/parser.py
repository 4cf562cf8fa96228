from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

import dns.name
import dns.zone

from .models import Record
from .records import RecordStore

logger = logging.getLogger(__name__)


def parse_file(path: str, origin: Optional[str] = None, store: Optional[RecordStore] = None) -> RecordStore:
    """
    Parse one zone file into `store` (a new store if none is given).

    Names are loaded absolute (relativize=False) and lower-cased. Without an
    explicit origin the zone is rooted at "." so every record is kept, whatever
    $ORIGIN it falls under; relative names follow the current $ORIGIN. OSError
    and dnspython exceptions are not caught here.
    """
    store = store if store is not None else RecordStore()

    zone = dns.zone.from_file(
        path,
        origin=origin if origin is not None else dns.name.root,
        relativize=False,
        check_origin=False,
    )

    count = 0
    for name, ttl, rdata in zone.iterate_rdatas():
        store.add(Record.from_rdata(name, ttl, rdata, source=path))
        count += 1

    logger.debug("parsed %d records from %s", count, path)
    return store


def parse_directory(path: str) -> RecordStore:
    """
    Parse every regular file below `path` as a zone file.

    The walk is sorted so the resulting store has a deterministic order.
    $INCLUDE is handled by dnspython per file; nothing else is filtered.
    """
    if not os.path.isdir(path):
        raise FileNotFoundError(f"zone directory not found: {path}")

    store = RecordStore()

    def _raise(err: OSError) -> None:
        raise err

    for root, dirs, files in os.walk(path, onerror=_raise):
        dirs.sort()
        for fname in sorted(files):
            parse_file(os.path.join(root, fname), store=store)

    logger.info("loaded %d records (%s) from %s", len(store), ", ".join(store.types_text()), path)
    return store


def load_directories(paths: Iterable[str]) -> RecordStore:
    """Parse each directory and merge the results in the given order."""
    merged = RecordStore()
    for p in paths:
        merged.merge(parse_directory(p))
    return merged
