from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Tuple, TypeVar

from zones.records import RecordStore

from .checker import ConsistencyChecker

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (checker, its lock, generation it was published as)
_Entry = Tuple[ConsistencyChecker, threading.Lock, int]


class NoCheckerLoaded(LookupError):
    """Raised when the handle is used before any store was published."""


class CheckerHandle:
    """
    Process-wide "current checker".

    A new checker is built off to the side and swapped in under a short lock,
    so readers always see a complete store. Work on a checker goes through
    run(), which holds that checker's own lock: lazy index builds on one
    instance never race, while an old and a new checker can be used at the
    same time.
    """

    def __init__(self, store: Optional[RecordStore] = None):
        self._swap_lock = threading.Lock()
        self._entry: Optional[_Entry] = None
        self._generation = 0
        if store is not None:
            self.replace(store)

    @property
    def generation(self) -> int:
        with self._swap_lock:
            return self._generation

    def _current_entry(self) -> _Entry:
        with self._swap_lock:
            entry = self._entry
        if entry is None:
            raise NoCheckerLoaded("no zone data loaded")
        return entry

    def current(self) -> ConsistencyChecker:
        return self._current_entry()[0]

    def replace(self, store: RecordStore) -> ConsistencyChecker:
        """Publish a checker over `store`. The store must not change afterwards."""
        checker = ConsistencyChecker(store)
        with self._swap_lock:
            self._generation += 1
            gen = self._generation
            self._entry = (checker, threading.Lock(), gen)
        logger.info("published checker generation %d with %d records", gen, len(store))
        return checker

    def run(self, fn: Callable[[ConsistencyChecker], T]) -> T:
        return self.run_versioned(fn)[1]

    def run_versioned(self, fn: Callable[[ConsistencyChecker], T]) -> Tuple[int, T]:
        """Like run(), also returning the generation of the checker that did the work."""
        checker, lock, gen = self._current_entry()
        with lock:
            return gen, fn(checker)
