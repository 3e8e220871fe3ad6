# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""In-process read cache for stored terms.

Two caches share one readers/writer lock:

- a snapshot of every stored row
- a query cache keyed by ``"term:language"``, where the reserved
  wildcard key ``"*:*"`` holds the unfiltered snapshot

Lifecycle: empty at start, filled on first load, invalidated in full
and refilled (wildcard entry only) after every successful mutation.
No store I/O happens while the lock is held.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from termsquire.core.errors import CacheRefreshError
from termsquire.core.models import StoredTerm

logger = logging.getLogger(__name__)

WILDCARD_KEY = "*:*"


def _escape_key_part(value: str) -> str:
    return value.replace("\\", "\\\\").replace(":", "\\:")


def search_key(term: str, language: str) -> str:
    """Normalize a search into its query cache key.

    Colons inside either part are backslash-escaped so distinct searches
    never share a key.
    """
    return f"{_escape_key_part(term.strip())}:{_escape_key_part(language.strip())}"


def matches(entry: StoredTerm, term: str, language: str) -> bool:
    """In-memory equivalent of :meth:`TermStore.search_terms`."""
    if term and term not in (entry.term or ""):
        return False
    if language and entry.language != language:
        return False
    return True


class ReadWriteLock:
    """Lock allowing many concurrent readers or one exclusive writer.

    Waiting writers block new readers so refreshes are not starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TermCache:
    """Snapshot and query cache over a term store.

    Every invalidation bumps :attr:`generation`; results computed from the
    store are only installed if the generation is unchanged, so a load that
    raced a mutation never repopulates stale rows.

    Example:
        >>> cache = TermCache()
        >>> cache.refresh(store.get_all_terms)
        >>> len(cache.snapshot() or [])
        6
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._snapshot: list[StoredTerm] | None = None
        self._queries: dict[str, list[StoredTerm]] = {}
        self._generation = 0
        self._stale = False
        self._last_error: Exception | None = None

    @property
    def generation(self) -> int:
        with self._lock.read_locked():
            return self._generation

    @property
    def is_stale(self) -> bool:
        """True when the last refresh failed and reads fall through to the store."""
        with self._lock.read_locked():
            return self._stale

    @property
    def last_error(self) -> Exception | None:
        with self._lock.read_locked():
            return self._last_error

    def snapshot(self) -> list[StoredTerm] | None:
        """Return a copy of the cached rows, or None if not loaded."""
        with self._lock.read_locked():
            if self._snapshot is None:
                return None
            return list(self._snapshot)

    def get_query(self, key: str) -> list[StoredTerm] | None:
        with self._lock.read_locked():
            rows = self._queries.get(key)
            return None if rows is None else list(rows)

    def filter_snapshot(self, term: str, language: str) -> list[StoredTerm] | None:
        """Answer a search from the wildcard entry, or None if it is absent."""
        with self._lock.read_locked():
            rows = self._queries.get(WILDCARD_KEY)
            if rows is None:
                return None
            return [entry for entry in rows if matches(entry, term, language)]

    def put_query(self, key: str, rows: list[StoredTerm], generation: int) -> bool:
        """Cache a search result computed at ``generation``.

        Returns:
            False if the cache was invalidated since, in which case nothing is stored
        """
        with self._lock.write_locked():
            if generation != self._generation:
                return False
            self._queries[key] = list(rows)
            return True

    def install(self, rows: list[StoredTerm], generation: int) -> bool:
        """Install a full snapshot (and the wildcard entry) loaded at ``generation``."""
        with self._lock.write_locked():
            if generation != self._generation:
                return False
            self._snapshot = list(rows)
            self._queries[WILDCARD_KEY] = list(rows)
            self._stale = False
            self._last_error = None
            return True

    def invalidate(self) -> int:
        """Drop every cached entry.

        Returns:
            The new generation
        """
        with self._lock.write_locked():
            self._generation += 1
            self._snapshot = None
            self._queries.clear()
            return self._generation

    def refresh(self, loader: Callable[[], list[StoredTerm]]) -> None:
        """Invalidate, then reload the snapshot via ``loader``.

        The loader runs outside the lock. On failure the cache stays empty
        and is flagged stale, unless a newer invalidation has superseded this
        refresh, in which case the failure is ignored.

        Raises:
            CacheRefreshError: If the loader fails and no newer invalidation happened
        """
        generation = self.invalidate()
        try:
            rows = loader()
        except Exception as e:
            with self._lock.write_locked():
                superseded = generation != self._generation
                if not superseded:
                    self._stale = True
                    self._last_error = e
            if superseded:
                logger.debug(f"Ignoring failure of a superseded cache refresh: {e}")
                return
            raise CacheRefreshError(f"Failed to reload term cache: {e}") from e

        if self.install(rows, generation):
            logger.debug(f"Term cache populated with {len(rows)} terms")
        else:
            logger.debug("Term cache refresh superseded by a newer invalidation")
