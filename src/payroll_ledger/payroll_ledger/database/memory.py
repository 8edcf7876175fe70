from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator

logger = logging.getLogger(__name__)

TABLES = ("staff", "payments", "audit_logs", "users")


class InMemoryStore:
    """Process-local tables keyed by integer id.

    Rows are frozen dataclasses, so a shallow copy of each table is a full
    snapshot. All access goes through ``lock()`` or ``transaction()``.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0
        self.tables: Dict[str, Dict[int, Any]] = {name: {} for name in TABLES}
        self._sequences: Dict[str, int] = {name: 0 for name in TABLES}

    @contextmanager
    def lock(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            yield self

    def next_id(self, table: str) -> int:
        with self._lock:
            self._sequences[table] += 1
            return self._sequences[table]

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            tables = {name: dict(rows) for name, rows in self.tables.items()}
            sequences = dict(self._sequences)
            self._depth = 1
            try:
                yield self
            except Exception:
                logger.warning("Rolling back in-memory transaction")
                self.tables = tables
                self._sequences = sequences
                raise
            finally:
                self._depth = 0
