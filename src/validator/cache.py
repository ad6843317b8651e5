"""In-process store of registry outcomes keyed by VAT number body.

Every method is a single dict operation, each atomic under the GIL, so
concurrent callers never take a lock and unrelated keys never contend.
Entries live for the life of the process: no TTL, no eviction.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class VatCache:
    """Weakly typed key/value store with load-or-store semantics."""

    def __init__(self) -> None:
        self._entries: dict[str, object] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def load(self, key: str) -> str | None:
        """Return the cached status, or None on a miss.

        A value that is not a string is dropped and reported as a miss.
        """
        value = self._entries.get(key)
        if value is None or isinstance(value, str):
            return value
        logger.warning("Discarding cache entry %s of unexpected type %s", key[:4], type(value).__name__)
        self.discard(key, value)
        return None

    def load_or_store(self, key: str, value: str) -> str:
        """Store `value` unless the key is already set; return the value that won."""
        existing = self._entries.setdefault(key, value)
        if isinstance(existing, str):
            return existing
        # A polluted entry beat us to it; replace it with the fresh value.
        self.discard(key, existing)
        return self.load_or_store(key, value)

    def store(self, key: str, value: object) -> None:
        self._entries[key] = value

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def discard(self, key: str, value: object) -> None:
        """Delete `key` only while it still holds `value`.

        Check and pop are two dict operations: no coroutine can interleave,
        but a thread may still replace the entry in between.
        """
        if self._entries.get(key) is value:
            self._entries.pop(key, None)
