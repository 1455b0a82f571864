"""Shared type-name cache.

The cache is an optimization: a miss always triggers a fresh resolution. Each
``clear()`` starts a new generation, and writes tagged with an older
generation are dropped, so a resolution racing with a scope removal cannot
leave an entry behind for the departed scope.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from dynresolve.core.models import TypeHandle


class TypeCache:
    """Thread-safe mapping from type name to resolved handle."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[str, TypeHandle] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Counter bumped by every ``clear()``."""
        with self._lock:
            return self._generation

    def get(self, name: str) -> TypeHandle | None:
        with self._lock:
            return self._entries.get(name)

    def put(
        self, name: str, handle: TypeHandle, generation: int | None = None
    ) -> TypeHandle:
        """Store a handle and return the one now cached under ``name``.

        Args:
            name: Type name the handle was resolved from.
            handle: Resolved handle.
            generation: Generation observed when the resolution started. When
                it no longer matches, the write is skipped.

        Returns:
            The cached handle (an earlier concurrent winner takes precedence),
            or ``handle`` itself when the write was skipped.
        """
        with self._lock:
            if generation is not None and generation != self._generation:
                return handle
            return self._entries.setdefault(name, handle)

    def remove(self, name: str) -> TypeHandle | None:
        with self._lock:
            return self._entries.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._generation += 1

    def keys(self) -> list[str]:
        """Cached names in lexical order."""
        with self._lock:
            return sorted(self._entries)

    def snapshot(self) -> dict[str, TypeHandle]:
        with self._lock:
            return dict(sorted(self._entries.items()))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
