"""Port for invalidating rendered pages derived from the mirror."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheInvalidator(Protocol):
    def invalidate(self, keys: frozenset[str]) -> None: ...
