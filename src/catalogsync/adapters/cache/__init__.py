"""Cache invalidation adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .filesystem import FileSystemCacheInvalidator
from .purge import HttpPurgeCacheInvalidator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogsync.config.cache import CacheConfig

log = getLogger(__name__)


class ClosableCacheInvalidator(Protocol):
    """Cache invalidator owning resources released by ``close``."""

    def invalidate(self, keys: frozenset[str]) -> None: ...

    def close(self) -> None: ...


class NullCacheInvalidator:
    """Used when no cache is configured."""

    def invalidate(self, keys: frozenset[str]) -> None:
        log.debug("No cache configured; skipping invalidation of %s", ", ".join(sorted(keys)))

    def close(self) -> None:
        pass


class CompositeCacheInvalidator:
    """Fan one invalidation out to several caches.

    Every cache is attempted; the first failure is re-raised afterwards so the caller
    can record the name as not fully invalidated.
    """

    def __init__(self, invalidators: Sequence[ClosableCacheInvalidator]) -> None:
        self.invalidators = tuple(invalidators)

    def invalidate(self, keys: frozenset[str]) -> None:
        first_error: Exception | None = None
        for invalidator in self.invalidators:
            try:
                invalidator.invalidate(keys)
            except Exception as exc:  # noqa: BLE001
                log.warning("%s failed: %s", type(invalidator).__name__, exc)
                first_error = first_error or exc
        if first_error is not None:
            raise first_error

    def close(self) -> None:
        for invalidator in self.invalidators:
            invalidator.close()


def build_cache_invalidator(config: CacheConfig) -> ClosableCacheInvalidator:
    invalidators: list[ClosableCacheInvalidator] = []
    if config.cache_dir is not None:
        invalidators.append(FileSystemCacheInvalidator(config.cache_dir))
    if config.purge is not None:
        invalidators.append(HttpPurgeCacheInvalidator(config.purge))

    if not invalidators:
        return NullCacheInvalidator()
    if len(invalidators) == 1:
        return invalidators[0]
    return CompositeCacheInvalidator(invalidators)


__all__ = [
    "ClosableCacheInvalidator",
    "CompositeCacheInvalidator",
    "FileSystemCacheInvalidator",
    "HttpPurgeCacheInvalidator",
    "NullCacheInvalidator",
    "build_cache_invalidator",
]
