"""Best-effort cache invalidation after a committed pass."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .families import CatalogFamily
    from .ports.invalidation import CacheInvalidator

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InvalidationReport:
    invalidated: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()


def invalidate_names(
    invalidator: CacheInvalidator,
    family: CatalogFamily,
    names: Iterable[str],
) -> InvalidationReport:
    """Issue one invalidation call per name; failures are logged, never raised.

    The mirror is already committed when this runs, so a failed call only leaves a
    stale cache entry until the next invalidation of that name.
    """

    invalidated: list[str] = []
    failed: list[str] = []
    for name in names:
        try:
            invalidator.invalidate(family.cache_keys(name))
        except Exception:  # noqa: BLE001
            log.warning("Cache invalidation failed for %s %s", family.name, name, exc_info=True)
            failed.append(name)
        else:
            invalidated.append(name)
    if failed:
        log.warning(
            "Cache invalidation failed for %s of %s %s",
            len(failed),
            len(failed) + len(invalidated),
            family.name,
        )
    return InvalidationReport(invalidated=tuple(invalidated), failed=tuple(failed))
