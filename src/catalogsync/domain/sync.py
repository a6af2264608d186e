"""Sync passes tying fetch, reconciliation and cache invalidation together."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from .incremental import apply_latest_releases
from .invalidation import invalidate_names
from .model import ReconcileResult, SyncMode, VersionRecord
from .reconciliation import reconcile_catalog
from .registration import register_release
from .transactions import run_in_transaction

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from .families import CatalogFamily
    from .model import ReleaseRef, VersionList
    from .ports.fetching import CatalogFetcher, ReleaseStreamFetcher
    from .ports.invalidation import CacheInvalidator
    from .ports.persistence import MirrorStore
    from .transactions import UnitOfWorkFactory

log = getLogger(__name__)

_LOCKS_GUARD = threading.Lock()
_FAMILY_LOCKS: dict[str, threading.Lock] = {}


def family_lock(family: CatalogFamily) -> threading.Lock:
    """Return the process-wide lock serialising passes over ``family``."""

    with _LOCKS_GUARD:
        return _FAMILY_LOCKS.setdefault(family.name, threading.Lock())


class SyncError(RuntimeError):
    """Raised when a pass fails before producing a complete result."""

    def __init__(self, message: str, *, family: str, stage: str) -> None:
        super().__init__(message)
        self.family = family
        self.stage = stage


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one committed pass."""

    family: str
    mode: SyncMode
    changed: Mapping[str, VersionList] = field(default_factory=dict[str, "VersionList"])
    removed: tuple[str, ...] = ()
    fetched: int = 0
    invalidated: tuple[str, ...] = ()
    invalidation_failures: tuple[str, ...] = ()


@dataclass(slots=True)
class SyncOrchestrator:
    """Run sync passes for one package family."""

    family: CatalogFamily
    unit_of_work_factory: UnitOfWorkFactory
    invalidator: CacheInvalidator

    def sync_full(self, fetcher: CatalogFetcher) -> SyncResult:
        """Fetch the whole upstream catalog and reconcile the mirror against it."""

        with family_lock(self.family):
            log.info("Starting full %s sync", self.family.name)
            try:
                fetched = fetcher.fetch_all()
            except Exception as exc:
                raise SyncError(
                    f"Fetching the {self.family.name} catalog failed: {exc}",
                    family=self.family.name,
                    stage="fetch",
                ) from exc

            catalog = self.family.canonical_catalog(fetched)
            diff = self._apply(partial(reconcile_catalog, catalog))
            return self._finish(SyncMode.FULL, diff, fetched=len(catalog))

    def sync_incremental(self, fetcher: ReleaseStreamFetcher) -> SyncResult:
        """Record the releases published since the newest one already mirrored."""

        if not self.family.supports_incremental:
            raise ValueError(f"Family {self.family.name!r} has no release stream")

        with family_lock(self.family):
            log.info("Starting incremental %s sync", self.family.name)
            seen = 0

            def counted() -> Iterator[ReleaseRef]:
                nonlocal seen
                for release in self._guard_stream(fetcher):
                    seen += 1
                    yield release

            def work(store: MirrorStore) -> ReconcileResult:
                return ReconcileResult(changed=apply_latest_releases(counted(), store))

            diff = self._apply(work)
            return self._finish(SyncMode.INCREMENTAL, diff, fetched=seen)

    def register(self, name: str, version: str, platform: str | None = None) -> SyncResult:
        """Merge one release observed out-of-band into the mirror."""

        record = VersionRecord(
            name=name,
            version=version,
            platform=platform or self.family.canonical_platform,
        )
        with family_lock(self.family):
            diff = self._apply(partial(register_release, record, family=self.family))
            return self._finish(SyncMode.REGISTER, diff, fetched=1)

    def _guard_stream(self, fetcher: ReleaseStreamFetcher) -> Iterator[ReleaseRef]:
        try:
            yield from fetcher.stream_releases_newest_first()
        except Exception as exc:
            raise SyncError(
                f"Streaming {self.family.name} releases failed: {exc}",
                family=self.family.name,
                stage="fetch",
            ) from exc

    def _apply(self, work: Callable[[MirrorStore], ReconcileResult]) -> ReconcileResult:
        try:
            return run_in_transaction(self.unit_of_work_factory, work)
        except SyncError:
            raise
        except Exception as exc:
            raise SyncError(
                f"Applying {self.family.name} changes failed, mirror left untouched: {exc}",
                family=self.family.name,
                stage="apply",
            ) from exc

    def _finish(self, mode: SyncMode, diff: ReconcileResult, *, fetched: int) -> SyncResult:
        report = invalidate_names(self.invalidator, self.family, diff.stale_names)
        result = SyncResult(
            family=self.family.name,
            mode=mode,
            changed=diff.changed,
            removed=diff.removed,
            fetched=fetched,
            invalidated=report.invalidated,
            invalidation_failures=report.failed,
        )
        log.info(
            "Finished %s %s sync: fetched=%s, changed=%s, removed=%s, invalidation_failures=%s",
            mode,
            self.family.name,
            fetched,
            len(result.changed),
            len(result.removed),
            len(result.invalidation_failures),
        )
        return result
