"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import closing, contextmanager
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.cache import build_cache_invalidator
from catalogsync.adapters.forge import ForgeFetcher
from catalogsync.adapters.rubygems import RubyGemsFetcher
from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMirrorUnitOfWork,
    is_started,
    startup,
)
from catalogsync.config import get_cache_config
from catalogsync.domain.families import GEMS, MODULES, get_family
from catalogsync.domain.sync import SyncOrchestrator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from catalogsync.domain.families import CatalogFamily
    from catalogsync.domain.ports.fetching import CatalogFetcher, CatalogSource
    from catalogsync.domain.ports.invalidation import CacheInvalidator
    from catalogsync.domain.sync import SyncResult
    from catalogsync.domain.transactions import UnitOfWorkFactory

log = getLogger(__name__)


def ensure_started() -> None:
    if not is_started():
        startup()


@contextmanager
def cache_invalidator(invalidator: CacheInvalidator | None = None) -> Iterator[CacheInvalidator]:
    """Yield ``invalidator``, or one built from the environment and closed afterwards."""

    if invalidator is not None:
        yield invalidator
        return
    with closing(build_cache_invalidator(get_cache_config())) as built:
        yield built


def build_orchestrator(
    family: CatalogFamily,
    *,
    invalidator: CacheInvalidator,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncOrchestrator:
    if unit_of_work_factory is None:
        ensure_started()
        unit_of_work_factory = partial(SqlAlchemyMirrorUnitOfWork, family)
    return SyncOrchestrator(
        family=family,
        unit_of_work_factory=unit_of_work_factory,
        invalidator=invalidator,
    )


def sync_gems(
    *,
    fetcher: CatalogFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    invalidator: CacheInvalidator | None = None,
) -> SyncResult:
    """Reconcile the gem mirror against the full RubyGems index."""

    with cache_invalidator(invalidator) as cache:
        orchestrator = build_orchestrator(
            GEMS,
            unit_of_work_factory=unit_of_work_factory,
            invalidator=cache,
        )
        return orchestrator.sync_full(fetcher or RubyGemsFetcher())


def sync_modules(
    *,
    incremental: bool = False,
    fetcher: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    invalidator: CacheInvalidator | None = None,
) -> SyncResult:
    """Reconcile the module mirror, either fully or from the newest releases only."""

    source = fetcher or ForgeFetcher()
    with cache_invalidator(invalidator) as cache:
        orchestrator = build_orchestrator(
            MODULES,
            unit_of_work_factory=unit_of_work_factory,
            invalidator=cache,
        )
        if incremental:
            return orchestrator.sync_incremental(source)
        return orchestrator.sync_full(source)


def register_release(
    family_name: str,
    name: str,
    version: str,
    *,
    platform: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    invalidator: CacheInvalidator | None = None,
) -> SyncResult:
    """Record one newly published release without fetching the catalog."""

    family = get_family(family_name)
    with cache_invalidator(invalidator) as cache:
        orchestrator = build_orchestrator(
            family,
            unit_of_work_factory=unit_of_work_factory,
            invalidator=cache,
        )
        return orchestrator.register(name, version, platform)
