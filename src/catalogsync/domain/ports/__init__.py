"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CatalogFetcher, CatalogSource, ReleaseStreamFetcher
from .invalidation import CacheInvalidator
from .persistence import MirrorStore
from .unit_of_work import (
    MirrorRepositories,
    MirrorUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CacheInvalidator",
    "CatalogFetcher",
    "CatalogSource",
    "MirrorRepositories",
    "MirrorStore",
    "MirrorUnitOfWork",
    "ReleaseStreamFetcher",
    "RepositoryCollection",
    "UnitOfWork",
]
