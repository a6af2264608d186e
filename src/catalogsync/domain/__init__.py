"""Reconciliation engine for mirrored package catalogs."""

from __future__ import annotations

from .families import FAMILIES, GEMS, MODULES, CatalogFamily, get_family
from .incremental import apply_latest_releases
from .invalidation import InvalidationReport, invalidate_names
from .model import (
    Catalog,
    MirrorRow,
    ReconcileResult,
    ReleaseRef,
    SyncMode,
    VersionList,
    VersionRecord,
    dedupe_versions,
)
from .reconciliation import reconcile_catalog
from .registration import register_release
from .sync import SyncError, SyncOrchestrator, SyncResult, family_lock
from .transactions import run_in_transaction
from .versions import keep_upstream_order, newest_first, pick_best_versions

__all__ = [
    "FAMILIES",
    "GEMS",
    "MODULES",
    "Catalog",
    "CatalogFamily",
    "InvalidationReport",
    "MirrorRow",
    "ReconcileResult",
    "ReleaseRef",
    "SyncError",
    "SyncMode",
    "SyncOrchestrator",
    "SyncResult",
    "VersionList",
    "VersionRecord",
    "apply_latest_releases",
    "dedupe_versions",
    "family_lock",
    "get_family",
    "invalidate_names",
    "keep_upstream_order",
    "newest_first",
    "pick_best_versions",
    "reconcile_catalog",
    "register_release",
    "run_in_transaction",
]
