"""Out-of-band registration of a single release."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .model import ReconcileResult, dedupe_versions

if TYPE_CHECKING:
    from .families import CatalogFamily
    from .model import VersionRecord
    from .ports.persistence import MirrorStore

log = getLogger(__name__)


def version_number(entry: str) -> str:
    """Return the version part of a mirror entry such as ``"1.15.0,java"``."""

    return entry.partition(",")[0]


def register_release(
    record: VersionRecord,
    store: MirrorStore,
    *,
    family: CatalogFamily,
) -> ReconcileResult:
    """Merge ``record`` into the mirror row of its package without a full fetch.

    Rows hold one entry per version number. When the number is already mirrored the
    entry is only replaced by a canonical-platform build; any other build is a no-op.
    """

    existing = store.get(record.name) or ()
    label = record.label(family.canonical_platform)
    current = next(
        (entry for entry in existing if version_number(entry) == record.version),
        None,
    )
    if current is not None and (current == label or label != record.version):
        log.info("Release %s %s already mirrored as %s", record.name, label, current)
        return ReconcileResult()

    if current is None:
        merged = (*existing, label)
    else:
        merged = tuple(label if entry == current else entry for entry in existing)
    store.set(record.name, family.order_versions(dedupe_versions(merged)))
    log.info("Registered %s %s (%s)", record.name, label, family.name)
    return ReconcileResult(changed={record.name: existing})
