"""Full-catalog reconciliation against the mirror."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .model import ReconcileResult

if TYPE_CHECKING:
    from .model import Catalog, VersionList
    from .ports.persistence import MirrorStore

log = getLogger(__name__)


def reconcile_catalog(catalog: Catalog, store: MirrorStore) -> ReconcileResult:
    """Bring ``store`` in line with the fetched canonical ``catalog``.

    A known row is left untouched when the fetched versions add nothing to it: only a
    version the mirror did not have yet counts as a change. Rows whose package is
    missing from ``catalog`` are deleted. Callers own the transaction; this function
    only issues row operations.
    """

    known: dict[str, VersionList] = dict(store.get_all())
    changed: dict[str, VersionList] = {}

    for name, versions in catalog.items():
        previous = known.get(name)
        if previous is not None and set(previous).issuperset(versions):
            del known[name]
            continue
        store.set(name, tuple(versions))
        if previous is None:
            changed[name] = ()

    removed: list[str] = []
    for name, previous in known.items():
        if name in catalog:
            changed[name] = previous
        else:
            store.delete(name)
            removed.append(name)

    log.debug(
        "Reconciled %s packages: changed=%s, removed=%s",
        len(catalog),
        len(changed),
        len(removed),
    )
    return ReconcileResult(changed=changed, removed=tuple(sorted(removed)))
