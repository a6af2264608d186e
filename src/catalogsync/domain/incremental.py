"""Incremental mirror update from a newest-first release stream."""

from __future__ import annotations

from collections.abc import Generator
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ReleaseRef, VersionList
    from .ports.persistence import MirrorStore

log = getLogger(__name__)


def apply_latest_releases(
    releases: Iterable[ReleaseRef],
    store: MirrorStore,
) -> dict[str, VersionList]:
    """Record releases until the first one the mirror already knows.

    ``releases`` must be ordered by release recency, newest first, across all
    packages; everything behind the first known release is assumed to be known too.
    Releases recorded in one pass stay in stream order ahead of the versions the row
    held before, so several new releases of a package keep newest-first order.
    Rows are created or extended, never deleted. Returns the touched names mapped to
    the version list they held before the pass, in first-touched order.
    """

    touched: dict[str, VersionList] = {}
    added: dict[str, list[str]] = {}
    iterator = iter(releases)
    try:
        for release in iterator:
            versions = store.get(release.name)
            if versions is not None and release.version in versions:
                log.debug("Reached known release %s %s", release.name, release.version)
                break
            previous = touched.setdefault(release.name, versions or ())
            fresh = added.setdefault(release.name, [])
            fresh.append(release.version)
            store.set(release.name, (*fresh, *previous))
    finally:
        if isinstance(iterator, Generator):
            iterator.close()
    return touched
