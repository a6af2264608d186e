"""Version selection and ordering for canonical version lists."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import semantic_version

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import VersionList, VersionRecord

log = getLogger(__name__)


def pick_best_versions(records: Iterable[VersionRecord], *, canonical_platform: str) -> VersionList:
    """Collapse ``records`` to one string per distinct version number.

    Version numbers keep their first-seen order. When several builds share a version
    number, the canonical-platform build is the representative; otherwise the first
    platform-specific build to arrive wins. Version strings are compared for equality
    only.
    """

    candidates: dict[str, list[VersionRecord]] = {}
    for record in records:
        builds = candidates.setdefault(record.version, [])
        if record.platform == canonical_platform:
            builds.insert(0, record)
        else:
            builds.append(record)
    return tuple(builds[0].label(canonical_platform) for builds in candidates.values())


def keep_upstream_order(versions: VersionList) -> VersionList:
    return versions


def newest_first(versions: VersionList) -> VersionList:
    """Sort by semantic version, newest first.

    Strings that are not valid semantic versions follow the valid ones in reverse
    lexical order.
    """

    parsed: list[tuple[semantic_version.Version, str]] = []
    unparsed: list[str] = []
    for version in versions:
        try:
            parsed.append((semantic_version.Version(version), version))
        except ValueError:
            unparsed.append(version)
    if unparsed:
        log.debug("Non-semantic versions sorted lexically: %s", ", ".join(unparsed))
    parsed.sort(key=lambda item: item[0], reverse=True)
    unparsed.sort(reverse=True)
    return (*(version for _, version in parsed), *unparsed)
