"""Value types shared by the reconciliation engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

type VersionList = tuple[str, ...]
"""Canonical, duplicate-free version strings of one package."""

type Catalog = Mapping[str, VersionList]
"""Canonical version lists keyed by package name."""


class SyncMode(StrEnum):
    FULL = "full"
    INCREMENTAL = "incremental"
    REGISTER = "register"


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """One published build of a package as reported upstream."""

    name: str
    version: str
    platform: str

    def label(self, canonical_platform: str) -> str:
        """Return the mirror representation relative to ``canonical_platform``."""

        if self.platform == canonical_platform:
            return self.version
        return f"{self.version},{self.platform}"


@dataclass(frozen=True, slots=True)
class ReleaseRef:
    """Release announced by a newest-first release stream."""

    name: str
    version: str


@dataclass(frozen=True, slots=True)
class MirrorRow:
    name: str
    versions: VersionList

    def __post_init__(self) -> None:
        if len(set(self.versions)) != len(self.versions):
            raise ValueError(f"Duplicate versions in mirror row {self.name!r}: {self.versions}")


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Mirror rows that became stale during a pass.

    ``changed`` maps each written name to the version list it held before the pass
    (empty for names seen for the first time).
    """

    changed: Mapping[str, VersionList] = field(default_factory=dict[str, VersionList])
    removed: tuple[str, ...] = ()

    @property
    def stale_names(self) -> tuple[str, ...]:
        return (*self.changed, *self.removed)

    @property
    def is_empty(self) -> bool:
        return not self.changed and not self.removed


def dedupe_versions(versions: tuple[str, ...] | list[str]) -> VersionList:
    """Drop repeated version strings, keeping the first occurrence."""

    return tuple(dict.fromkeys(versions))
