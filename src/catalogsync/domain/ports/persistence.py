"""Ports for persisting the catalog mirror."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogsync.domain.model import Catalog, VersionList


@runtime_checkable
class MirrorStore(Protocol):
    """Persisted ``name -> versions`` mapping for a single package family."""

    def get_all(self) -> Catalog: ...

    def get(self, name: str) -> VersionList | None: ...

    def set(self, name: str, versions: VersionList) -> None: ...

    def delete(self, name: str) -> None: ...
