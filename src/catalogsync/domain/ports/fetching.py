"""Ports for fetching upstream catalog data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from catalogsync.domain.model import ReleaseRef, VersionRecord


@runtime_checkable
class CatalogFetcher(Protocol):
    """Port returning a complete snapshot of an upstream catalog."""

    def fetch_all(self) -> Mapping[str, Sequence[VersionRecord]]: ...


@runtime_checkable
class ReleaseStreamFetcher(Protocol):
    """Port streaming upstream releases, most recent first.

    The returned iterator is lazy and finite. Closing it stops any further upstream
    requests; a retry must start a new stream from the newest release.
    """

    def stream_releases_newest_first(self) -> Iterator[ReleaseRef]: ...


@runtime_checkable
class CatalogSource(CatalogFetcher, ReleaseStreamFetcher, Protocol):
    """Upstream offering both the full snapshot and the release stream."""


__all__ = ["CatalogFetcher", "CatalogSource", "ReleaseStreamFetcher"]
