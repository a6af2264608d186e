"""Package families handled by the engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .versions import keep_upstream_order, newest_first, pick_best_versions

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .model import Catalog, VersionList, VersionRecord

type VersionOrdering = Callable[[VersionList], VersionList]


@dataclass(frozen=True, slots=True)
class CatalogFamily:
    """Parameters that distinguish one mirrored registry from another."""

    name: str
    canonical_platform: str
    cache_prefix: str
    order_versions: VersionOrdering
    supports_incremental: bool = False

    def canonical_versions(self, records: Iterable[VersionRecord]) -> VersionList:
        picked = pick_best_versions(records, canonical_platform=self.canonical_platform)
        return self.order_versions(picked)

    def canonical_catalog(self, fetched: Mapping[str, Sequence[VersionRecord]]) -> Catalog:
        catalog: dict[str, VersionList] = {}
        for name, records in fetched.items():
            versions = self.canonical_versions(records)
            if versions:
                catalog[name] = versions
        return catalog

    def cache_keys(self, name: str) -> frozenset[str]:
        """Return the cache keys invalidated when ``name`` changes."""

        prefix = self.cache_prefix
        return frozenset({prefix, f"{prefix}/~{name[:1]}", f"{prefix}/{name}"})


GEMS: Final = CatalogFamily(
    name="gems",
    canonical_platform="ruby",
    cache_prefix="/gems",
    order_versions=keep_upstream_order,
)

MODULES: Final = CatalogFamily(
    name="modules",
    canonical_platform="puppet",
    cache_prefix="/modules",
    order_versions=newest_first,
    supports_incremental=True,
)

FAMILIES: Final[dict[str, CatalogFamily]] = {family.name: family for family in (GEMS, MODULES)}


def get_family(name: str) -> CatalogFamily:
    try:
        return FAMILIES[name]
    except KeyError:
        known = ", ".join(sorted(FAMILIES))
        raise ValueError(f"Unknown package family {name!r} (expected one of: {known})") from None
