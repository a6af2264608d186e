"""HTTP fetcher for the RubyGems compact index."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.http_resilience import default_client_factory
from catalogsync.config.rubygems import RubyGemsConfig, get_rubygems_config

from .parser import parse_versions_index

if TYPE_CHECKING:
    from catalogsync.adapters.http_resilience import ClientFactory
    from catalogsync.domain.model import VersionRecord

log = getLogger(__name__)

VERSIONS_PATH = "/versions"


@dataclass(slots=True)
class RubyGemsFetcher:
    """Fetch every released gem build listed by the compact index."""

    config: RubyGemsConfig = field(default_factory=get_rubygems_config)
    client_factory: ClientFactory = field(default=default_client_factory)

    def fetch_all(self) -> dict[str, list[VersionRecord]]:
        return asyncio.run(self._fetch_all_async())

    async def _fetch_all_async(self) -> dict[str, list[VersionRecord]]:
        async with self.client_factory(self.config.resilience) as client:
            response = await client.get(VERSIONS_PATH)
            response.raise_for_status()
            body = response.text

        catalog = parse_versions_index(
            body.splitlines(),
            include_prerelease=self.config.include_prerelease,
        )
        log.info("Fetched %s gems from the RubyGems compact index", len(catalog))
        return catalog


if TYPE_CHECKING:
    from catalogsync.domain.ports.fetching import CatalogFetcher

    _fetcher_check: CatalogFetcher = RubyGemsFetcher()
