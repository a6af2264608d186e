"""HTTP fetchers for the Puppet Forge v3 API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from catalogsync.adapters.http_resilience import default_client_factory
from catalogsync.config.forge import ForgeConfig, get_forge_config
from catalogsync.domain.families import MODULES
from catalogsync.domain.model import ReleaseRef, VersionRecord

from .schema import ForgeErrorResponse, ForgeModule, ForgeModulePage, ForgeReleasePage

if TYPE_CHECKING:
    from collections.abc import Iterator

    from catalogsync.adapters.http_resilience import ClientFactory, ResilientClient

log = getLogger(__name__)

MODULES_PATH = "/v3/modules"
RELEASES_PATH = "/v3/releases"


class ForgeAPIError(RuntimeError):
    """Raised when the Forge API returns an unexpected or inconsistent response."""


async def _get_page[TPage: BaseModel](
    client: ResilientClient,
    url: str,
    page_type: type[TPage],
    *,
    params: dict[str, str | int] | None = None,
) -> TPage:
    response = await client.get(url, params=params)
    if response.is_error:
        _raise_for_error(response)

    try:
        return page_type.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise ForgeAPIError(f"Unexpected Forge response payload from {url}") from exc


def _raise_for_error(response: httpx.Response) -> None:
    try:
        error = ForgeErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        response.raise_for_status()
        return
    log.error("Forge API error %s: %s", response.status_code, error.message)
    raise ForgeAPIError(f"Forge API error {response.status_code}: {error.message}")


def _module_records(module: ForgeModule) -> list[VersionRecord]:
    return [
        VersionRecord(
            name=module.slug,
            version=release.version,
            platform=MODULES.canonical_platform,
        )
        for release in module.releases
        if release.deleted_at is None
    ]


@dataclass(slots=True)
class ForgeFetcher:
    """Read module catalog data from the Forge.

    ``fetch_all`` downloads every module page concurrently (bounded by the client's
    rate limit) and fails if the catalog moved while paging. Use
    ``stream_releases_newest_first`` for the incremental path.
    """

    config: ForgeConfig = field(default_factory=get_forge_config)
    client_factory: ClientFactory = field(default=default_client_factory)

    def fetch_all(self) -> dict[str, list[VersionRecord]]:
        return asyncio.run(self._fetch_all_async())

    def stream_releases_newest_first(self) -> Iterator[ReleaseRef]:
        with asyncio.Runner() as runner:
            client = self.client_factory(self.config.resilience)
            try:
                url: str | None = RELEASES_PATH
                params: dict[str, str | int] | None = {
                    "sort_by": "release_date",
                    "limit": self.config.page_size,
                }
                while url is not None:
                    page = runner.run(_get_page(client, url, ForgeReleasePage, params=params))
                    for release in page.results:
                        if release.deleted_at is not None:
                            continue
                        yield ReleaseRef(name=release.module.slug, version=release.version)
                    url = page.pagination.next
                    params = None
            finally:
                runner.run(client.aclose())

    async def _fetch_all_async(self) -> dict[str, list[VersionRecord]]:
        limit = self.config.page_size
        async with self.client_factory(self.config.resilience) as client:
            first = await _get_page(client, MODULES_PATH, ForgeModulePage, params=self._params(0))
            total = first.pagination.total
            rest = await asyncio.gather(
                *(
                    _get_page(client, MODULES_PATH, ForgeModulePage, params=self._params(offset))
                    for offset in range(limit, total, limit)
                )
            )

        catalog: dict[str, list[VersionRecord]] = {}
        for page in (first, *rest):
            for module in page.results:
                if module.slug in catalog:
                    continue
                catalog[module.slug] = _module_records(module)

        if len(catalog) < total:
            raise ForgeAPIError(
                f"Forge catalog changed while paging: expected {total} modules, got {len(catalog)}"
            )
        log.info("Fetched %s modules from the Forge", len(catalog))
        return catalog

    def _params(self, offset: int) -> dict[str, str | int]:
        return {
            "sort_by": "latest_release",
            "limit": self.config.page_size,
            "offset": offset,
        }


if TYPE_CHECKING:
    from catalogsync.domain.ports.fetching import CatalogFetcher, ReleaseStreamFetcher

    _catalog_check: CatalogFetcher = ForgeFetcher()
    _stream_check: ReleaseStreamFetcher = ForgeFetcher()
