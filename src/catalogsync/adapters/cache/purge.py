"""Invalidate pages held by an HTTP cache or CDN through its purge endpoint."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.http_resilience import default_client_factory

if TYPE_CHECKING:
    from catalogsync.adapters.http_resilience import ClientFactory, ResilientClient
    from catalogsync.config.cache import PurgeConfig

log = getLogger(__name__)


class HttpPurgeCacheInvalidator:
    """POST ``{"files": [url, ...]}`` for the public URLs behind each key.

    One event loop and one HTTP client serve every ``invalidate`` call until
    ``close`` is called, so a pass touching many names reuses the same connection.
    """

    def __init__(
        self,
        config: PurgeConfig,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.config = config
        self._client_factory = client_factory or default_client_factory
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def invalidate(self, keys: frozenset[str]) -> None:
        if self._runner is None:
            self._runner = asyncio.Runner()
        self._runner.run(self._purge(sorted(keys)))

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._runner.close()
            self._runner = None
            self._client = None

    async def _purge(self, keys: list[str]) -> None:
        if self._client is None:
            self._client = self._client_factory(self.config.resilience)
        files = [f"{self.config.public_url}{key}" for key in keys]
        headers = {"Authorization": f"Bearer {self.config.token}"} if self.config.token else None
        response = await self._client.post(
            self.config.purge_url,
            json={"files": files},
            headers=headers,
        )
        response.raise_for_status()
        log.debug("Purged %s cached URLs", len(files))
