from __future__ import annotations

import json
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from catalogsync.adapters.cache import (
    CompositeCacheInvalidator,
    FileSystemCacheInvalidator,
    HttpPurgeCacheInvalidator,
    NullCacheInvalidator,
    build_cache_invalidator,
)
from catalogsync.config.cache import CacheConfig, PurgeConfig
from catalogsync.config.http_resilience import ResilienceConfig
from catalogsync.domain.families import GEMS
from tests.helpers.http import RecordingHandler, mock_client_factory
from tests.helpers.mirror import RecordingInvalidator

if TYPE_CHECKING:
    from catalogsync.adapters.http_resilience import ResilientClient


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<html></html>")
    return path


def test_filesystem_invalidator_removes_pages_for_keys(tmp_path: Path) -> None:
    index = _touch(tmp_path, "gems.html")
    shard = _touch(tmp_path, "gems/~r/index.html")
    page = _touch(tmp_path, "gems/rails.html")
    version_page = _touch(tmp_path, "gems/rails/7.1.0/index.html")
    other = _touch(tmp_path, "gems/rack.html")

    FileSystemCacheInvalidator(tmp_path).invalidate(GEMS.cache_keys("rails"))

    assert not index.exists()
    assert not shard.exists()
    assert not page.exists()
    assert version_page.exists()
    assert other.exists()


def test_filesystem_invalidator_ignores_missing_pages(tmp_path: Path) -> None:
    FileSystemCacheInvalidator(tmp_path).invalidate(frozenset({"/gems/never-cached"}))


@pytest.mark.parametrize("key", ["/", "", "/gems/../etc"])
def test_filesystem_invalidator_rejects_unsafe_keys(tmp_path: Path, key: str) -> None:
    with pytest.raises(ValueError, match="Refusing"):
        FileSystemCacheInvalidator(tmp_path).paths_for(key)


def _purge_config(token: str | None = "secret") -> PurgeConfig:
    return PurgeConfig(
        purge_url="https://cdn.test/purge",
        public_url="https://docs.test",
        token=token,
        resilience=ResilienceConfig(name="cache-purge"),
    )


def test_purge_invalidator_posts_public_urls() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(200, json={"ok": True}))
    invalidator = HttpPurgeCacheInvalidator(
        _purge_config(), client_factory=mock_client_factory(handler)
    )

    with closing(invalidator):
        invalidator.invalidate(GEMS.cache_keys("rails"))

    (request,) = handler.requests
    assert request.method == "POST"
    assert str(request.url) == "https://cdn.test/purge"
    assert request.headers["Authorization"] == "Bearer secret"
    assert json.loads(request.content) == {
        "files": [
            "https://docs.test/gems",
            "https://docs.test/gems/rails",
            "https://docs.test/gems/~r",
        ]
    }


def test_purge_invalidator_omits_auth_without_token() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(204))
    invalidator = HttpPurgeCacheInvalidator(
        _purge_config(token=None), client_factory=mock_client_factory(handler)
    )

    with closing(invalidator):
        invalidator.invalidate(frozenset({"/gems"}))

    assert "Authorization" not in handler.requests[0].headers


def test_purge_invalidator_raises_on_rejected_purge() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(403))
    invalidator = HttpPurgeCacheInvalidator(
        _purge_config(), client_factory=mock_client_factory(handler)
    )

    with closing(invalidator), pytest.raises(httpx.HTTPStatusError):
        invalidator.invalidate(frozenset({"/gems"}))



def test_purge_invalidator_reuses_one_client_until_closed() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(200))
    build_client = mock_client_factory(handler)
    created: list[ResilientClient] = []

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = build_client(resilience)
        created.append(client)
        return client

    invalidator = HttpPurgeCacheInvalidator(_purge_config(), client_factory=factory)

    for name in ("rack", "rails", "rake"):
        invalidator.invalidate(GEMS.cache_keys(name))
    invalidator.close()
    invalidator.invalidate(GEMS.cache_keys("json"))
    invalidator.close()

    assert len(handler.requests) == 4
    assert len(created) == 2

def test_composite_tries_every_invalidator_before_raising() -> None:
    failing = RecordingInvalidator(fail_for={"/gems"})
    healthy = RecordingInvalidator()
    composite = CompositeCacheInvalidator([failing, healthy])

    with pytest.raises(ConnectionError):
        composite.invalidate(frozenset({"/gems"}))

    assert healthy.calls == [frozenset({"/gems"})]


def test_composite_closes_every_invalidator() -> None:
    first = RecordingInvalidator()
    second = RecordingInvalidator()

    CompositeCacheInvalidator([first, second]).close()

    assert first.closed is True
    assert second.closed is True


def test_build_cache_invalidator_selects_configured_caches(tmp_path: Path) -> None:
    assert isinstance(build_cache_invalidator(CacheConfig()), NullCacheInvalidator)
    assert isinstance(
        build_cache_invalidator(CacheConfig(cache_dir=tmp_path)), FileSystemCacheInvalidator
    )
    assert isinstance(
        build_cache_invalidator(CacheConfig(purge=_purge_config())), HttpPurgeCacheInvalidator
    )

    composite = build_cache_invalidator(CacheConfig(cache_dir=tmp_path, purge=_purge_config()))
    assert isinstance(composite, CompositeCacheInvalidator)
    assert [type(item) for item in composite.invalidators] == [
        FileSystemCacheInvalidator,
        HttpPurgeCacheInvalidator,
    ]
