from __future__ import annotations

import httpx
import pytest

from catalogsync.adapters.rubygems import RubyGemsFetcher
from catalogsync.config.http_resilience import ResilienceConfig
from catalogsync.config.rubygems import RubyGemsConfig
from tests.helpers.http import RecordingHandler, mock_client_factory

INDEX = "created_at: 2024-04-01T00:00:05Z\n---\nrack 2.2.8,3.0.0 aa\nnokogiri 1.15.0-java bb\n"


def _config(*, include_prerelease: bool = False) -> RubyGemsConfig:
    return RubyGemsConfig(
        resilience=ResilienceConfig(name="rubygems", base_url="https://rubygems.test"),
        include_prerelease=include_prerelease,
    )


def test_fetch_all_reads_versions_file() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(200, text=INDEX))
    fetcher = RubyGemsFetcher(config=_config(), client_factory=mock_client_factory(handler))

    catalog = fetcher.fetch_all()

    assert [request.url.path for request in handler.requests] == ["/versions"]
    assert [record.version for record in catalog["rack"]] == ["2.2.8", "3.0.0"]
    assert [record.platform for record in catalog["nokogiri"]] == ["java"]


def test_fetch_all_raises_for_http_errors() -> None:
    handler = RecordingHandler(lambda request: httpx.Response(503, text="unavailable"))
    fetcher = RubyGemsFetcher(config=_config(), client_factory=mock_client_factory(handler))

    with pytest.raises(httpx.HTTPStatusError):
        fetcher.fetch_all()
