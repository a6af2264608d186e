"""Helpers for exercising HTTP adapters against ``httpx.MockTransport``."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import httpx

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.config.http_resilience import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogsync.adapters.http_resilience import ClientFactory
    from catalogsync.config.http_resilience import ResilienceConfig


class RecordingHandler:
    """Route requests by path and remember every request seen."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def mock_client_factory(handler: Callable[[httpx.Request], httpx.Response]) -> ClientFactory:
    """Build clients without rate limiting or retries that answer from ``handler``."""

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        config = replace(resilience, ratelimit=None, retry=RetryPolicy(total=0))
        return ResilientClient(config, transport=httpx.MockTransport(handler))

    return factory
