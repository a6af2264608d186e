"""Public interface for the RubyGems adapter."""

from __future__ import annotations

from .client import RubyGemsFetcher
from .parser import RubyGemsIndexError, is_prerelease, parse_versions_index

__all__ = [
    "RubyGemsFetcher",
    "RubyGemsIndexError",
    "is_prerelease",
    "parse_versions_index",
]
