"""Public interface for the Puppet Forge adapter."""

from __future__ import annotations

from .client import ForgeAPIError, ForgeFetcher
from .schema import ForgeModule, ForgeModulePage, ForgeRelease, ForgeReleasePage

__all__ = [
    "ForgeAPIError",
    "ForgeFetcher",
    "ForgeModule",
    "ForgeModulePage",
    "ForgeRelease",
    "ForgeReleasePage",
]
