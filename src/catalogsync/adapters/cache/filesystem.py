"""Invalidate pages rendered into a static cache directory."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

PAGE_SUFFIX = ".html"
INDEX_PAGE = "index.html"


class FileSystemCacheInvalidator:
    """Delete the cached page files behind each key.

    Key ``/gems/rails`` maps to ``<root>/gems/rails.html`` and
    ``<root>/gems/rails/index.html``; nested version pages are left alone.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def invalidate(self, keys: frozenset[str]) -> None:
        for key in sorted(keys):
            for path in self.paths_for(key):
                try:
                    path.unlink()
                except FileNotFoundError:
                    continue
                log.debug("Removed cached page %s", path)

    def close(self) -> None:
        pass

    def paths_for(self, key: str) -> tuple[Path, ...]:
        relative = key.strip("/")
        if not relative or ".." in relative.split("/"):
            raise ValueError(f"Refusing to invalidate cache key {key!r}")
        base = self.root / relative
        return (base.with_name(base.name + PAGE_SUFFIX), base / INDEX_PAGE)
