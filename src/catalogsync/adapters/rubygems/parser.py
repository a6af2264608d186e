"""Parser for the RubyGems compact index ``/versions`` file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.families import GEMS
from catalogsync.domain.model import VersionRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

HEADER_SEPARATOR = "---"
YANK_PREFIX = "-"


class RubyGemsIndexError(RuntimeError):
    """Raised when the compact index payload cannot be understood."""


def is_prerelease(version: str) -> bool:
    """RubyGems treats any version containing a letter as a prerelease."""

    return any(char.isalpha() for char in version)


def split_platform(token: str) -> tuple[str, str]:
    version, _, platform = token.partition("-")
    return version, platform or GEMS.canonical_platform


def parse_versions_index(
    lines: Iterable[str],
    *,
    include_prerelease: bool = False,
) -> dict[str, list[VersionRecord]]:
    """Fold the append-only index into the currently published records per gem.

    Each body line reads ``name v1,v2-platform,-v3 checksum``. A gem can appear on
    several lines; later lines add builds and a leading ``-`` yanks a build that an
    earlier line published. Gems left without any build are omitted.
    """

    builds: dict[str, dict[tuple[str, str], VersionRecord]] = {}
    in_body = False
    for lineno, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not in_body:
            in_body = line == HEADER_SEPARATOR
            continue
        if not line:
            continue

        parts = line.split(" ")
        if len(parts) < 2:
            raise RubyGemsIndexError(f"Malformed index line {lineno}: {line!r}")
        name, version_list = parts[0], parts[1]
        published = builds.setdefault(name, {})

        for token in version_list.split(","):
            yanked = token.startswith(YANK_PREFIX)
            version, platform = split_platform(token.removeprefix(YANK_PREFIX))
            if not version:
                raise RubyGemsIndexError(f"Empty version on index line {lineno}: {line!r}")
            if yanked:
                published.pop((version, platform), None)
                continue
            if not include_prerelease and is_prerelease(version):
                continue
            published.setdefault(
                (version, platform),
                VersionRecord(name=name, version=version, platform=platform),
            )

    if not in_body:
        raise RubyGemsIndexError("Compact index payload has no header separator")

    return {name: list(records.values()) for name, records in builds.items() if records}
