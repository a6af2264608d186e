"""SQLAlchemy table metadata for the catalog mirror."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from sqlalchemy import Column, Dialect, MetaData, String, Table, Text, TypeDecorator

from catalogsync.domain.families import FAMILIES

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from catalogsync.domain.families import CatalogFamily
    from catalogsync.domain.model import VersionList

log = logging.getLogger(__name__)


class VersionListType(TypeDecorator[tuple[str, ...]]):
    """Stores a version list as a single space separated string."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: VersionList | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        for version in value:
            if not version or any(char.isspace() for char in version):
                raise ValueError(f"Version strings must be non-empty without spaces: {version!r}")
        return " ".join(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> VersionList:
        _ = dialect
        if not value:
            return ()
        return tuple(value.split(" "))


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "pk": "pk_%(table_name)s",
    }
)


def _mirror_table(table_name: str) -> Table:
    return Table(
        table_name,
        metadata,
        Column("name", String, primary_key=True),
        Column("versions", VersionListType, nullable=False),
    )


MIRROR_TABLES: Final[dict[str, Table]] = {
    name: _mirror_table(f"remote_{name}") for name in sorted(FAMILIES)
}


def mirror_table(family: CatalogFamily) -> Table:
    return MIRROR_TABLES[family.name]


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mirror metadata."""

    log.info("Creating mirror tables")
    metadata.create_all(engine)
