"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from catalogsync.domain.model import MirrorRow

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from catalogsync.domain.model import Catalog, VersionList


class SqlAlchemyMirrorStore:
    """Mirror rows of one package family, read and written through ``session``."""

    def __init__(self, session: Session, table: Table) -> None:
        self.session = session
        self.table = table

    def get_all(self) -> Catalog:
        stmt = select(self.table.c.name, self.table.c.versions).order_by(self.table.c.name)
        return {name: versions for name, versions in self.session.execute(stmt)}

    def get(self, name: str) -> VersionList | None:
        stmt = select(self.table.c.versions).where(self.table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def set(self, name: str, versions: VersionList) -> None:
        row = MirrorRow(name=name, versions=tuple(versions))
        stmt = (
            update(self.table)
            .where(self.table.c.name == row.name)
            .values(versions=row.versions)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            self.session.execute(insert(self.table).values(name=row.name, versions=row.versions))

    def delete(self, name: str) -> None:
        self.session.execute(delete(self.table).where(self.table.c.name == name))


if TYPE_CHECKING:
    from typing import cast

    from catalogsync.adapters.sqlalchemy.mappings import MIRROR_TABLES
    from catalogsync.domain.ports.persistence import MirrorStore

    _session_stub = cast("Session", object())
    _store_check: MirrorStore = SqlAlchemyMirrorStore(_session_stub, MIRROR_TABLES["gems"])
