"""SQLAlchemy adapter package for the catalog mirror."""

from __future__ import annotations

from .mappings import MIRROR_TABLES, VersionListType, create_all_tables, metadata, mirror_table
from .repositories import SqlAlchemyMirrorStore
from .unit_of_work import (
    SqlAlchemyMirrorUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "MIRROR_TABLES",
    "SqlAlchemyMirrorStore",
    "SqlAlchemyMirrorUnitOfWork",
    "StartupError",
    "VersionListType",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "mirror_table",
    "shutdown",
    "startup",
]
