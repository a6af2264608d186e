"""Tests for the SQLAlchemy mirror store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text
from sqlalchemy.exc import StatementError

from catalogsync.adapters.sqlalchemy import SqlAlchemyMirrorStore, mirror_table
from catalogsync.domain.families import GEMS, MODULES

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_set_creates_and_overwrites_rows(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))

    store.set("rack", ("1.0",))
    store.set("rack", ("1.0", "1.1,java"))
    sqlite_session.commit()

    assert store.get("rack") == ("1.0", "1.1,java")
    assert store.get("missing") is None


def test_versions_are_stored_space_separated(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))

    store.set("nokogiri", ("1.15.0", "1.15.0,java"))
    sqlite_session.commit()

    raw = sqlite_session.execute(
        text("SELECT versions FROM remote_gems WHERE name = :name"), {"name": "nokogiri"}
    ).scalar_one()
    assert raw == "1.15.0 1.15.0,java"


def test_get_all_is_ordered_by_name(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))
    for name in ("zlib", "actionpack", "minitest"):
        store.set(name, ("1.0",))

    assert list(store.get_all()) == ["actionpack", "minitest", "zlib"]


def test_delete_removes_row(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))
    store.set("rack", ("1.0",))

    store.delete("rack")
    store.delete("never-existed")

    assert store.get_all() == {}


def test_families_use_separate_tables(sqlite_session: Session) -> None:
    gems = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))
    modules = SqlAlchemyMirrorStore(sqlite_session, mirror_table(MODULES))

    gems.set("json", ("2.7.1",))
    modules.set("puppetlabs-stdlib", ("9.0.0",))

    assert gems.get_all() == {"json": ("2.7.1",)}
    assert modules.get_all() == {"puppetlabs-stdlib": ("9.0.0",)}


def test_duplicate_versions_are_rejected(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))

    with pytest.raises(ValueError, match="Duplicate versions"):
        store.set("rack", ("1.0", "1.0"))


def test_versions_with_spaces_are_rejected(sqlite_session: Session) -> None:
    store = SqlAlchemyMirrorStore(sqlite_session, mirror_table(GEMS))

    with pytest.raises(StatementError, match="non-empty without spaces"):
        store.set("rack", ("1.0 beta",))
