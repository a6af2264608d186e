from __future__ import annotations

from catalogsync.domain.incremental import apply_latest_releases
from tests.helpers.mirror import FakeMirrorStore, FakeReleaseStream


def test_stops_at_first_known_release() -> None:
    store = FakeMirrorStore({"a": ["1.0"]})
    stream = FakeReleaseStream([("a", "2.0"), ("a", "1.0"), ("b", "3.0")])

    changed = apply_latest_releases(stream.stream_releases_newest_first(), store)

    assert list(changed) == ["a"]
    assert changed["a"] == ("1.0",)
    assert store.rows == {"a": ("2.0", "1.0")}
    assert [release.name for release in stream.yielded] == ["a", "a"]
    assert stream.closed is True


def test_unknown_packages_get_a_new_row() -> None:
    store = FakeMirrorStore({"known": ["1.0.0"]})
    stream = FakeReleaseStream(
        [("fresh", "0.2.0"), ("other", "1.0.0"), ("known", "1.0.0"), ("older", "0.1.0")]
    )

    changed = apply_latest_releases(stream.stream_releases_newest_first(), store)

    assert list(changed) == ["fresh", "other"]
    assert changed["fresh"] == ()
    assert store.rows["fresh"] == ("0.2.0",)
    assert store.rows["other"] == ("1.0.0",)
    assert "older" not in store.rows


def test_never_deletes_rows() -> None:
    store = FakeMirrorStore({"a": ["1.0"], "b": ["1.0"]})
    stream = FakeReleaseStream([("a", "1.1")])

    apply_latest_releases(stream.stream_releases_newest_first(), store)

    assert set(store.rows) == {"a", "b"}
    assert all(op == "set" for op, _ in store.operations)


def test_empty_stream_changes_nothing() -> None:
    store = FakeMirrorStore({"a": ["1.0"]})

    assert apply_latest_releases(iter(()), store) == {}
    assert store.operations == []


def test_accepts_plain_iterables() -> None:
    store = FakeMirrorStore()
    stream = FakeReleaseStream([("a", "1.0")])

    changed = apply_latest_releases(list(stream.stream_releases_newest_first()), store)

    assert changed == {"a": ()}


def test_several_new_releases_of_one_package_stay_newest_first() -> None:
    store = FakeMirrorStore({"a": ["1.0"]})
    stream = FakeReleaseStream(
        [("a", "3.0"), ("b", "0.2"), ("a", "2.0"), ("b", "0.1"), ("a", "1.0")]
    )

    changed = apply_latest_releases(stream.stream_releases_newest_first(), store)

    assert changed == {"a": ("1.0",), "b": ()}
    assert store.rows == {"a": ("3.0", "2.0", "1.0"), "b": ("0.2", "0.1")}
