from __future__ import annotations

import pytest

from catalogsync.domain.families import FAMILIES, GEMS, MODULES, get_family
from tests.helpers.mirror import build


def test_cache_keys_cover_index_shard_and_entity() -> None:
    assert GEMS.cache_keys("rails") == frozenset({"/gems", "/gems/~r", "/gems/rails"})
    assert MODULES.cache_keys("puppetlabs-apt") == frozenset(
        {"/modules", "/modules/~p", "/modules/puppetlabs-apt"}
    )


def test_canonical_catalog_picks_and_orders_per_family() -> None:
    fetched = {
        "puppetlabs-apt": build("puppetlabs-apt", "9.0.0", "10.1.0", platform="puppet"),
        "empty": [],
    }

    catalog = MODULES.canonical_catalog(fetched)

    assert catalog == {"puppetlabs-apt": ("10.1.0", "9.0.0")}


def test_gem_catalog_keeps_upstream_order() -> None:
    fetched = {"rack": build("rack", "2.0", ("2.0", "java"), "1.0")}

    assert GEMS.canonical_catalog(fetched) == {"rack": ("2.0", "1.0")}


def test_only_modules_support_incremental_sync() -> None:
    assert MODULES.supports_incremental is True
    assert GEMS.supports_incremental is False


def test_get_family() -> None:
    assert get_family("gems") is GEMS
    assert set(FAMILIES) == {"gems", "modules"}
    with pytest.raises(ValueError, match="Unknown package family"):
        get_family("eggs")
