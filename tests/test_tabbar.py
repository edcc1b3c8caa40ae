"""Tests for the tab bar composition."""

import json
from unittest.mock import Mock

import pytest

from shoppable.cart import CartBadgePresenter, CartStore, DEFAULT_CART_KEY
from shoppable.catalog import CatalogLoader, CatalogLoadError
from shoppable.config import ShoppableSettings
from shoppable.storage import MemorySettingsStore, get_settings_store
from shoppable.tabbar import CartScreen, ProductOverviewScreen, TabBar, TabBarState


class TestTabBar:
    """Test cases for TabBar."""

    @pytest.fixture
    def catalog_dir(self, tmp_path):
        (tmp_path / "products.json").write_text(
            json.dumps(
                [
                    {
                        "name": "Shoes",
                        "products": [
                            {"id": "p1", "name": "Sneaker", "price": 49.99},
                            {"id": "p2", "name": "Boot", "price": 99.0},
                        ],
                    },
                    {"name": "Bags", "products": [{"id": "p10", "name": "Tote"}]},
                ]
            )
        )
        return tmp_path

    @pytest.fixture
    def settings_store(self):
        return MemorySettingsStore(
            {DEFAULT_CART_KEY: [{"id": "p1"}, {"id": "p1"}, {"id": "gone"}]}
        )

    @pytest.fixture
    def tab_bar(self, catalog_dir, settings_store):
        return TabBar(CatalogLoader(catalog_dir), CartStore(settings_store))

    def test_init(self, tab_bar):
        """Test that nothing is loaded before setup."""
        assert tab_bar.current_tab_index == 0
        assert tab_bar.tabs == []
        assert tab_bar.product_collections == []
        assert tab_bar.overview_screen is None
        assert tab_bar.cart_screen is None
        assert isinstance(tab_bar.badge_presenter, CartBadgePresenter)

    def test_setup_tabs(self, tab_bar):
        tab_bar.setup()

        assert [tab.title for tab in tab_bar.tabs] == ["Collections", "Cart"]
        assert tab_bar.tabs[0].badge_value is None
        assert tab_bar.tabs[1].badge_value == "3"
        assert tab_bar.items_in_cart_count == 3

    def test_setup_injects_screens(self, tab_bar):
        """Test that both child screens receive the shared data."""
        tab_bar.setup()

        assert isinstance(tab_bar.overview_screen, ProductOverviewScreen)
        assert tab_bar.overview_screen.prefers_large_titles is True
        assert [c.name for c in tab_bar.overview_screen.product_collections] == [
            "Shoes",
            "Bags",
        ]

        assert isinstance(tab_bar.cart_screen, CartScreen)
        assert tab_bar.cart_screen.cart_store is tab_bar.cart_store
        assert tab_bar.cart_screen.product_collections == tab_bar.overview_screen.product_collections

    def test_setup_loads_each_source_once(self, settings_store):
        catalog_loader = Mock()
        catalog_loader.load.return_value = []
        cart_store = CartStore(settings_store)
        cart_store.load_from_persistence = Mock(return_value=[])

        tab_bar = TabBar(catalog_loader, cart_store, catalog_resource="spring")
        tab_bar.setup()

        catalog_loader.load.assert_called_once_with("spring")
        cart_store.load_from_persistence.assert_called_once_with()

    def test_empty_cart_hides_badge(self, catalog_dir):
        tab_bar = TabBar(CatalogLoader(catalog_dir), CartStore(MemorySettingsStore()))
        tab_bar.setup()

        assert tab_bar.tabs[1].badge_value is None

    def test_missing_catalog_falls_back_to_empty(self, tmp_path, settings_store):
        loader = CatalogLoader(tmp_path)
        tab_bar = TabBar(loader, CartStore(settings_store))

        tab_bar.setup()

        assert tab_bar.product_collections == []
        assert isinstance(loader.last_error, CatalogLoadError)
        assert tab_bar.tabs[1].badge_value == "3"

    def test_strict_catalog_propagates(self, tmp_path, settings_store):
        tab_bar = TabBar(CatalogLoader(tmp_path, strict=True), CartStore(settings_store))

        with pytest.raises(CatalogLoadError):
            tab_bar.setup()

    def test_update_cart_badge(self, tab_bar):
        tab_bar.setup()

        tab_bar.update_cart_badge(7)
        assert tab_bar.tabs[1].badge_value == "7"

        tab_bar.update_cart_badge(0)
        assert tab_bar.tabs[1].badge_value is None
        assert tab_bar.tabs[0].badge_value is None

    def test_update_cart_badge_before_setup(self, tab_bar):
        with pytest.raises(RuntimeError):
            tab_bar.update_cart_badge(1)

    def test_refresh_cart_badge_after_save(self, tab_bar):
        """Test that the badge follows the cart once the UI re-queries."""
        tab_bar.setup()

        tab_bar.cart_store.save_to_persistence(entries=[{"id": "p2"}])
        assert tab_bar.tabs[1].badge_value == "3"

        tab_bar.refresh_cart_badge()
        assert tab_bar.tabs[1].badge_value == "1"

    def test_select_tab(self, tab_bar):
        tab_bar.setup()

        tab_bar.select_tab(1)
        assert tab_bar.current_tab_index == 1

        with pytest.raises(IndexError):
            tab_bar.select_tab(2)
        assert tab_bar.current_tab_index == 1

    def test_snapshot(self, tab_bar):
        tab_bar.setup()

        state = tab_bar.snapshot()

        assert isinstance(state, TabBarState)
        assert state.badge_value == "3"
        assert state.cart_count == 3
        assert state.cart_entries == [{"id": "p1"}, {"id": "p1"}, {"id": "gone"}]
        assert [c.name for c in state.product_collections] == ["Shoes", "Bags"]
        assert state.current_tab_index == 0

    def test_snapshot_serializes(self, tab_bar):
        tab_bar.setup()

        data = json.loads(tab_bar.snapshot().model_dump_json())

        assert data["tabs"] == [
            {"title": "Collections", "badge_value": None},
            {"title": "Cart", "badge_value": "3"},
        ]
        assert data["product_collections"][0]["products"][0]["id"] == "p1"

    def test_from_settings(self, catalog_dir):
        settings = ShoppableSettings(
            catalog_dir=str(catalog_dir),
            strict_catalog=True,
            cart_key="cart",
            store_backend="memory",
        )

        tab_bar = TabBar.from_settings(settings)

        assert tab_bar.catalog_loader.resource_dir == catalog_dir
        assert tab_bar.catalog_loader.strict is True
        assert tab_bar.cart_store.key == "cart"
        assert tab_bar.cart_store.store is get_settings_store()
        assert tab_bar.catalog_resource == "products"


class TestCartScreen:
    """Test cases for CartScreen."""

    def test_items_resolve_products(self):
        collections = CatalogLoader().load("products")
        cart_store = CartStore(MemorySettingsStore())
        cart_store.save_to_persistence(
            entries=[{"id": "p1"}, {"id": "unknown"}, {"size": 42}]
        )

        screen = CartScreen(cart_store, collections)
        items = screen.items()

        assert [entry for entry, _ in items] == screen.entries
        assert items[0][1].name == "Sneaker"
        assert items[1][1] is None
        assert items[2][1] is None
