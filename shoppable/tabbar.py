"""Composition of the two-tab shop screen: collections overview and cart."""

import logging
from typing import Any, Sequence

from pydantic import BaseModel

from .cart.badge import CartBadgePresenter
from .cart.store import CartStore
from .catalog.loader import CatalogLoader, index_products
from .config import ShoppableSettings
from .model import CartEntry, Product, ProductCollection, cart_entry_product_id
from .storage import get_settings_store

logger = logging.getLogger(__name__)

COLLECTIONS_TAB_TITLE = "Collections"
CART_TAB_TITLE = "Cart"


class TabItem(BaseModel):
    title: str
    badge_value: str | None = None


class TabBarState(BaseModel):
    """Read-only view of the tab bar handed to the UI."""

    tabs: list[TabItem]
    current_tab_index: int
    badge_value: str | None
    cart_count: int
    cart_entries: list[dict[str, Any]]
    product_collections: list[ProductCollection]


class ProductOverviewScreen:
    """Root screen of the collections tab."""

    def __init__(self, product_collections: Sequence[ProductCollection]):
        self.product_collections = tuple(product_collections)
        self.prefers_large_titles = True


class CartScreen:
    """Root screen of the cart tab."""

    def __init__(
        self,
        cart_store: CartStore,
        product_collections: Sequence[ProductCollection],
    ):
        self.cart_store = cart_store
        self.product_collections = tuple(product_collections)
        self._products = index_products(self.product_collections)

    @property
    def entries(self) -> list[CartEntry]:
        return self.cart_store.current_entries()

    def items(self) -> list[tuple[CartEntry, Product | None]]:
        """Pair each cart entry with its catalog product (None when unknown)."""
        items = []
        for entry in self.cart_store.current_entries():
            product_id = cart_entry_product_id(entry)
            items.append((entry, self._products.get(product_id) if product_id else None))
        return items


class TabBar:
    """Loads the shared data once and hands it to both child screens."""

    def __init__(
        self,
        catalog_loader: CatalogLoader,
        cart_store: CartStore,
        badge_presenter: CartBadgePresenter | None = None,
        catalog_resource: str = "products",
    ):
        self.catalog_loader = catalog_loader
        self.cart_store = cart_store
        self.badge_presenter = badge_presenter or CartBadgePresenter()
        self.catalog_resource = catalog_resource

        self.current_tab_index = 0
        self.tabs: list[TabItem] = []
        self.product_collections: list[ProductCollection] = []
        self.items_in_cart_count = 0
        self.overview_screen: ProductOverviewScreen | None = None
        self.cart_screen: CartScreen | None = None

    @classmethod
    def from_settings(cls, settings: ShoppableSettings) -> "TabBar":
        """Wire a tab bar with the configured catalog and the process-wide settings store."""
        return cls(
            catalog_loader=CatalogLoader(settings.catalog_dir, strict=settings.strict_catalog),
            cart_store=CartStore(get_settings_store(settings), key=settings.cart_key),
            catalog_resource=settings.catalog_resource,
        )

    def setup(self) -> None:
        self.product_collections = self.catalog_loader.load(self.catalog_resource)
        self.cart_store.load_from_persistence()

        self.overview_screen = ProductOverviewScreen(self.product_collections)
        self.cart_screen = CartScreen(self.cart_store, self.product_collections)

        self.tabs = [
            TabItem(title=COLLECTIONS_TAB_TITLE),
            TabItem(title=CART_TAB_TITLE),
        ]
        self.refresh_cart_badge()

        logger.info(
            f"Tab bar ready: {len(self.product_collections)} collections, "
            f"{self.items_in_cart_count} items in cart"
        )

    def update_cart_badge(self, count: int) -> None:
        """Set the badge on the cart tab (the last tab)."""
        if not self.tabs:
            raise RuntimeError("Tab bar not set up. Call setup() first.")
        self.items_in_cart_count = count
        self.tabs[-1] = self.tabs[-1].model_copy(
            update={"badge_value": self.badge_presenter.badge_value(count)}
        )

    def refresh_cart_badge(self) -> None:
        """Recompute the cart badge after the cart entries changed."""
        self.update_cart_badge(self.cart_store.count())

    def select_tab(self, index: int) -> None:
        if not 0 <= index < len(self.tabs):
            raise IndexError(f"No tab at index {index}")
        self.current_tab_index = index

    def snapshot(self) -> TabBarState:
        return TabBarState(
            tabs=list(self.tabs),
            current_tab_index=self.current_tab_index,
            badge_value=self.tabs[-1].badge_value if self.tabs else None,
            cart_count=self.cart_store.count(),
            cart_entries=self.cart_store.current_entries(),
            product_collections=list(self.product_collections),
        )
