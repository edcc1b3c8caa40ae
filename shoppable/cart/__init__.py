from .badge import CartBadgePresenter
from .store import CartEntryShapeError, CartStore, DEFAULT_CART_KEY

__all__ = ["CartBadgePresenter", "CartEntryShapeError", "CartStore", "DEFAULT_CART_KEY"]
