"""Badge text for the cart tab."""

from typing import Protocol


class CountedCart(Protocol):
    def count(self) -> int: ...


class CartBadgePresenter:
    """Formats the cart item count for the cart tab's badge."""

    def badge_value(self, count: int) -> str | None:
        """Return the badge text, or None to hide the badge for an empty cart."""
        return str(int(count)) if count > 0 else None

    def badge_for(self, cart: CountedCart) -> str | None:
        return self.badge_value(cart.count())
