"""Product catalog and shopping cart core for the Shoppable app."""

from .model import CartEntry, Product, ProductCollection

__all__ = ["CartEntry", "Product", "ProductCollection"]
