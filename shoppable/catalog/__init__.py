from .loader import CatalogLoader, CatalogLoadError, index_products

__all__ = ["CatalogLoader", "CatalogLoadError", "index_products"]
