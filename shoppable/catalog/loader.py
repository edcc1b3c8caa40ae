"""Load the bundled product catalog."""

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from ..model import Product, ProductCollection

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(list[ProductCollection])


class CatalogLoadError(Exception):
    """The catalog resource is missing or malformed."""

    def __init__(self, resource_name: str, reason: str):
        super().__init__(f"Could not load catalog '{resource_name}': {reason}")
        self.resource_name = resource_name
        self.reason = reason


class CatalogLoader:
    """Parses a named JSON resource into product collections.

    Resources are looked up as ``<resource_dir>/<name>.json``. Without a
    resource directory the catalog bundled with this package is used.

    By default a failed load is logged, recorded in ``last_error`` and
    yields an empty catalog. With ``strict=True`` the ``CatalogLoadError``
    is raised instead.
    """

    resource_dir: Path | None
    strict: bool
    last_error: CatalogLoadError | None

    def __init__(self, resource_dir: str | Path | None = None, strict: bool = False):
        self.resource_dir = Path(resource_dir) if resource_dir is not None else None
        self.strict = strict
        self.last_error = None

    def load(self, resource_name: str) -> list[ProductCollection]:
        """Load the named catalog resource."""
        try:
            collections = self._parse(resource_name, self._read(resource_name))
        except CatalogLoadError as e:
            self.last_error = e
            if self.strict:
                raise
            logger.error(f"{e}; using an empty catalog")
            return []

        self.last_error = None
        logger.info(
            f"Loaded {len(collections)} collections "
            f"({sum(len(c.products) for c in collections)} products) "
            f"from catalog '{resource_name}'"
        )
        return collections

    def _read(self, resource_name: str) -> bytes:
        """Read the raw bytes of a catalog resource."""
        filename = f"{resource_name}.json"
        try:
            if self.resource_dir is not None:
                return (self.resource_dir / filename).read_bytes()
            return (resources.files(__package__) / "data" / filename).read_bytes()
        except FileNotFoundError as e:
            raise CatalogLoadError(resource_name, "resource not found") from e
        except OSError as e:
            raise CatalogLoadError(resource_name, f"resource unreadable: {e}") from e

    def _parse(self, resource_name: str, data: bytes) -> list[ProductCollection]:
        try:
            return _CATALOG_ADAPTER.validate_json(data)
        except ValidationError as e:
            raise CatalogLoadError(
                resource_name, f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}"
            ) from e


def index_products(collections: Iterable[ProductCollection]) -> dict[str, Product]:
    """Map product identifiers to products. The first occurrence of an id wins."""
    index: dict[str, Product] = {}
    for collection in collections:
        for product in collection.products:
            index.setdefault(product.id, product)
    return index
