"""Shopping cart contents and their persistence."""

import copy
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..model import CartEntry, cart_entry_product_id
from ..protocol import SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "itemsInShoppingCartArray"

_ENTRIES_ADAPTER = TypeAdapter(list[dict[str, Any]])


class CartEntryShapeError(ValueError):
    """Cart entries are not a sequence of string-keyed mappings."""


class CartStore:
    """Owns the in-memory cart entries and reads/writes them to a settings store.

    Persistence is explicit: mutating the entries in memory does not save
    them, ``save_to_persistence`` does.
    """

    def __init__(self, store: SettingsStore, key: str = DEFAULT_CART_KEY):
        self.store = store
        self.key = key
        self._entries: list[CartEntry] = []

    def load_from_persistence(self, key: str | None = None) -> list[CartEntry]:
        """
        Load the entries stored under ``key`` and make them the current entries.

        A missing value, or a value that is not an array of string-keyed
        mappings, loads as an empty cart.
        """
        key = self.key if key is None else key
        value = self.store.get(key)

        if value is None:
            logger.debug(f"No cart stored under '{key}'")
            entries = []
        else:
            try:
                entries = _ENTRIES_ADAPTER.validate_python(value, strict=True)
            except ValidationError:
                logger.warning(
                    f"Ignoring cart stored under '{key}': expected an array of "
                    f"mappings, got {type(value).__name__}"
                )
                entries = []

        self._entries = entries
        logger.info(f"Loaded {len(entries)} cart entries from '{key}'")
        return self.current_entries()

    def current_entries(self) -> list[CartEntry]:
        """Return a snapshot of the current entries in insertion order."""
        return copy.deepcopy(self._entries)

    def count(self) -> int:
        """Number of entries. Entries sharing a product id are counted separately."""
        return len(self._entries)

    def product_ids(self) -> list[str | None]:
        return [cart_entry_product_id(entry) for entry in self._entries]

    def save_to_persistence(
        self,
        key: str | None = None,
        entries: Sequence[Mapping[str, Any]] | None = None,
    ) -> None:
        """Write ``entries`` (default: the current entries) under ``key``, replacing any prior value."""
        key = self.key if key is None else key
        if entries is None:
            entries = self._entries

        if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
            raise CartEntryShapeError(
                f"Cart entries must be a sequence of mappings, got {type(entries).__name__}"
            )

        normalized: list[CartEntry] = []
        for position, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise CartEntryShapeError(
                    f"Cart entry {position} is {type(entry).__name__}, expected a mapping"
                )
            if not all(isinstance(name, str) for name in entry):
                raise CartEntryShapeError(f"Cart entry {position} has non-string keys")
            normalized.append(dict(entry))

        # Keep in memory exactly what the store will hand back on the next load
        normalized = json.loads(json.dumps(normalized))
        self.store.set(key, normalized)
        self._entries = normalized
        logger.info(f"Saved {len(normalized)} cart entries to '{key}'")
