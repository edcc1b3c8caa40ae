import json
from typing import Any


class MemorySettingsStore:
    """Settings store kept in a dict. Values are copied through JSON on the way in and out."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._values.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)
