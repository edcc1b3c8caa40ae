from typing import Any, runtime_checkable, Protocol


@runtime_checkable
class SettingsStore(Protocol):
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...
