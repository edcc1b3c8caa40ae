"""Settings store persisted as a single JSON object on disk."""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JSONFileSettingsStore:
    """Per-device settings kept in one JSON file.

    The file is read on first access and rewritten atomically after every
    change. A missing file is an empty store; an unreadable or malformed one
    is logged and treated as empty.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._values: dict[str, Any] | None = None

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._load().get(key))

    def set(self, key: str, value: Any) -> None:
        values = dict(self._load())
        values[key] = value
        self._write(values)

    def _load(self) -> dict[str, Any]:
        if self._values is None:
            self._values = self._read()
        return self._values

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug(f"Settings file {self.path} does not exist yet")
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Settings file {self.path} holds {type(data).__name__}, expected an object"
            )
            return {}
        return data

    def _write(self, values: dict[str, Any]) -> None:
        # Serialize first so an unserializable value leaves the file untouched
        payload = json.dumps(values, indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

        self._values = json.loads(payload)
        logger.debug(f"Wrote {len(values)} settings to {self.path}")
