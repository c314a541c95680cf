"""JSON file settings store.

Keeps settings in a small JSON document on disk. The whole document is
rewritten on every change; it only ever holds a handful of strings.
"""

import json
from pathlib import Path

from .base import SettingsStore

DEFAULT_SETTINGS_PATH = Path.home() / ".streamchat" / "settings.json"


class JsonFileSettingsStore(SettingsStore):
    """File-backed settings store.

    Read and write failures (missing directory permissions, corrupt JSON)
    are swallowed: the store then behaves as if the key were absent and
    writes are dropped.
    """

    def __init__(self, path: str | Path = DEFAULT_SETTINGS_PATH):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the JSON document."""
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError:
            pass

    def get(self, key: str, default: str = "") -> str:
        return self._read().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        if value:
            if data.get(key) == value:
                return
            data[key] = value
        elif key in data:
            del data[key]
        else:
            return
        self._write(data)

    def clear(self, key: str) -> None:
        self.set(key, "")

    def keys(self) -> list[str]:
        return list(self._read())

    @property
    def backend_type(self) -> str:
        return "file"
