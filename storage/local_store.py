"""
Flat key-value store persisted as a single JSON file.
Stands in for the browser's local storage: values are JSON strings keyed by
fixed names, read at startup and rewritten on every change.
"""
import json
import logging
import os
from typing import Dict, Optional

log = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning(f"[Store] could not read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            log.warning(f"[Store] ignoring non-object store file {self.path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def _flush(self) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
        os.replace(tmp_path, self.path)
