"""Best-effort persistence of the last inputs and the page theme.

Any store exposing ``get``/``set`` of strings can back the page: a plain dict
or Streamlit's session state through :class:`MappingStore`, or a JSON file on
disk through :class:`JsonFileStore`. Failures are logged and ignored.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Protocol, Union

from .inputs import InputSet


logger = logging.getLogger(__name__)

INPUTS_KEY = "fw_inputs"
THEME_KEY = "fw_theme"

_STORAGE_ERRORS = (OSError, ValueError, TypeError)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MappingStore:
    def __init__(self, mapping: Optional[MutableMapping[str, Any]] = None):
        self.mapping: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> Optional[str]:
        value = self.mapping.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        self.mapping[key] = value


class JsonFileStore:
    """All keys in a single JSON object on disk, rewritten on every set."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable state file {self.path}: {e}")
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # write beside the target then swap, so readers never see a partial file
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


def save_inputs(store: KeyValueStore, inputs: InputSet) -> None:
    try:
        store.set(INPUTS_KEY, json.dumps(inputs.as_dict()))
    except _STORAGE_ERRORS as e:
        logger.warning(f"Could not save inputs: {e}")


def load_inputs(store: KeyValueStore) -> Optional[Dict[str, Any]]:
    """Raw saved inputs, or None when absent or unreadable."""
    try:
        raw = store.get(INPUTS_KEY)
        if not raw:
            return None
        data = json.loads(raw)
    except _STORAGE_ERRORS as e:
        logger.warning(f"Could not load saved inputs: {e}")
        return None
    return data if isinstance(data, dict) else None


def save_theme(store: KeyValueStore, theme: str) -> None:
    try:
        store.set(THEME_KEY, theme)
    except _STORAGE_ERRORS as e:
        logger.warning(f"Could not save theme: {e}")


def load_theme(store: KeyValueStore) -> Optional[str]:
    try:
        return store.get(THEME_KEY) or None
    except _STORAGE_ERRORS as e:
        logger.warning(f"Could not load theme: {e}")
        return None
