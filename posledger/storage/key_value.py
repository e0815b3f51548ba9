"""Mini README: Durable string key-value stores backing the ledger.

Structure:
    * KeyValueStore - abstract get/set interface used by the persistence adapter.
    * InMemoryKeyValueStore - dictionary backed store for tests and previews.
    * JsonFileKeyValueStore - JSON document on disk replaced atomically on write.

The stores deal in plain strings only. Serialisation of domain records lives
in ``transaction_store`` so alternative backends only need get/set semantics.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class KeyValueStore(ABC):
    """Minimal string store with get/set semantics."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string or ``None`` when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite ``key`` with ``value``."""


class InMemoryKeyValueStore(KeyValueStore):
    """Volatile store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """Persist keys as members of a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        LOGGER.debug("Key-value store located at %s", self.path)

    def _read_document(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as handle:
            document = json.load(handle)
        if not isinstance(document, dict):
            raise ValueError(f"Store document {self.path} must contain a JSON object")
        return document

    def get(self, key: str) -> Optional[str]:
        value = self._read_document().get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Value stored under {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            document = self._read_document()
        except ValueError:
            LOGGER.warning("Store document %s is unreadable; rewriting it", self.path)
            document = {}
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
