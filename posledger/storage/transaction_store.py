"""Mini README: Persistence adapter for the transaction log.

Structure:
    * TransactionStore - loads and saves the full log under one store key.

The whole log is rewritten on every save; a single till produces a small log
so incremental writes are unnecessary. Both directions are best-effort: load
degrades to an empty log and save reports failure through its return value,
logging the cause instead of raising.
"""

from __future__ import annotations

import json
from typing import Iterable, List

from ..ledger.models import Transaction
from ..logging_utils import get_logger
from .key_value import KeyValueStore

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "pos_transactions"


class TransactionStore:
    """Serialise transactions to and from a ``KeyValueStore``."""

    def __init__(self, backend: KeyValueStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.backend = backend
        self.key = key

    def load(self) -> List[Transaction]:
        """Return the stored log, or an empty list when absent or unreadable."""

        try:
            raw = self.backend.get(self.key)
            if not raw:
                LOGGER.debug("No stored transactions under key %s", self.key)
                return []
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("Stored transaction log must be a JSON array")
            transactions = [Transaction.from_dict(entry) for entry in payload]
        except Exception:
            LOGGER.exception("Failed to load transactions from store key %s", self.key)
            return []
        LOGGER.info("Loaded %s transactions", len(transactions))
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> bool:
        """Overwrite the stored log; returns ``False`` when the write failed."""

        try:
            records = [transaction.as_dict() for transaction in transactions]
            self.backend.set(self.key, json.dumps(records, ensure_ascii=False))
        except Exception:
            LOGGER.exception("Failed to save transactions to store key %s", self.key)
            return False
        LOGGER.debug("Saved %s transactions", len(records))
        return True
