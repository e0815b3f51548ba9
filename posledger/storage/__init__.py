"""Mini README: Persistence utilities for the POS ledger.

Exposes the string key-value stores and the adapter that serialises the
transaction log into them. Other backends only need to implement
``KeyValueStore``.
"""

from .key_value import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .transaction_store import DEFAULT_STORAGE_KEY, TransactionStore

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "TransactionStore",
]
