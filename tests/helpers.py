"""Mini README: Test helpers shared across the POS ledger suite.

Structure:
    * RecordingStore - transaction store that remembers every save call.
    * make_transaction - terse constructor for ledger entries.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List

from posledger.ledger import ChargeMode, Transaction, TransactionType
from posledger.storage import InMemoryKeyValueStore, TransactionStore


class RecordingStore(TransactionStore):
    """In-memory transaction store that remembers every saved snapshot."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        super().__init__(InMemoryKeyValueStore())
        self.fail_writes = fail_writes
        self.saved: List[List[Transaction]] = []

    def save(self, transactions) -> bool:
        snapshot = list(transactions)
        self.saved.append(snapshot)
        if self.fail_writes:
            return False
        return super().save(snapshot)


def make_transaction(
    transaction_id: str,
    transaction_type: str,
    amount: str,
    timestamp: datetime,
    *,
    charge: str = "0",
    charge_mode: str = "cash",
) -> Transaction:
    return Transaction(
        id=transaction_id,
        type=TransactionType(transaction_type),
        amount=Decimal(amount),
        charge=Decimal(charge),
        charge_mode=ChargeMode(charge_mode),
        timestamp=timestamp,
    )
