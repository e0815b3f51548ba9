"""Mini README: Ledger domain records and the pure summary engine.

Modules here have no I/O: ``models`` defines transactions and summaries and
``summary`` derives a ``DailySummary`` from a transaction log. Persistence and
lifecycle orchestration build on top of this package.
"""

from .models import (
    ChargeMode,
    DailySummary,
    OperationResult,
    Transaction,
    TransactionType,
    parse_type_filter,
    type_filter_name,
)
from .summary import summarize

__all__ = [
    "ChargeMode",
    "DailySummary",
    "OperationResult",
    "Transaction",
    "TransactionType",
    "parse_type_filter",
    "summarize",
    "type_filter_name",
]
