"""Mini README: Core package initializer for the POS ledger.

The package records deposit and withdrawal transactions for a single till,
persists them to a local key-value store, derives daily summaries, and
exports those summaries as PDF reports. Only lightweight helpers are
re-exported here so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
