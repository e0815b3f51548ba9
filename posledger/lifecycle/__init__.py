"""Mini README: Lifecycle orchestration for the POS ledger.

Exports the ``TransactionManager`` that keeps the persisted log and the
derived daily summary consistent, plus a factory wiring it to configured
storage.
"""

from .manager import TransactionManager, build_manager

__all__ = ["TransactionManager", "build_manager"]
