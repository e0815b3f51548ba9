"""Mini README: Transaction lifecycle orchestration for the POS ledger.

Structure:
    * TransactionManager - owns the in-memory log and the filter selection,
      applies create/update/delete, persists, and recomputes the summary.
    * build_manager - wires a manager to the JSON file store from settings.

Every public operation returns an ``OperationResult`` instead of raising. The
in-memory log is the source of truth for the session: persistence runs after
each mutation on a best-effort basis and a failed write never rolls the
mutation back or holds up the summary.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from ..configuration import PosLedgerSettings, get_settings
from ..ledger.models import (
    ChargeMode,
    DailySummary,
    OperationResult,
    Transaction,
    TransactionType,
    TypeFilter,
    parse_money,
    parse_time_of_day,
    parse_type_filter,
)
from ..ledger.summary import DateInput, resolve_summary_date, summarize
from ..logging_utils import get_logger
from ..storage import JsonFileKeyValueStore, TransactionStore

LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


def _sort_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    return sorted(transactions, key=lambda entry: entry.timestamp, reverse=True)


def _error_message(error: Exception, fallback: str) -> str:
    return str(error) or fallback


class TransactionManager:
    """Single owner of the transaction log and the active summary filter."""

    def __init__(
        self,
        store: TransactionStore,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._transactions: List[Transaction] = _sort_newest_first(store.load())
        self._selected_date: Optional[date] = None
        self._selected_type: Optional[TransactionType] = None
        self._summary = self._compute_summary()
        LOGGER.debug("Transaction manager initialised with %s transactions", len(self._transactions))

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        """Full log, newest first."""

        return tuple(self._transactions)

    @property
    def summary(self) -> DailySummary:
        return self._summary

    @property
    def selected_date(self) -> Optional[date]:
        """Date driving the summary; ``None`` follows the clock's current day."""

        return self._selected_date

    @property
    def selected_type(self) -> Optional[TransactionType]:
        """Type filter driving the summary; ``None`` means all types."""

        return self._selected_type

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        raise KeyError(f"Transaction {transaction_id} not found")

    def create(self, data: Mapping[str, object], time_string: object) -> OperationResult:
        """Record a new transaction dated today at ``time_string``.

        Withdrawals whose charge is taken from the account are stored net of
        the charge. Validation failures leave the log and the store untouched.
        """

        try:
            transaction_type, amount, charge, charge_mode = self._parse_draft(data)
            time_of_day = parse_time_of_day(time_string)
        except ValueError as error:
            LOGGER.info("Rejected new transaction: %s", error)
            return OperationResult.failure(
                f"Please fill in all required fields with valid numbers and time. ({error})"
            )

        try:
            if transaction_type is TransactionType.WITHDRAWAL and charge_mode is ChargeMode.FROM_ACCOUNT:
                amount -= charge
            transaction = Transaction(
                id=uuid.uuid4().hex,
                type=transaction_type,
                amount=amount,
                charge=charge,
                charge_mode=charge_mode,
                timestamp=datetime.combine(self._clock().date(), time_of_day),
            )
            self._commit([*self._transactions, transaction])
        except Exception as error:
            LOGGER.exception("Error saving transaction")
            return OperationResult.failure(_error_message(error, "Failed to save transaction."))
        LOGGER.info(
            "Recorded %s %s (charge %s, %s) at %s",
            transaction.type.value,
            transaction.amount,
            transaction.charge,
            transaction.charge_mode.value,
            transaction.timestamp.isoformat(timespec="minutes"),
        )
        return OperationResult.ok("Transaction recorded successfully!", transaction)

    def update(self, transaction: Transaction, time_string: object) -> OperationResult:
        """Replace the stored entry sharing ``transaction.id``.

        Only the time of day is editable on the timestamp; the original date
        is kept. The amount is stored exactly as supplied, the create-time
        charge netting is not applied again. An unknown id leaves the log
        unchanged but is still reported as a success.
        """

        if not isinstance(transaction, Transaction):
            LOGGER.info("Rejected update with malformed transaction %r", transaction)
            return OperationResult.failure("Transaction details are missing or invalid.")
        try:
            time_of_day = parse_time_of_day(time_string)
        except ValueError as error:
            LOGGER.info("Rejected update for %s: %s", transaction.id, error)
            return OperationResult.failure(str(error))

        try:
            matched: Optional[Transaction] = None
            updated: List[Transaction] = []
            for existing in self._transactions:
                if existing.id == transaction.id:
                    matched = replace(
                        transaction,
                        timestamp=datetime.combine(existing.timestamp.date(), time_of_day),
                    )
                    updated.append(matched)
                else:
                    updated.append(existing)
            if matched is None:
                LOGGER.warning("Update requested for unknown transaction %s; log unchanged", transaction.id)
            self._commit(updated)
        except Exception as error:
            LOGGER.exception("Error updating transaction %s", transaction.id)
            return OperationResult.failure(_error_message(error, "Failed to save transaction."))
        if matched is not None:
            LOGGER.info("Updated transaction %s", transaction.id)
        return OperationResult.ok("Transaction updated successfully!", matched)

    def delete(self, transaction_id: str) -> OperationResult:
        """Remove the entry with ``transaction_id``; unknown ids fail without persisting."""

        try:
            remaining = [entry for entry in self._transactions if entry.id != transaction_id]
            if len(remaining) == len(self._transactions):
                LOGGER.warning("Delete requested for unknown transaction %s", transaction_id)
                return OperationResult.failure("Transaction not found for deletion.")
            removed = self.get_transaction(transaction_id)
            self._commit(remaining)
        except Exception as error:
            LOGGER.exception("Error deleting transaction %s", transaction_id)
            return OperationResult.failure(_error_message(error, "Failed to delete transaction."))
        LOGGER.info("Deleted transaction %s", transaction_id)
        return OperationResult.ok("Transaction deleted successfully!", removed)

    def select_date(self, value: DateInput) -> OperationResult:
        """Change the summary date (``None`` or blank follows today)."""

        if value is None or (isinstance(value, str) and not value.strip()):
            selected = None
        else:
            try:
                selected = resolve_summary_date(value, today=self._clock().date()).date()
            except ValueError as error:
                return OperationResult.failure(str(error))
        self._selected_date = selected
        self.refresh_summary()
        return OperationResult.ok(f"Showing summary for {self._summary.summary_date.date().isoformat()}")

    def select_type(self, value: TypeFilter) -> OperationResult:
        """Change the summary type filter (``"all"`` or ``None`` clears it)."""

        try:
            selected = parse_type_filter(value)
        except ValueError as error:
            return OperationResult.failure(str(error))
        self._selected_type = selected
        self.refresh_summary()
        label = selected.value if selected is not None else "all"
        return OperationResult.ok(f"Showing {label} transactions")

    def refresh_summary(self) -> DailySummary:
        """Recompute the summary from the in-memory log and current selection."""

        self._summary = self._compute_summary()
        return self._summary

    def _compute_summary(self) -> DailySummary:
        return summarize(
            self._transactions,
            self._selected_date,
            self._selected_type,
            today=self._clock().date(),
        )

    def _commit(self, transactions: Iterable[Transaction]) -> None:
        self._transactions = _sort_newest_first(transactions)
        if not self._store.save(self._transactions):
            LOGGER.error("Changes kept in memory only; the store rejected the write")
        self.refresh_summary()

    @staticmethod
    def _parse_draft(
        data: Mapping[str, object],
    ) -> Tuple[TransactionType, Decimal, Decimal, ChargeMode]:
        """Validate the user supplied fields of a new transaction."""

        if not isinstance(data, Mapping):
            raise ValueError("Transaction details are required")
        raw_type = data.get("type")
        raw_mode = data.get("charge_mode", data.get("chargeMode"))
        if raw_type in (None, ""):
            raise ValueError("Transaction type is required")
        if raw_mode in (None, ""):
            raise ValueError("Charge mode is required")
        transaction_type = TransactionType.from_str(raw_type)
        charge_mode = ChargeMode.from_str(raw_mode)
        amount = parse_money(data.get("amount"), field_name="Amount")
        charge = parse_money(data.get("charge"), field_name="Charge")
        if charge < 0:
            raise ValueError("Charge cannot be negative")
        return transaction_type, amount, charge, charge_mode


def build_manager(settings: Optional[PosLedgerSettings] = None) -> TransactionManager:
    """Create a manager persisting to the JSON file store named in settings."""

    settings = settings or get_settings()
    backend = JsonFileKeyValueStore(settings.store_path)
    return TransactionManager(TransactionStore(backend, key=settings.storage_key))
