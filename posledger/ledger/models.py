"""Mini README: Domain records for the POS ledger.

Structure:
    * TransactionType - enum representing deposit versus withdrawal entries.
    * ChargeMode - enum describing how the fee for a transaction was collected.
    * Transaction - immutable ledger entry with (de)serialisation helpers.
    * DailySummary - derived aggregates and listings for one calendar day.
    * OperationResult - success/failure outcome returned by lifecycle operations.

Transactions cross the persistence boundary through ``as_dict`` and
``from_dict``. ``from_dict`` parses timestamps and money values strictly so the
rest of the package only ever handles ``datetime`` and ``Decimal`` objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

RECENT_TRANSACTIONS_LIMIT = 5


class TransactionType(str, Enum):
    """Enumerate the supported transaction categories."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error

    @property
    def label(self) -> str:
        return "Deposit" if self is TransactionType.DEPOSIT else "Withdrawal"


class ChargeMode(str, Enum):
    """Where the fee for a transaction is collected from."""

    FROM_ACCOUNT = "from_account"
    CASH = "cash"

    @classmethod
    def from_str(cls, value: object) -> "ChargeMode":
        """Coerce arbitrary casing (and dashes or spaces) into a charge mode."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower().replace("-", "_").replace(" ", "_")
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported charge mode: {value}") from error

    @property
    def label(self) -> str:
        return "From Account" if self is ChargeMode.FROM_ACCOUNT else "Cash"


TypeFilter = Union[TransactionType, str, None]


def parse_type_filter(value: TypeFilter) -> Optional[TransactionType]:
    """Normalise a type filter; ``None`` means every transaction type."""

    if value is None:
        return None
    if isinstance(value, TransactionType):
        return value
    if str(value).strip().lower() in {"", "all"}:
        return None
    return TransactionType.from_str(value)


def type_filter_name(value: TypeFilter) -> str:
    """Return the wire name of a filter (``all``, ``deposit`` or ``withdrawal``)."""

    parsed = parse_type_filter(value)
    return parsed.value if parsed is not None else "all"


def parse_money(value: object, *, field_name: str) -> Decimal:
    """Parse a finite decimal amount, rejecting blanks, NaN and infinities."""

    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field_name} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValueError(f"{field_name} must be a number") from error
    if not amount.is_finite():
        raise ValueError(f"{field_name} must be a finite number")
    return amount


def parse_timestamp(value: object) -> datetime:
    """Parse stored timestamps into naive local datetimes at minute precision.

    Accepts ``datetime`` objects and ISO-8601 strings. Offsets (including a
    trailing ``Z``) are converted to local time before the tzinfo is dropped.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as error:
            raise ValueError(f"Invalid timestamp: {value!r}") from error
    else:
        raise ValueError("Timestamps must be provided as ISO strings or datetime instances.")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.replace(second=0, microsecond=0)


def parse_time_of_day(value: object) -> time:
    """Parse an ``HH:MM`` (optionally ``HH:MM:SS``) string; seconds are dropped."""

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("A transaction time is required")
    text = value.strip()
    for pattern in ("%H:%M", "%H:%M:%S"):
        try:
            parsed = datetime.strptime(text, pattern).time()
        except ValueError:
            continue
        return parsed.replace(second=0, microsecond=0)
    raise ValueError(f"Invalid time {value!r}; expected HH:MM")


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single deposit or withdrawal recorded at the till."""

    id: str
    type: TransactionType
    amount: Decimal
    charge: Decimal
    charge_mode: ChargeMode
    timestamp: datetime

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Transactions require an identifier")
        object.__setattr__(self, "type", TransactionType.from_str(self.type))
        object.__setattr__(self, "charge_mode", ChargeMode.from_str(self.charge_mode))
        object.__setattr__(self, "amount", parse_money(self.amount, field_name="Amount"))
        object.__setattr__(self, "charge", parse_money(self.charge, field_name="Charge"))
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))

    def as_dict(self) -> Dict[str, str]:
        """Export the transaction with serialisable values."""

        return {
            "id": self.id,
            "type": self.type.value,
            "amount": str(self.amount),
            "charge": str(self.charge),
            "chargeMode": self.charge_mode.value,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Transaction":
        """Build a transaction from its stored form, raising ``ValueError`` on bad data."""

        try:
            charge_mode = payload["chargeMode"] if "chargeMode" in payload else payload["charge_mode"]
            return cls(
                id=str(payload["id"]),
                type=payload["type"],  # type: ignore[arg-type]
                amount=payload["amount"],  # type: ignore[arg-type]
                charge=payload["charge"],  # type: ignore[arg-type]
                charge_mode=charge_mode,  # type: ignore[arg-type]
                timestamp=payload["timestamp"],  # type: ignore[arg-type]
            )
        except KeyError as error:
            raise ValueError(f"Stored transaction is missing field {error.args[0]!r}") from error


@dataclass(frozen=True, slots=True)
class DailySummary:
    """Aggregates for one calendar day and type filter."""

    summary_date: datetime
    total_transactions: int = 0
    total_deposits: int = 0
    total_withdrawals: int = 0
    total_amount_processed: Decimal = Decimal("0")
    total_deposit_amount: Decimal = Decimal("0")
    total_withdrawal_amount: Decimal = Decimal("0")
    total_earnings: Decimal = Decimal("0")
    earnings_from_account: Decimal = Decimal("0")
    earnings_cash: Decimal = Decimal("0")
    all_filtered_transactions: Tuple[Transaction, ...] = field(default_factory=tuple)

    @property
    def recent_transactions(self) -> Tuple[Transaction, ...]:
        """The newest entries of the filtered set, for compact displays."""

        return self.all_filtered_transactions[:RECENT_TRANSACTIONS_LIMIT]

    def as_dict(self) -> Dict[str, object]:
        """Export the summary for JSON responses."""

        return {
            "summary_date": self.summary_date.date().isoformat(),
            "total_transactions": self.total_transactions,
            "total_deposits": self.total_deposits,
            "total_withdrawals": self.total_withdrawals,
            "total_amount_processed": str(self.total_amount_processed),
            "total_deposit_amount": str(self.total_deposit_amount),
            "total_withdrawal_amount": str(self.total_withdrawal_amount),
            "total_earnings": str(self.total_earnings),
            "earnings_from_account": str(self.earnings_from_account),
            "earnings_cash": str(self.earnings_cash),
            "recent_transactions": [entry.as_dict() for entry in self.recent_transactions],
            "all_filtered_transactions": [entry.as_dict() for entry in self.all_filtered_transactions],
        }


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a lifecycle operation; failures carry a user-facing message."""

    success: bool
    message: str
    transaction: Optional[Transaction] = None

    @classmethod
    def ok(cls, message: str, transaction: Optional[Transaction] = None) -> "OperationResult":
        return cls(True, message, transaction)

    @classmethod
    def failure(cls, message: str) -> "OperationResult":
        return cls(False, message)
