"""Mini README: Daily summary computation for the POS ledger.

Structure:
    * resolve_summary_date - normalise a requested day to its 00:00 instant.
    * filter_transactions - select one day's entries, optionally by type.
    * summarize - build a ``DailySummary`` from the full transaction log.

Everything here is pure: inputs are never mutated and no I/O happens, so the
lifecycle manager can recompute summaries as often as it likes.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from ..logging_utils import get_logger
from .models import ChargeMode, DailySummary, Transaction, TransactionType, TypeFilter, parse_type_filter

LOGGER = get_logger(__name__)

DateInput = Union[str, date, datetime, None]


def resolve_summary_date(target_date: DateInput = None, *, today: Optional[date] = None) -> datetime:
    """Return the start-of-day instant for the requested (or current) date."""

    if target_date is None or (isinstance(target_date, str) and not target_date.strip()):
        day = today if today is not None else date.today()
    elif isinstance(target_date, datetime):
        day = target_date.date()
    elif isinstance(target_date, date):
        day = target_date
    elif isinstance(target_date, str):
        text = target_date.strip()
        try:
            if len(text) > 10:
                if text.endswith(("Z", "z")):
                    text = f"{text[:-1]}+00:00"
                day = datetime.fromisoformat(text).date()
            else:
                day = date.fromisoformat(text)
        except ValueError as error:
            raise ValueError(f"Invalid summary date: {target_date!r}") from error
    else:
        raise ValueError("Summary dates must be ISO strings or date/datetime instances.")
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, datetime.min.time())


def filter_transactions(
    transactions: Iterable[Transaction],
    start: datetime,
    type_filter: Optional[TransactionType] = None,
) -> List[Transaction]:
    """Return entries in ``[start, start + 1 day)`` matching the type, newest first."""

    end = start + timedelta(days=1)
    selected = [entry for entry in transactions if start <= entry.timestamp < end]
    if type_filter is not None:
        selected = [entry for entry in selected if entry.type is type_filter]
    # sorted() is stable, so equal timestamps keep their log order.
    return sorted(selected, key=lambda entry: entry.timestamp, reverse=True)


def summarize(
    transactions: Iterable[Transaction],
    target_date: DateInput = None,
    type_filter: TypeFilter = None,
    *,
    today: Optional[date] = None,
) -> DailySummary:
    """Compute the daily summary for ``target_date`` and ``type_filter``."""

    summary_date = resolve_summary_date(target_date, today=today)
    selected_type = parse_type_filter(type_filter)
    filtered = filter_transactions(transactions, summary_date, selected_type)

    deposits = [entry for entry in filtered if entry.type is TransactionType.DEPOSIT]
    withdrawals = [entry for entry in filtered if entry.type is TransactionType.WITHDRAWAL]

    summary = DailySummary(
        summary_date=summary_date,
        total_transactions=len(filtered),
        total_deposits=len(deposits),
        total_withdrawals=len(withdrawals),
        total_amount_processed=sum((entry.amount for entry in filtered), Decimal("0")),
        total_deposit_amount=sum((entry.amount for entry in deposits), Decimal("0")),
        total_withdrawal_amount=sum((entry.amount for entry in withdrawals), Decimal("0")),
        total_earnings=sum((entry.charge for entry in filtered), Decimal("0")),
        earnings_from_account=sum(
            (entry.charge for entry in filtered if entry.charge_mode is ChargeMode.FROM_ACCOUNT),
            Decimal("0"),
        ),
        earnings_cash=sum(
            (entry.charge for entry in filtered if entry.charge_mode is ChargeMode.CASH),
            Decimal("0"),
        ),
        all_filtered_transactions=tuple(filtered),
    )
    LOGGER.debug(
        "Summary for %s filter=%s -> %s transactions",
        summary_date.date().isoformat(),
        selected_type.value if selected_type else "all",
        summary.total_transactions,
    )
    return summary
