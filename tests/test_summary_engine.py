"""Mini README: Tests covering the daily summary engine.

Structure:
    * Day boundaries - midnight entries belong to the day they open.
    * Ordering - filtered entries are newest first, ties keep log order.
    * Aggregates - counts, amounts and fee breakdowns per type and mode.
    * Purity - repeated calls give equal results and leave inputs untouched.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from posledger.ledger import TransactionType, summarize

from helpers import make_transaction

DAY = date(2024, 5, 1)


def _sample_log():
    return [
        make_transaction("d1", "deposit", "1000", datetime(2024, 5, 1, 9, 0), charge="50", charge_mode="cash"),
        make_transaction(
            "w1", "withdrawal", "950", datetime(2024, 5, 1, 11, 15), charge="50", charge_mode="from_account"
        ),
        make_transaction("w2", "withdrawal", "500", datetime(2024, 5, 1, 10, 0), charge="20", charge_mode="cash"),
        make_transaction("d2", "deposit", "300", datetime(2024, 5, 2, 8, 0), charge="10", charge_mode="cash"),
    ]


def test_summary_aggregates_counts_amounts_and_fees() -> None:
    """All nine aggregates should reflect the day's entries."""

    summary = summarize(_sample_log(), "2024-05-01")

    assert summary.summary_date == datetime(2024, 5, 1)
    assert summary.total_transactions == 3
    assert summary.total_deposits == 1
    assert summary.total_withdrawals == 2
    assert summary.total_amount_processed == Decimal("2450")
    assert summary.total_deposit_amount == Decimal("1000")
    assert summary.total_withdrawal_amount == Decimal("1450")
    assert summary.total_earnings == Decimal("120")
    assert summary.earnings_from_account == Decimal("50")
    assert summary.earnings_cash == Decimal("70")


def test_summary_orders_newest_first_and_keeps_ties_stable() -> None:
    """Entries sort descending by time; equal timestamps keep their log order."""

    log = _sample_log() + [
        make_transaction("tie_a", "deposit", "1", datetime(2024, 5, 1, 12, 0)),
        make_transaction("tie_b", "deposit", "2", datetime(2024, 5, 1, 12, 0)),
    ]

    summary = summarize(log, DAY)

    assert [entry.id for entry in summary.all_filtered_transactions] == ["tie_a", "tie_b", "w1", "w2", "d1"]
    timestamps = [entry.timestamp for entry in summary.all_filtered_transactions]
    assert timestamps == sorted(timestamps, reverse=True)


def test_summary_day_is_half_open_interval() -> None:
    """Midnight at the start of the day is included, the next midnight is not."""

    log = [
        make_transaction("start", "deposit", "10", datetime(2024, 5, 1, 0, 0)),
        make_transaction("next_day", "deposit", "20", datetime(2024, 5, 2, 0, 0)),
        make_transaction("previous", "deposit", "30", datetime(2024, 4, 30, 23, 59)),
    ]

    summary = summarize(log, "2024-05-01")

    assert [entry.id for entry in summary.all_filtered_transactions] == ["start"]


def test_summary_for_each_day_excludes_the_other_day() -> None:
    """Summaries of neighbouring days never share entries."""

    first = summarize(_sample_log(), "2024-05-01")
    second = summarize(_sample_log(), "2024-05-02")

    first_ids = {entry.id for entry in first.all_filtered_transactions}
    second_ids = {entry.id for entry in second.all_filtered_transactions}
    assert first_ids == {"d1", "w1", "w2"}
    assert second_ids == {"d2"}


def test_summary_type_filter_partitions_totals() -> None:
    """Deposit and withdrawal summaries add up to the unfiltered one."""

    log = _sample_log()
    everything = summarize(log, DAY, "all")
    deposits = summarize(log, DAY, "deposit")
    withdrawals = summarize(log, DAY, TransactionType.WITHDRAWAL)

    assert everything.total_transactions == deposits.total_transactions + withdrawals.total_transactions
    assert withdrawals.total_deposits == 0
    assert withdrawals.total_earnings == Decimal("70")
    assert all(entry.type is TransactionType.WITHDRAWAL for entry in withdrawals.all_filtered_transactions)


def test_summary_recent_transactions_limited_to_five() -> None:
    """The recent view is the first five entries of the filtered set."""

    log = [
        make_transaction(f"t{minute}", "deposit", "1", datetime(2024, 5, 1, 9, minute)) for minute in range(8)
    ]

    summary = summarize(log, DAY)

    assert len(summary.all_filtered_transactions) == 8
    assert summary.recent_transactions == summary.all_filtered_transactions[:5]
    assert summary.recent_transactions[0].id == "t7"


def test_summary_of_empty_day_is_all_zero() -> None:
    """No matching entries should produce zero aggregates rather than errors."""

    summary = summarize(_sample_log(), "2023-01-01", "deposit")

    assert summary.total_transactions == 0
    assert summary.total_amount_processed == Decimal("0")
    assert summary.earnings_cash == Decimal("0")
    assert summary.all_filtered_transactions == ()
    assert summary.recent_transactions == ()


def test_summary_is_pure_and_repeatable() -> None:
    """Identical calls give equal summaries and never reorder the input."""

    log = _sample_log()
    original_order = [entry.id for entry in log]

    assert summarize(log, DAY, "all") == summarize(log, DAY, "all")
    assert [entry.id for entry in log] == original_order


def test_summary_defaults_to_today() -> None:
    """Without a date the supplied ``today`` is summarised."""

    summary = summarize(_sample_log(), today=date(2024, 5, 2))

    assert summary.summary_date == datetime(2024, 5, 2)
    assert summary.total_transactions == 1


def test_summary_rejects_invalid_date_and_filter() -> None:
    """Bad inputs raise ``ValueError`` for the caller to report."""

    with pytest.raises(ValueError):
        summarize(_sample_log(), "not-a-date")
    with pytest.raises(ValueError):
        summarize(_sample_log(), DAY, "refund")


def test_summary_date_strings_must_be_whole_iso_values() -> None:
    """Trailing junk is rejected while full ISO datetimes still resolve."""

    with pytest.raises(ValueError):
        summarize(_sample_log(), "2024-05-01garbage")

    assert summarize(_sample_log(), "2024-05-01T18:45:00").summary_date == datetime(2024, 5, 1)
    assert summarize(_sample_log(), " 2024-05-02 ").total_transactions == 1
