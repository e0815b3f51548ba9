"""Mini README: Entry point CLI for the POS ledger.

This script exposes a Typer CLI that starts the FastAPI service and offers
headless commands for recording, deleting, summarising, and exporting
transactions. All commands read settings from ``POSLEDGER_`` environment
variables and share the same JSON file store.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from posledger.configuration import get_settings
from posledger.ledger import type_filter_name
from posledger.lifecycle import build_manager
from posledger.logging_utils import configure_root_logger
from posledger.reports import SummaryPdfReport, filter_label, format_currency, metric_lines

cli = typer.Typer(help="Record POS transactions and report daily summaries.")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot navigate to the 0.0.0.0 / :: wildcard addresses.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting POS ledger on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "posledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def record(
    transaction_type: str = typer.Argument(..., metavar="TYPE", help="deposit or withdrawal."),
    amount: str = typer.Argument(..., help="Transaction amount."),
    charge: str = typer.Option("0", help="Fee charged for the transaction."),
    charge_mode: str = typer.Option("from_account", help="from_account or cash."),
    time: Optional[str] = typer.Option(None, help="Time of day (HH:MM); defaults to now."),
) -> None:
    """Record a transaction dated today."""

    configure_root_logger(get_settings().log_level)
    manager = build_manager()
    time_string = time or datetime.now().strftime("%H:%M")
    result = manager.create(
        {"type": transaction_type, "amount": amount, "charge": charge, "charge_mode": charge_mode},
        time_string,
    )
    if not result.success:
        _fail(result.message)
    typer.echo(f"{result.message} ({result.transaction.id})")


@cli.command()
def delete(transaction_id: str = typer.Argument(..., help="Identifier of the transaction.")) -> None:
    """Delete a transaction by id."""

    configure_root_logger(get_settings().log_level)
    result = build_manager().delete(transaction_id)
    if not result.success:
        _fail(result.message)
    typer.echo(result.message)


@cli.command()
def summary(
    date: Optional[str] = typer.Option(None, help="Day to summarise (YYYY-MM-DD); defaults to today."),
    transaction_type: str = typer.Option("all", "--type", help="all, deposit or withdrawal."),
) -> None:
    """Print the daily summary."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    manager = build_manager(settings)
    for result in (manager.select_date(date), manager.select_type(transaction_type)):
        if not result.success:
            _fail(result.message)
    daily = manager.summary
    typer.echo(f"POS Daily Summary - {daily.summary_date.date().isoformat()} ({filter_label(transaction_type)})")
    for content, indent, _ in metric_lines(daily, settings.currency_symbol):
        typer.echo(" " * int(indent // 5) + content)
    for transaction in daily.all_filtered_transactions:
        typer.echo(
            f"  {transaction.timestamp:%H:%M}  {transaction.type.label:<10}  "
            f"{format_currency(transaction.amount, settings.currency_symbol):>14}  "
            f"{format_currency(transaction.charge, settings.currency_symbol):>10}  "
            f"{transaction.charge_mode.label}  {transaction.id}"
        )


@cli.command("export-pdf")
def export_pdf(
    date: Optional[str] = typer.Option(None, help="Day to export (YYYY-MM-DD); defaults to today."),
    transaction_type: str = typer.Option("all", "--type", help="all, deposit or withdrawal."),
    output: Optional[Path] = typer.Option(None, help="Directory for the PDF; defaults to settings."),
) -> None:
    """Export the daily summary as a PDF report."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    manager = build_manager(settings)
    for result in (manager.select_date(date), manager.select_type(transaction_type)):
        if not result.success:
            _fail(result.message)
    rendered = SummaryPdfReport(currency_symbol=settings.currency_symbol).render(
        manager.summary,
        type_filter_name(manager.selected_type),
        output,
    )
    typer.echo(f"Wrote {rendered.path} ({rendered.page_count} page(s))")


if __name__ == "__main__":
    cli()
