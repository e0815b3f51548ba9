"""Mini README: FastAPI surface for the POS ledger.

Structure:
    * create_application - application factory wiring routes to a manager.

Each route forwards one user intent (record, edit, delete, change date,
change type filter, export) to the ``TransactionManager`` and answers with
JSON. Failure results become HTTP errors carrying the manager's message.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import FileResponse, JSONResponse

from ..ledger.models import Transaction, type_filter_name
from ..lifecycle import TransactionManager, build_manager
from ..logging_utils import get_logger
from ..reports import SummaryPdfReport

LOGGER = get_logger(__name__)


def _summary_payload(manager: TransactionManager) -> Dict[str, object]:
    selected_date = manager.selected_date
    return {
        "selected_date": selected_date.isoformat() if selected_date else None,
        "selected_type": type_filter_name(manager.selected_type),
        "summary": manager.summary.as_dict(),
    }


def create_application(
    manager: Optional[TransactionManager] = None,
    report: Optional[SummaryPdfReport] = None,
) -> FastAPI:
    """Create the FastAPI application with routes bound to ``manager``."""

    app = FastAPI(title="POS Ledger", version="0.1.0")
    manager = manager or build_manager()
    report = report or SummaryPdfReport()
    app.state.manager = manager

    @app.get("/transactions")
    async def list_transactions() -> JSONResponse:
        """Return the full log, newest first."""

        transactions = [transaction.as_dict() for transaction in manager.transactions]
        LOGGER.debug("Returning %s transactions", len(transactions))
        return JSONResponse({"transactions": transactions})

    @app.post("/transactions")
    async def record_transaction(
        type: str = Form(...),
        amount: str = Form(...),
        charge: str = Form(...),
        charge_mode: str = Form(...),
        time: str = Form(...),
    ) -> JSONResponse:
        """Record a new transaction dated today."""

        result = manager.create(
            {"type": type, "amount": amount, "charge": charge, "charge_mode": charge_mode},
            time,
        )
        if not result.success:
            raise HTTPException(status_code=400, detail=result.message)
        payload = _summary_payload(manager)
        payload.update({"message": result.message, "transaction": result.transaction.as_dict()})
        return JSONResponse(payload, status_code=201)

    @app.put("/transactions/{transaction_id}")
    async def edit_transaction(
        transaction_id: str,
        type: str = Form(...),
        amount: str = Form(...),
        charge: str = Form(...),
        charge_mode: str = Form(...),
        time: str = Form(...),
    ) -> JSONResponse:
        """Replace an existing transaction; only its time of day may change."""

        try:
            existing = manager.get_transaction(transaction_id)
        except KeyError:
            existing = None
        try:
            edited = Transaction(
                id=transaction_id,
                type=type,  # type: ignore[arg-type]
                amount=amount,  # type: ignore[arg-type]
                charge=charge,  # type: ignore[arg-type]
                charge_mode=charge_mode,  # type: ignore[arg-type]
                timestamp=existing.timestamp if existing else manager.summary.summary_date,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        result = manager.update(edited, time)
        if not result.success:
            raise HTTPException(status_code=400, detail=result.message)
        payload = _summary_payload(manager)
        payload.update(
            {
                "message": result.message,
                "transaction": result.transaction.as_dict() if result.transaction else None,
            }
        )
        return JSONResponse(payload)

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Permanently remove a transaction."""

        result = manager.delete(transaction_id)
        if not result.success:
            raise HTTPException(status_code=404, detail=result.message)
        payload = _summary_payload(manager)
        payload["message"] = result.message
        return JSONResponse(payload)

    @app.get("/summary")
    async def current_summary() -> JSONResponse:
        """Return the summary for the active date and type filter."""

        manager.refresh_summary()
        return JSONResponse(_summary_payload(manager))

    @app.post("/summary/filters")
    async def change_filters(
        date: Optional[str] = Form(None),
        type: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Change the selected date and/or type filter."""

        if date is not None:
            result = manager.select_date(date)
            if not result.success:
                raise HTTPException(status_code=400, detail=result.message)
        if type is not None:
            result = manager.select_type(type)
            if not result.success:
                raise HTTPException(status_code=400, detail=result.message)
        LOGGER.info(
            "Filters now date=%s type=%s",
            manager.selected_date,
            type_filter_name(manager.selected_type),
        )
        return JSONResponse(_summary_payload(manager))

    @app.get("/summary/pdf")
    async def download_summary_pdf() -> FileResponse:
        """Export the active summary as a PDF download."""

        rendered = report.render(manager.summary, manager.selected_type)
        return FileResponse(
            str(rendered.path),
            media_type="application/pdf",
            filename=rendered.path.name,
        )

    return app
