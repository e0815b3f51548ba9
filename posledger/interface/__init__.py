"""Mini README: Interactive interfaces (web/CLI) for the POS ledger.

Exports the FastAPI application factory that serves the ledger over HTTP.
The command line entry point lives in ``main_pos_ledger.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
