import logging
from typing import Optional

from fastapi import FastAPI

from .api.exceptions import register_exception_handlers
from .api.routes import router as accounts_router, transfer_router
from .core.config import Settings, get_settings


def read_health() -> dict[str, str]:
    return {"status": "ok"}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the ledger API: account and transfer routers, error mapping, health check."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    ledger_app = FastAPI(title=settings.app_name)
    ledger_app.include_router(accounts_router)
    ledger_app.include_router(transfer_router)
    ledger_app.add_api_route("/health", read_health, methods=["GET"], tags=["health"])
    register_exception_handlers(ledger_app)
    return ledger_app


app = create_app()
