"""Serve the ledger API.

Usage:
    python -m account_ledger.app
"""

import uvicorn

from .core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "account_ledger.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
