from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import (
    AccountNotFoundError,
    CriticalInconsistencyError,
    InsufficientFundsError,
    InvalidArgumentError,
    SameAccountError,
    TransferFailedError,
)


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": "Invalid JSON"})

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(
        request: Request, exc: InvalidArgumentError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(AccountNotFoundError)
    async def account_not_found_handler(
        request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        # Unknown ids are reported as a bad request, not 404.
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(InsufficientFundsError)
    async def insufficient_funds_handler(
        request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SameAccountError)
    async def same_account_handler(
        request: Request, exc: SameAccountError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(TransferFailedError)
    async def transfer_failed_handler(
        request: Request, exc: TransferFailedError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(CriticalInconsistencyError)
    async def critical_inconsistency_handler(
        request: Request, exc: CriticalInconsistencyError
    ) -> JSONResponse:
        logger.error("request.critical_inconsistency", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"detail": str(exc)})
