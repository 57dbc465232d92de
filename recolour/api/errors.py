"""Mapping of domain failures onto HTTP responses."""

from __future__ import annotations

from typing import NoReturn

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recolour.tickets.models import StoreError, StoreErrorCode, StoreResult, Ticket

PHOTOS_LOCKED_DETAIL = "Photos can only be managed when ticket is In Progress"

_STORE_ERRORS: dict[StoreErrorCode, tuple[int, str]] = {
    StoreErrorCode.NOT_FOUND: (404, "Ticket not found"),
    StoreErrorCode.INVALID_TRANSITION: (400, "Invalid ticket state transition"),
    StoreErrorCode.PHOTO_NOT_FOUND: (404, "Photo not found on this ticket"),
    StoreErrorCode.PHOTOS_LOCKED: (409, PHOTOS_LOCKED_DETAIL),
}

INVALID_PAYLOAD = "Invalid payload"
INVALID_QUERY = "Invalid query parameters"


def raise_store_error(code: StoreErrorCode) -> NoReturn:
    status_code, detail = _STORE_ERRORS.get(code, (400, "Invalid request"))
    raise HTTPException(status_code=status_code, detail=detail)


def unwrap(result: StoreResult) -> Ticket:
    """Return the ticket of a successful result or raise the mapped HTTP error."""

    if isinstance(result, StoreError):
        raise_store_error(result.code)
    return result.ticket


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    in_query = any(error.get("loc", ("",))[0] == "query" for error in exc.errors())
    return JSONResponse(
        status_code=400,
        content={"detail": INVALID_QUERY if in_query else INVALID_PAYLOAD},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
