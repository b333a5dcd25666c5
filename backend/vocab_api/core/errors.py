from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


class VocabularyError(Exception):
    """Base class for errors that map onto a structured JSON error body."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, **detail: Any) -> None:
        self.message = message or self.default_message
        self.detail: Dict[str, Any] = detail
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message, **self.detail}


# ---------- Request-path errors ----------

class InvalidInput(VocabularyError):
    status_code = 400
    default_message = "Invalid input"


class AllDuplicates(VocabularyError):
    status_code = 400
    default_message = (
        "All provided words already exist in the database (case-insensitive check)."
    )


class UnsupportedSortType(VocabularyError):
    status_code = 400
    default_message = "Unsupported sort type"


class InvalidPagination(VocabularyError):
    status_code = 400
    default_message = "Invalid pagination parameters"


class MissingId(VocabularyError):
    status_code = 400
    default_message = "Word ID is required"


class InvalidIdFormat(VocabularyError):
    status_code = 400
    default_message = "Invalid word ID format"


class Unauthorized(VocabularyError):
    status_code = 401
    default_message = "Password is incorrect"


class NotFound(VocabularyError):
    status_code = 404
    default_message = "Word not found"


class DuplicateConflict(VocabularyError):
    status_code = 409
    default_message = "A word in this batch was added concurrently; nothing was inserted."


class StoreUnavailable(VocabularyError):
    status_code = 500
    default_message = "Storage operation failed"


# ---------- Offline enrichment errors ----------

class ProviderError(VocabularyError):
    """The AI provider call failed (transport, auth, rate limit, empty answer)."""

    default_message = "AI provider call failed"


class MalformedResponse(VocabularyError):
    """The AI answer could not be turned into a list of enrichment records."""

    default_message = "AI response is not a JSON array of word records"


# ---------- FastAPI wiring ----------

async def vocabulary_error_handler(request: Request, exc: VocabularyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = InvalidInput("Invalid request body", error=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    print(f"[errors] {request.method} {request.url.path} store failure: {exc!r}")
    err = StoreUnavailable(error=str(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VocabularyError, vocabulary_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
