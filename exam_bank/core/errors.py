"""
Mapping of the error taxonomy to HTTP responses.

Every error body has the shape ``{"message": ..., "success": false, "error": <category>}``.
Not-found answers 404; field validation and referential violations both answer
400 and are told apart by ``error``.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exam_bank.core.config import settings
from exam_bank.core.exceptions import ExamBankError, ValidationFailedError
from exam_bank.services.validation import INVALID_DATA_MESSAGE, translate_errors

logger = logging.getLogger(__name__)


def error_body(message: str, category: str, **extra: Any) -> Dict[str, Any]:
    return {"message": message, "success": False, "error": category, **extra}


async def exam_bank_error_handler(request: Request, exc: ExamBankError):
    logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.category, exc.message)
    extra = {}
    if isinstance(exc, ValidationFailedError) and exc.errors:
        extra["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.category, **extra))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Field-level failures answer 400 with readable messages instead of FastAPI's 422."""
    failure = ValidationFailedError(INVALID_DATA_MESSAGE, translate_errors(exc.errors()))
    return await exam_bank_error_handler(request, failure)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "http_error"),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    message = "Ocorreu um erro interno" if settings.is_production() else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(message, "internal_error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExamBankError, exam_bank_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
