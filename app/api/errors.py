# app/api/errors.py
"""
HTTP mapping for domain errors.

Body: {"statusCode": ..., "error": CODE, "message": ..., "details": {...}}
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    AllocationError,
    ApplicantStatusNotFoundError,
    ComplaintDomainError,
    ComplaintNotDeletableError,
    ComplaintNotFoundError,
    ComplaintTypeNotFoundError,
    ComplaintValidationError,
    ConcurrentStatusUpdateError,
    FormatError,
    InvalidStatusTransitionError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = [
    (ComplaintValidationError, 400),
    (ComplaintNotFoundError, 404),
    (ComplaintTypeNotFoundError, 404),
    (UserNotFoundError, 404),
    (ApplicantStatusNotFoundError, 404),
    (InvalidStatusTransitionError, 409),
    (ComplaintNotDeletableError, 409),
    (ConcurrentStatusUpdateError, 409),
    (AllocationError, 503),
    (FormatError, 500),
]


def status_code_for(exc: ComplaintDomainError) -> int:
    for error_class, status_code in STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def domain_error_handler(request: Request, exc: ComplaintDomainError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("❌ %s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, **exc.to_dict()},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("❌ Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "statusCode": 500,
            "error": "INTERNAL_ERROR",
            "message": "Internal server error",
            "details": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ComplaintDomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
