"""Map engine errors to JSON error responses."""

from __future__ import annotations

import logging

from starlette.responses import JSONResponse

from codeguide.core.errors import (
    GuidelineError,
    InvalidRequestError,
    NotFoundError,
    NotSupportedError,
    RequestCancelledError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (InvalidRequestError, 400),
    (NotFoundError, 404),
    (NotSupportedError, 501),
    (RequestCancelledError, 503),
)


def error_response(error: GuidelineError) -> JSONResponse:
    for cls, status in _STATUS:
        if isinstance(error, cls):
            return JSONResponse({"error": str(error), "code": error.code}, status_code=status)
    logger.error("Request failed: %s", error)
    return JSONResponse({"error": "internal server error", "code": error.code}, status_code=500)


def bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message, "code": "invalid_request"}, status_code=400)
