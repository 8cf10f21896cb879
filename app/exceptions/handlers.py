import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .custom import InvalidRequestError

logger = logging.getLogger(__name__)


async def invalid_request_error_handler(_request: Request, exc: InvalidRequestError) -> JSONResponse:
    logger.warning("Rejected request: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning("Malformed request body: %s", errors)
    return JSONResponse(
        status_code=400,
        content={"detail": f"Malformed request ({location or 'body'}): {message}"},
    )
