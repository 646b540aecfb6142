import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movie_reviews.exceptions.auth import InvalidCredentialsException, UserAlreadyExistsException
from movie_reviews.exceptions.repository import (
    ConnectionException,
    EntityNotFoundException,
    DuplicateEntityException,
    InvalidEntityDataException
)
from movie_reviews.exceptions.service import IdAllocationException, UpstreamException
from movie_reviews.exceptions.validation import ValidationException
from movie_reviews.validation import INVALID_FIELDS_MESSAGE

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"
UPSTREAM_ERROR_MESSAGE = "Upstream service unavailable"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


def to_http_exception(e: Exception, not_found_message: str = "Not found",
                      conflict_message: str = "Resource already exists") -> HTTPException:
    """Map a core exception to the status/body pair returned to the caller.

    Bodies carry only fixed messages or validation field lists; exception
    text is logged, never returned.
    """
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, ValidationException):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())
    if isinstance(e, InvalidCredentialsException):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS_MESSAGE)
    if isinstance(e, EntityNotFoundException):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_message)
    if isinstance(e, (UserAlreadyExistsException, DuplicateEntityException, IdAllocationException)):
        logger.info(f"Conflict: {str(e)}")
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict_message)
    if isinstance(e, (UpstreamException, ConnectionException)):
        logger.error(f"Upstream failure: {str(e)}")
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UPSTREAM_ERROR_MESSAGE)
    if isinstance(e, InvalidEntityDataException):
        logger.error(f"Corrupted stored data: {str(e)}")
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)

    logger.error(f"Unexpected error: {type(e).__name__}: {str(e)}", exc_info=e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI's own parsing failures (e.g. malformed JSON) as 400s."""
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body",
         "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"message": INVALID_FIELDS_MESSAGE, "errors": errors}}
    )
