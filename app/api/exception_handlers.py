"""Exception handlers for the book platform APIs."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError

from app.api.responses import APIExceptionContent, APIExceptionResponse
from app.core.exceptions import InvalidQueryError


async def invalid_query_exception_handler(
    _request: Request,
    exception: InvalidQueryError,
) -> APIExceptionResponse:
    """Return bad request response when a search query is refused."""
    return APIExceptionResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=APIExceptionContent(detail=exception.detail),
    )


async def request_validation_exception_handler(
    _request: Request,
    exception: RequestValidationError,
) -> APIExceptionResponse:
    """
    Return bad request response when request parameters fail validation.

    Clients treat every 4xx as final, so a malformed query is reported as a plain
    400 rather than FastAPI's default 422 with the full error structure.
    """
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exception.errors()
    )
    return APIExceptionResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=APIExceptionContent(detail=detail),
    )
