"""Router for searching books in the corpus."""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import diagnostic_context
from app.api.responses import JSONL_MEDIA_TYPE, JsonlStreamingResponse, iter_jsonl
from app.core.config import get_settings
from app.core.exceptions import InvalidQueryError
from app.core.telemetry.context import DiagnosticContext
from app.domain.books.service import BookSearchService

router = APIRouter(prefix="/api/books", tags=["books"])


@lru_cache(maxsize=1)
def book_search_service() -> BookSearchService:
    """Return the book search service, shared so an enabled corpus cache is too."""
    return BookSearchService.from_config(get_settings().book_service)


def author_query(
    author: Annotated[
        str, Query(description="Author name, or any part of it, in any case.")
    ],
) -> str:
    """Validate the author query before any streaming starts."""
    max_length = get_settings().book_service.max_query_length
    if len(author) > max_length:
        msg = f"Author query must be at most {max_length} characters."
        raise InvalidQueryError(msg)
    return author


@router.get(
    "/search",
    response_class=JsonlStreamingResponse,
    responses={200: {"content": {JSONL_MEDIA_TYPE: {}}}},
)
def search_books_by_author(
    author: Annotated[str, Depends(author_query)],
    service: Annotated[BookSearchService, Depends(book_search_service)],
    context: Annotated[DiagnosticContext, Depends(diagnostic_context)],
) -> JsonlStreamingResponse:
    """
    Stream the books whose author contains the query, ignoring case.

    Books are written as newline-delimited JSON in corpus order, as soon as they
    are found.
    """
    books = service.search_books_by_author(author, context)
    return JsonlStreamingResponse(
        iter_jsonl(books, batch_size=get_settings().book_service.stream_batch_size)
    )
