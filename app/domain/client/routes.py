"""Router exposing book searches made through the book service."""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import diagnostic_context
from app.api.responses import JSONL_MEDIA_TYPE, JsonlStreamingResponse, aiter_jsonl
from app.core.config import get_settings
from app.core.telemetry.context import DiagnosticContext
from app.domain.client.service import BookClientService

router = APIRouter(prefix="/api/client", tags=["client"])

AuthorQuery = Annotated[
    str, Query(description="Author name, or any part of it, in any case.")
]


@lru_cache(maxsize=1)
def book_client_service() -> BookClientService:
    """Return the book client service built from settings."""
    return BookClientService.from_config(get_settings().book_client)


@router.get(
    "/search",
    response_class=JsonlStreamingResponse,
    responses={200: {"content": {JSONL_MEDIA_TYPE: {}}}},
)
async def search_books(
    author: AuthorQuery,
    service: Annotated[BookClientService, Depends(book_client_service)],
    context: Annotated[DiagnosticContext, Depends(diagnostic_context)],
) -> JsonlStreamingResponse:
    """Stream the books of an author as newline-delimited JSON."""
    return JsonlStreamingResponse(
        aiter_jsonl(service.search_books_by_author(author, context))
    )


@router.get("/count")
async def count_books(
    author: AuthorQuery,
    service: Annotated[BookClientService, Depends(book_client_service)],
    context: Annotated[DiagnosticContext, Depends(diagnostic_context)],
) -> int:
    """Count the books of an author."""
    return await service.count_books_by_author(author, context)


@router.get(
    "/search-by-year",
    response_class=JsonlStreamingResponse,
    responses={200: {"content": {JSONL_MEDIA_TYPE: {}}}},
)
async def search_books_by_year(
    author: AuthorQuery,
    service: Annotated[BookClientService, Depends(book_client_service)],
    context: Annotated[DiagnosticContext, Depends(diagnostic_context)],
    min_year: Annotated[
        int,
        Query(alias="minYear", description="Earliest publication year to include."),
    ] = 1900,
) -> JsonlStreamingResponse:
    """Stream the books of an author published in or after ``minYear``."""
    books = service.search_books_by_author_and_year(author, min_year, context)
    return JsonlStreamingResponse(aiter_jsonl(books))
