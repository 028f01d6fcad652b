"""The service for searching books through the remote book service."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import aclosing

from opentelemetry import trace

from app.core.config import BookClientConfig
from app.core.exceptions import FailureKind, RemoteSearchError
from app.core.telemetry.attributes import Attributes, trace_attribute
from app.core.telemetry.context import DiagnosticContext
from app.domain.books.models import Book
from app.domain.client.retry import ExponentialBackoff, RetryState, SearchState
from app.domain.client.transport import BookServiceTransport

tracer = trace.get_tracer(__name__)

Sleep = Callable[[float], Awaitable[object]]


class BookClientService:
    """
    The service which searches books on the book service.

    Transient failures are retried with exponential backoff. When the book
    service refuses a query, or retries run out, the search ends quietly with
    whatever was received so far, and the reason is only logged.
    """

    def __init__(
        self,
        transport: BookServiceTransport,
        backoff: ExponentialBackoff,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the service with its transport and retry policy."""
        self.transport = transport
        self.backoff = backoff
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: BookClientConfig) -> "BookClientService":
        """Build the service from the book client configuration."""
        return cls(
            transport=BookServiceTransport(
                base_url=str(config.book_service_url),
                timeout=config.timeout_seconds,
            ),
            backoff=ExponentialBackoff(
                max_retries=config.max_retries,
                base_delay=config.retry_delay_seconds,
            ),
        )

    async def search_books_by_author(
        self, author: str, context: DiagnosticContext
    ) -> AsyncIterator[Book]:
        """
        Stream the books whose author contains ``author``.

        Books are yielded as they arrive from the book service, in corpus order.
        If an attempt fails after some books were yielded, the next attempt skips
        that many books, so nothing is yielded twice.

        :raises RemoteSearchError: Only for fatal failures, eg a malformed book.
        """
        logger = context.bind(author_query=author)
        retry = RetryState(self.backoff)
        delivered = 0
        logger.info(
            "Searching books on the book service",
            max_attempts=self.backoff.max_attempts,
        )

        while True:
            to_skip = delivered
            logger.debug("Search attempt", attempt=retry.attempt, skip=to_skip)
            try:
                async with aclosing(
                    self.transport.stream_books(author, context)
                ) as books:
                    async for book in books:
                        if to_skip:
                            to_skip -= 1
                            continue
                        delivered += 1
                        yield book
            except RemoteSearchError as failure:
                state = retry.record_failure(failure)
                if state is SearchState.ATTEMPTING:
                    logger.warning(
                        "Retrying search",
                        retry=retry.attempt + 1,
                        delay_s=retry.next_delay,
                        reason=failure.detail,
                        status_code=failure.status_code,
                    )
                    await self._sleep(retry.next_delay)
                    retry.advance()
                    continue

                if failure.kind is FailureKind.FATAL:
                    logger.error(
                        "Search failed on an unusable response",
                        reason=failure.detail,
                        attempts=retry.attempts_made,
                    )
                    raise

                logger.error(
                    "Search failed, no more books will be returned",
                    outcome=state,
                    reason=failure.detail,
                    status_code=failure.status_code,
                    attempts=retry.attempts_made,
                    delivered=delivered,
                )
                return

            retry.record_success()
            logger.info(
                "Received all books from the book service",
                delivered=delivered,
                attempts=retry.attempts_made,
            )
            return

    async def count_books_by_author(
        self, author: str, context: DiagnosticContext
    ) -> int:
        """Count the books streamed for ``author``."""
        with tracer.start_as_current_span("Count books by author"):
            trace_attribute(Attributes.REQUEST_ID, context.request_id)
            trace_attribute(Attributes.SEARCH_AUTHOR_QUERY, author)
            count = 0
            async with aclosing(self.search_books_by_author(author, context)) as books:
                async for _ in books:
                    count += 1
            trace_attribute(Attributes.SEARCH_RESULT_COUNT, count)
            context.logger.info("Counted books", author_query=author, count=count)
            return count

    async def search_books_by_author_and_year(
        self, author: str, min_year: int, context: DiagnosticContext
    ) -> AsyncIterator[Book]:
        """Stream the books for ``author`` published in ``min_year`` or later."""
        logger = context.bind(author_query=author, min_year=min_year)
        async with aclosing(self.search_books_by_author(author, context)) as books:
            async for book in books:
                if book.year >= min_year:
                    logger.debug("Book matches year filter", title=book.title)
                    yield book
