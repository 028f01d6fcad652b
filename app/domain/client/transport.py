"""Streaming transport to the book service, with failure classification."""

from collections.abc import AsyncIterator

import httpx
from fastapi import status
from pydantic import ValidationError

from app.api.responses import StreamErrorRecord
from app.core.exceptions import BookDecodeError, FailureKind, RemoteSearchError
from app.core.telemetry.context import DiagnosticContext
from app.domain.books.models import Book

SEARCH_PATH = "/api/books/search"


def classify_status(status_code: int) -> FailureKind:
    """
    Classify an unsuccessful response status.

    The book service answers malformed queries with a 4xx, which will not get
    better by asking again. Anything else unexpected is treated as transient.
    """
    if (
        status.HTTP_400_BAD_REQUEST
        <= status_code
        < status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        return FailureKind.NON_RETRYABLE
    return FailureKind.RETRYABLE


def classify_exception(exception: BaseException) -> FailureKind:
    """Classify an exception raised while talking to the book service."""
    if isinstance(exception, BookDecodeError):
        return FailureKind.FATAL
    if isinstance(exception, httpx.RequestError):
        # Timeouts, refused connections and connections dropped mid-stream.
        return FailureKind.RETRYABLE
    return FailureKind.FATAL


def decode_book_line(line: str) -> Book:
    """
    Decode one JSON line of the search stream.

    A :class:`StreamErrorRecord` in place of a book means the book service failed
    after it started responding, and is reported as undecodable too.
    """
    try:
        return Book.from_jsonl(line)
    except ValidationError as exc:
        try:
            error = StreamErrorRecord.from_jsonl(line)
        except ValidationError:
            msg = f"Malformed book in search stream: {exc}"
        else:
            msg = f"Book service failed mid-stream: {error.detail}"
        raise BookDecodeError(msg, record=line) from exc


class BookServiceTransport:
    """
    Performs single search attempts against the book service.

    Every failure leaves this class as a :class:`RemoteSearchError` tagged with a
    :class:`FailureKind`, so callers decide what to do from the tag alone.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        :param base_url: The base URL of the book service.
        :type base_url: str
        :param timeout: The connect, read, write and pool timeout in seconds.
        :type timeout: float
        :param transport: An optional httpx transport, eg to call an ASGI app
            in-process.
        :type transport: httpx.AsyncBaseTransport | None
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout)
        self._transport = transport

    async def stream_books(
        self, author: str, context: DiagnosticContext
    ) -> AsyncIterator[Book]:
        """
        Stream the books matching ``author`` from a single request.

        Books are yielded as their lines arrive. Closing the iterator closes the
        response, which stops the book service producing further books.

        :param author: The author query, sent as is.
        :type author: str
        :param context: The diagnostic context of the logical search.
        :type context: DiagnosticContext
        :raises RemoteSearchError: If the request fails for any reason.
        :yield: The books of the response, in order.
        :rtype: AsyncIterator[Book]
        """
        logger = context.bind(base_url=self.base_url, author_query=author)
        logger.debug("Requesting books from book service", path=SEARCH_PATH)
        try:
            async with (
                httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    transport=self._transport,
                ) as client,
                client.stream(
                    "GET", SEARCH_PATH, params={"author": author}
                ) as response,
            ):
                logger.info(
                    "Book service responded",
                    method=response.request.method,
                    url=str(response.request.url),
                    status_code=response.status_code,
                )
                if response.status_code != status.HTTP_200_OK:
                    await response.aread()
                    raise RemoteSearchError(
                        detail=(
                            f"Book service returned HTTP {response.status_code}: "
                            f"{response.text}"
                        ),
                        kind=classify_status(response.status_code),
                        status_code=response.status_code,
                    )

                async for line in response.aiter_lines():
                    if line.strip():
                        yield decode_book_line(line)
        except BookDecodeError as exc:
            raise RemoteSearchError(
                detail=exc.detail, kind=classify_exception(exc)
            ) from exc
        except httpx.RequestError as exc:
            raise RemoteSearchError(
                detail=f"{type(exc).__name__}: {exc}",
                kind=classify_exception(exc),
            ) from exc
