"""Standard API response models."""

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from itertools import batched

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from app.core.exceptions import BookPlatformError
from app.core.telemetry.logger import get_logger
from app.domain.base import JsonlMixin

logger = get_logger(__name__)

JSONL_MEDIA_TYPE = "application/x-ndjson"


class APIExceptionContent(BaseModel):
    """Return model for API exception content."""

    detail: str = Field(description="Details about the error.")


class APIExceptionResponse(JSONResponse):
    """Return model for API 4XX codes."""

    def __init__(self, status_code: int, content: APIExceptionContent) -> None:
        """Initialize the response with JSON content."""
        super().__init__(status_code=status_code, content=jsonable_encoder(content))


class StreamErrorRecord(APIExceptionContent, JsonlMixin):
    """
    Last line of a JSON lines stream which failed after the response started.

    The status code has already been sent by then, so the failure travels in the
    body. Readers must treat it as the end of an unusable stream.
    """


def _until_error(items: Iterable[JsonlMixin]) -> Iterator[JsonlMixin]:
    try:
        yield from items
    except BookPlatformError as exc:
        logger.exception("Stream failed after the response started")
        yield StreamErrorRecord(detail=exc.detail)


def iter_jsonl(items: Iterable[JsonlMixin], batch_size: int) -> Iterator[str]:
    """
    Render items as JSON lines, ``batch_size`` lines per chunk.

    Starlette pulls each chunk of a synchronous iterator in its threadpool, so
    batching keeps the number of thread hops down on large results. A platform
    error raised by ``items`` ends the stream with a :class:`StreamErrorRecord`.
    """
    for batch in batched(_until_error(items), batch_size):
        yield "".join(item.to_jsonl() + "\n" for item in batch)


async def aiter_jsonl(items: AsyncIterable[JsonlMixin]) -> AsyncIterator[str]:
    """Render items as JSON lines, one line per chunk."""
    async for item in items:
        yield item.to_jsonl() + "\n"


class JsonlStreamingResponse(StreamingResponse):
    """Streaming response of newline-delimited JSON."""

    media_type = JSONL_MEDIA_TYPE
