"""Custom exceptions for the book platform."""

from enum import StrEnum, auto

from opentelemetry.trace import StatusCode

from app.core.telemetry.attributes import set_span_status


class BookPlatformError(Exception):
    """Base class for all exceptions in the book platform."""

    def __init__(self, detail: str | None = None, *args: object) -> None:
        """
        Initialize the BookPlatformError.

        Args:
            detail (str | None): The detail message for the exception.
            *args: Additional arguments for the exception.

        """
        set_span_status(
            StatusCode.ERROR,
            detail=detail,
            exception=self,
        )
        self.detail = detail or "No detail provided."
        super().__init__(detail, *args)


class InvalidQueryError(BookPlatformError):
    """Exception for a search query the book service refuses to run."""

    def __init__(self, detail: str, *args: object) -> None:
        """
        Initialize the InvalidQueryError exception.

        Args:
            detail (str): The detail message for the exception.
            *args: Additional arguments for the exception.

        """
        super().__init__(detail, *args)


class BookDecodeError(BookPlatformError):
    """
    Exception for a book record which cannot be decoded.

    Raised both for flat text records in the codec round trip and for malformed
    JSON lines received from the book service. Never retried.
    """

    def __init__(self, detail: str, record: str, *args: object) -> None:
        """
        Initialize the BookDecodeError exception.

        Args:
            detail (str): The detail message for the exception.
            record (str): The raw record which failed to decode.
            *args: Additional arguments for the exception.

        """
        self.record = record
        super().__init__(detail, *args)


class FailureKind(StrEnum):
    """
    Classification of a failed call to the book service.

    **Allowed values**:
    - `retryable`: Transient failure, eg timeout, connection error or 5xx.
    - `non_retryable`: The service rejected the request, eg 4xx.
    - `fatal`: The response cannot be trusted, eg a malformed record.
    """

    RETRYABLE = auto()
    NON_RETRYABLE = auto()
    FATAL = auto()


class RemoteSearchError(BookPlatformError):
    """Exception for a failed search against the book service."""

    def __init__(
        self,
        detail: str,
        kind: FailureKind,
        status_code: int | None = None,
        *args: object,
    ) -> None:
        """
        Initialize the RemoteSearchError exception.

        Args:
            detail (str): The detail message for the exception.
            kind (FailureKind): How the retry loop should treat the failure.
            status_code (int | None): The HTTP status, if a response was received.
            *args: Additional arguments for the exception.

        """
        self.kind = kind
        self.status_code = status_code
        super().__init__(detail, *args)
