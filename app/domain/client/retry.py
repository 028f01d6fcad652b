"""Retry policy and per-call retry state of client searches."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from app.core.exceptions import FailureKind, RemoteSearchError


class SearchState(StrEnum):
    """
    The state of a logical search against the book service.

    **Allowed values**:
    - `attempting`: An attempt is running, or about to after a backoff.
    - `success`: The remote stream completed.
    - `failed_terminal`: The book service refused the request, or answered with
      something that cannot be trusted.
    - `failed_exhausted`: Transient failures used up every retry.
    """

    ATTEMPTING = auto()
    SUCCESS = auto()
    FAILED_TERMINAL = auto()
    FAILED_EXHAUSTED = auto()

    @property
    def is_terminal(self) -> bool:
        """Return True if no further attempts will be made."""
        return self is not SearchState.ATTEMPTING


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """
    Bounded exponential backoff without jitter.

    The delay before the retry following attempt ``n`` (zero-based) is
    ``base_delay * multiplier ** n``.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0

    def __post_init__(self) -> None:
        """Validate the policy."""
        if self.max_retries < 0:
            msg = "max_retries must not be negative."
            raise ValueError(msg)
        if self.base_delay < 0:
            msg = "base_delay must not be negative."
            raise ValueError(msg)

    @property
    def max_attempts(self) -> int:
        """Return the total number of attempts, the first one included."""
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Return the delay in seconds before retrying after ``attempt`` failed."""
        return self.base_delay * self.multiplier**attempt

    def can_retry(self, attempt: int) -> bool:
        """Return True if ``attempt`` may be followed by another one."""
        return attempt < self.max_retries


@dataclass(slots=True)
class RetryState:
    """State machine of a single logical search, discarded when the call ends."""

    policy: ExponentialBackoff
    attempt: int = 0
    state: SearchState = SearchState.ATTEMPTING
    last_failure: RemoteSearchError | None = None
    next_delay: float | None = None
    delays: list[float] = field(default_factory=list)

    def record_failure(self, failure: RemoteSearchError) -> SearchState:
        """
        Move on from a failed attempt.

        Retryable failures keep the search attempting, with ``next_delay`` set,
        until the policy runs out of retries. Non-retryable and fatal failures end
        the search straight away.
        """
        self._ensure_attempting()
        self.last_failure = failure
        self.next_delay = None
        if failure.kind is not FailureKind.RETRYABLE:
            self.state = SearchState.FAILED_TERMINAL
        elif self.policy.can_retry(self.attempt):
            self.next_delay = self.policy.delay_for(self.attempt)
        else:
            self.state = SearchState.FAILED_EXHAUSTED
        return self.state

    def record_success(self) -> SearchState:
        """End the search successfully."""
        self._ensure_attempting()
        self.state = SearchState.SUCCESS
        self.next_delay = None
        return self.state

    def advance(self) -> int:
        """Start the next attempt once the backoff is over."""
        self._ensure_attempting()
        if self.next_delay is None:
            msg = "No retry is due."
            raise RuntimeError(msg)
        self.delays.append(self.next_delay)
        self.next_delay = None
        self.attempt += 1
        return self.attempt

    @property
    def attempts_made(self) -> int:
        """Return how many attempts were started."""
        return self.attempt + 1

    def _ensure_attempting(self) -> None:
        if self.state.is_terminal:
            msg = f"Search already ended as {self.state}."
            raise RuntimeError(msg)
