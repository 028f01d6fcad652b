"""Setup fixtures for all tests."""

import pytest

from app.core.telemetry.context import DiagnosticContext
from app.domain.books.corpus import Corpus, CorpusSource
from app.domain.books.models import Book
from app.domain.books.service import BookSearchService
from tests.client_utils import RecordingSleep
from tests.factories import BookFactory

SMALL_CORPUS_SIZE = 2_000
SEED = 42


class StaticCorpusSource(CorpusSource):
    """Corpus source handing out a fixed corpus."""

    def __init__(self, corpus: Corpus) -> None:
        super().__init__(seed=SEED, size=len(corpus))
        self.corpus = corpus

    def get(self) -> tuple[Corpus, bool]:
        return self.corpus, False


@pytest.fixture
def context() -> DiagnosticContext:
    """Return a diagnostic context for a test request."""
    return DiagnosticContext(request_id="test")


@pytest.fixture
def book_search_service() -> BookSearchService:
    """Return a book search service over a small corpus."""
    return BookSearchService(CorpusSource(seed=SEED, size=SMALL_CORPUS_SIZE))


@pytest.fixture
def unencodable_corpus() -> list[Book]:
    """Return a corpus whose second book does not survive the text round trip."""
    return [
        BookFactory.build(id=1, author="Толстой Л.Н."),
        BookFactory.build(id=2, author="Толстой Л.Н.", title="Война, и мир"),
        BookFactory.build(id=3, author="Толстой Л.Н."),
    ]


@pytest.fixture
def broken_search_service(unencodable_corpus: list[Book]) -> BookSearchService:
    """Return a book search service which fails after its first match."""
    return BookSearchService(StaticCorpusSource(tuple(unencodable_corpus)))


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Return a sleep function which records its delays."""
    return RecordingSleep()
