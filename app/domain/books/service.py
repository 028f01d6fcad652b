"""Service for searching the book corpus."""

import time
from collections.abc import Iterator

from opentelemetry import trace

from app.core.config import BookServiceConfig
from app.core.telemetry.attributes import Attributes, trace_attribute
from app.core.telemetry.context import DiagnosticContext
from app.domain.books.codec import round_trip
from app.domain.books.corpus import Corpus, CorpusSource
from app.domain.books.matcher import AuthorMatcher
from app.domain.books.models import Book

tracer = trace.get_tracer(__name__)


def _elapsed_ms(started: float) -> int:
    return round((time.perf_counter() - started) * 1000)


class BookSearchService:
    """The service which searches books by author."""

    def __init__(self, corpus_source: CorpusSource) -> None:
        """Initialize the service with the source of corpora."""
        self.corpus_source = corpus_source

    @classmethod
    def from_config(cls, config: BookServiceConfig) -> "BookSearchService":
        """Build the service from the book service configuration."""
        return cls(
            CorpusSource(
                seed=config.corpus_seed,
                size=config.corpus_size,
                cache_enabled=config.corpus_cache_enabled,
            )
        )

    def _load_corpus(self, context: DiagnosticContext) -> Corpus:
        with tracer.start_as_current_span("Load corpus"):
            started = time.perf_counter()
            corpus, cache_hit = self.corpus_source.get()
            trace_attribute(Attributes.REQUEST_ID, context.request_id)
            trace_attribute(Attributes.CORPUS_SIZE, len(corpus))
            trace_attribute(Attributes.CORPUS_CACHE_HIT, cache_hit)
            context.logger.info(
                "Corpus ready",
                corpus_size=len(corpus),
                cache_hit=cache_hit,
                elapsed_ms=_elapsed_ms(started),
            )
            return corpus

    def search_books_by_author(
        self, author_query: str, context: DiagnosticContext
    ) -> Iterator[Book]:
        """
        Yield the books whose author contains ``author_query``, ignoring case.

        Every candidate passes through the text codec round trip before it is
        matched, and matches are yielded in corpus order as they are found. Nothing
        happens until the first item is requested, and closing the generator stops
        the scan.
        """
        logger = context.bind(author_query=author_query)
        logger.info("Starting book search")
        started = time.perf_counter()

        corpus = self._load_corpus(context)
        matcher = AuthorMatcher(author_query)
        found = 0
        scanned = 0
        try:
            for candidate in corpus:
                scanned += 1
                book = round_trip(candidate)
                if matcher.matches(book.author):
                    found += 1
                    yield book
        except GeneratorExit:
            logger.info(
                "Book search stopped by consumer",
                found=found,
                scanned=scanned,
                elapsed_ms=_elapsed_ms(started),
            )
            raise

        logger.info(
            "Book search finished", found=found, elapsed_ms=_elapsed_ms(started)
        )
