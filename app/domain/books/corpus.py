"""Deterministic generation of the synthetic book corpus."""

import random
import threading

from cachetools import Cache

from app.domain.books.models import (
    AUTHORS,
    GENRES,
    MAX_PRICE,
    MAX_YEAR,
    MIN_PRICE,
    MIN_YEAR,
    Book,
)

# Prices are drawn in whole cents so they survive the two-decimal text encoding.
_MIN_PRICE_CENTS = round(MIN_PRICE * 100)
_MAX_PRICE_CENTS = round(MAX_PRICE * 100)

Corpus = tuple[Book, ...]


def generate_corpus(seed: int, size: int) -> Corpus:
    """
    Generate ``size`` books from a sequence seeded with ``seed``.

    Every call seeds its own generator, so the same seed and size always give the
    same corpus and calls never influence each other.
    """
    rng = random.Random(seed)  # noqa: S311
    books = []
    for book_id in range(1, size + 1):
        author = AUTHORS[rng.randrange(len(AUTHORS))]
        genre = GENRES[rng.randrange(len(GENRES))]
        year = rng.randint(MIN_YEAR, MAX_YEAR)
        price = rng.randrange(_MIN_PRICE_CENTS, _MAX_PRICE_CENTS) / 100
        books.append(
            Book(
                id=book_id,
                title=f"Книга №{book_id}",
                author=author,
                genre=genre,
                year=year,
                price=price,
            )
        )
    return tuple(books)


class CorpusSource:
    """
    Hands out corpora to searches.

    With caching disabled every call generates a fresh corpus. With caching
    enabled the one corpus of this source is kept after the first call, which
    changes nothing a caller can observe as corpora are immutable and generation
    is deterministic. Searches run in worker threads, so the lock makes concurrent
    first calls wait for a single generation.
    """

    def __init__(self, seed: int, size: int, *, cache_enabled: bool = False) -> None:
        """Initialize the source for a given seed and corpus size."""
        self.seed = seed
        self.size = size
        self._cache: Cache[tuple[int, int], Corpus] | None = (
            Cache(maxsize=1) if cache_enabled else None
        )
        self._cache_lock = threading.Lock()

    @property
    def cache_enabled(self) -> bool:
        """Return True if corpora are kept between calls."""
        return self._cache is not None

    def get(self) -> tuple[Corpus, bool]:
        """Return the corpus and whether it came from the cache."""
        if self._cache is None:
            return generate_corpus(self.seed, self.size), False

        key = (self.seed, self.size)
        with self._cache_lock:
            corpus = self._cache.get(key)
            if corpus is not None:
                return corpus, True
            corpus = generate_corpus(self.seed, self.size)
            self._cache[key] = corpus
            return corpus, False
