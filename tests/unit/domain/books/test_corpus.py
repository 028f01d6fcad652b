"""Unit tests for corpus generation."""

import threading
from concurrent.futures import ThreadPoolExecutor

from app.domain.books import corpus as corpus_module
from app.domain.books.corpus import CorpusSource, generate_corpus
from app.domain.books.models import (
    AUTHORS,
    GENRES,
    MAX_PRICE,
    MAX_YEAR,
    MIN_PRICE,
    MIN_YEAR,
)


def test_same_seed_gives_identical_corpus():
    first = generate_corpus(seed=42, size=500)
    second = generate_corpus(seed=42, size=500)

    assert first == second


def test_different_seed_gives_different_corpus():
    assert generate_corpus(seed=42, size=100) != generate_corpus(seed=7, size=100)


def test_ids_are_sequential_from_one():
    corpus = generate_corpus(seed=42, size=250)

    assert [book.id for book in corpus] == list(range(1, 251))
    assert corpus[0].title == "Книга №1"
    assert corpus[-1].title == "Книга №250"


def test_fields_stay_within_bounds():
    corpus = generate_corpus(seed=42, size=1_000)

    for book in corpus:
        assert book.author in AUTHORS
        assert book.genre in GENRES
        assert MIN_YEAR <= book.year <= MAX_YEAR
        assert MIN_PRICE <= book.price < MAX_PRICE
        assert round(book.price, 2) == book.price
        assert "," not in book.title


def test_every_author_is_drawn():
    corpus = generate_corpus(seed=42, size=1_000)

    assert {book.author for book in corpus} == set(AUTHORS)


def test_empty_corpus():
    assert generate_corpus(seed=42, size=0) == ()


def test_corpus_source_without_cache_regenerates():
    source = CorpusSource(seed=42, size=50)

    first, first_hit = source.get()
    second, second_hit = source.get()

    assert not source.cache_enabled
    assert first == second
    assert first is not second
    assert (first_hit, second_hit) == (False, False)


def test_corpus_source_with_cache_reuses_corpus():
    source = CorpusSource(seed=42, size=50, cache_enabled=True)

    first, first_hit = source.get()
    second, second_hit = source.get()

    assert source.cache_enabled
    assert first is second
    assert (first_hit, second_hit) == (False, True)
    assert first == generate_corpus(seed=42, size=50)


def test_corpus_source_cache_generates_once_under_concurrent_calls(monkeypatch):
    generations = []
    barrier = threading.Barrier(8)

    def counting_generate(seed, size):
        generations.append((seed, size))
        return real_generate(seed, size)

    real_generate = corpus_module.generate_corpus
    monkeypatch.setattr(corpus_module, "generate_corpus", counting_generate)
    source = CorpusSource(seed=42, size=2_000, cache_enabled=True)

    def get_after_barrier():
        barrier.wait()
        return source.get()

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: get_after_barrier(), range(8)))

    assert generations == [(42, 2_000)]
    assert sorted(hit for _, hit in results) == [False] + [True] * 7
    assert all(corpus is results[0][0] for corpus, _ in results)
