"""Unit tests for author matching."""

import pytest

from app.domain.books.matcher import AuthorMatcher
from app.domain.books.models import AUTHORS


@pytest.mark.parametrize(
    ("query", "author", "expected"),
    [
        ("Толстой", "Толстой Л.Н.", True),
        ("толстой", "Толстой Л.Н.", True),
        ("ТОЛСТОЙ", "Толстой Л.Н.", True),
        ("сто", "Толстой Л.Н.", True),
        ("Л.Н.", "Толстой Л.Н.", True),
        ("Толстой Л.Н.", "Толстой Л.Н.", True),
        ("Толстой Л.Н. ", "Толстой Л.Н.", False),
        ("Толстый", "Толстой Л.Н.", False),
        ("Несуществующий Автор", "Толстой Л.Н.", False),
        ("", "Толстой Л.Н.", True),
    ],
)
def test_matches_case_insensitive_substring(query, author, expected):
    assert AuthorMatcher(query).matches(author) is expected


@pytest.mark.parametrize(
    "query", [".*", "(", "[Тт]олстой", "Толст.й", "a+", "\\", "Л?Н", "^Толстой$"]
)
def test_pattern_characters_are_literal(query):
    matcher = AuthorMatcher(query)

    assert not any(matcher.matches(author) for author in AUTHORS)


def test_pattern_characters_match_themselves():
    assert AuthorMatcher("a.*b").matches("xxA.*Byy")
    assert not AuthorMatcher("a.*b").matches("aXXXb")


def test_dot_matches_only_dots():
    matching = [author for author in AUTHORS if AuthorMatcher("м.").matches(author)]

    assert matching == [
        "Достоевский Ф.М.",
        "Булгаков М.А.",
        "Лермонтов М.Ю.",
        "Горький М.",
        "Шолохов М.А.",
    ]


def test_empty_query_matches_everything():
    matcher = AuthorMatcher("")

    assert all(matcher.matches(author) for author in AUTHORS)
    assert matcher.matches("")


def test_repr_shows_query():
    assert repr(AuthorMatcher("Гоголь")) == "AuthorMatcher('Гоголь')"
