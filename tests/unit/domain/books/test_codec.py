"""Unit tests for the flat text book codec."""

import pytest

from app.core.exceptions import BookDecodeError
from app.domain.books.codec import decode_book, encode_book, round_trip
from app.domain.books.corpus import generate_corpus
from app.domain.books.models import Book
from tests.factories import BookFactory


def test_encode_book_field_order_and_price_precision():
    book = Book(
        id=7,
        title="Книга №7",
        author="Чехов А.П.",
        genre="Драма",
        year=1901,
        price=250.5,
    )

    assert encode_book(book) == "7,Книга №7,Чехов А.П.,Драма,1901,250.50"


def test_decode_book_parses_fields():
    book = decode_book("12,Книга №12,Гоголь Н.В.,Повесть,1835,999.99")

    assert book == Book(
        id=12,
        title="Книга №12",
        author="Гоголь Н.В.",
        genre="Повесть",
        year=1835,
        price=999.99,
    )


def test_round_trip_preserves_generated_books():
    corpus = generate_corpus(seed=42, size=300)

    assert [round_trip(book) for book in corpus] == list(corpus)


def test_round_trip_preserves_comma_free_books():
    for book in BookFactory.build_batch(50):
        assert decode_book(encode_book(book)) == book


def test_comma_in_text_field_is_a_decode_error():
    book = BookFactory.build(title="War, and Peace")

    with pytest.raises(BookDecodeError) as excinfo:
        round_trip(book)

    assert excinfo.value.record == encode_book(book)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "1,Книга №1,Пушкин А.С.,Поэма,1820",
        "x,Книга №1,Пушкин А.С.,Поэма,1820,100.00",
        "1,Книга №1,Пушкин А.С.,Поэма,eighteen,100.00",
        "1,Книга №1,Пушкин А.С.,Поэма,1820,free",
        "0,Книга №0,Пушкин А.С.,Поэма,1820,100.00",
    ],
)
def test_malformed_lines_raise(line):
    with pytest.raises(BookDecodeError):
        decode_book(line)
