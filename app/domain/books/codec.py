"""Flat comma-delimited text encoding of books."""

from pydantic import ValidationError

from app.core.exceptions import BookDecodeError
from app.domain.books.models import Book

DELIMITER = ","
_FIELD_COUNT = 6


def encode_book(book: Book) -> str:
    """
    Encode a book as ``id,title,author,genre,year,price``.

    The price is written with two decimal places. No quoting is applied, so text
    fields containing the delimiter do not survive a round trip.
    """
    return DELIMITER.join(
        (
            str(book.id),
            book.title,
            book.author,
            book.genre,
            str(book.year),
            f"{book.price:.2f}",
        )
    )


def decode_book(line: str) -> Book:
    """Decode a line produced by :func:`encode_book`."""
    parts = line.split(DELIMITER)
    if len(parts) != _FIELD_COUNT:
        msg = f"Expected {_FIELD_COUNT} fields, got {len(parts)}."
        raise BookDecodeError(msg, record=line)

    book_id, title, author, genre, year, price = parts
    try:
        return Book(
            id=int(book_id),
            title=title,
            author=author,
            genre=genre,
            year=int(year),
            price=float(price),
        )
    except (ValueError, ValidationError) as exc:
        msg = f"Malformed book record: {exc}"
        raise BookDecodeError(msg, record=line) from exc


def round_trip(book: Book) -> Book:
    """Encode a book and decode it back."""
    return decode_book(encode_book(book))
