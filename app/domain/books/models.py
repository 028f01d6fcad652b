"""Models associated with books."""

from typing import Final

from pydantic import ConfigDict, Field

from app.domain.base import DomainBaseModel, JsonlMixin

AUTHORS: Final[tuple[str, ...]] = (
    "Толстой Л.Н.",
    "Достоевский Ф.М.",
    "Пушкин А.С.",
    "Чехов А.П.",
    "Булгаков М.А.",
    "Тургенев И.С.",
    "Гоголь Н.В.",
    "Лермонтов М.Ю.",
    "Горький М.",
    "Шолохов М.А.",
)

GENRES: Final[tuple[str, ...]] = (
    "Роман",
    "Повесть",
    "Рассказ",
    "Драма",
    "Поэма",
)

MIN_YEAR: Final = 1800
MAX_YEAR: Final = 2024
MIN_PRICE: Final = 100.0
MAX_PRICE: Final = 1000.0


class Book(DomainBaseModel, JsonlMixin):
    """
    A single book of the synthetic corpus.

    This is also the wire representation streamed between the book service and
    its clients, one JSON object per line.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0, description="Sequential identifier within a corpus.")
    title: str = Field(description="The title of the book.")
    author: str = Field(description="The author of the book.")
    genre: str = Field(description="The literary genre of the book.")
    year: int = Field(description="The year the book was published.")
    price: float = Field(
        gt=0, description="The price of the book, with two decimal places."
    )
