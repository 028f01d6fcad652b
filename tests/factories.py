# ruff: noqa: S311 D101 D106
"""Factories for creating test domain models."""

import random

import factory
from faker import Faker

from app.domain.books.models import AUTHORS, GENRES, MAX_YEAR, MIN_YEAR, Book

fake = Faker()


class BookFactory(factory.Factory):
    class Meta:
        model = Book

    id = factory.Sequence(lambda n: n + 1)
    title = factory.LazyFunction(lambda: fake.sentence(nb_words=3).replace(",", ""))
    author = factory.LazyFunction(lambda: random.choice(AUTHORS))
    genre = factory.LazyFunction(lambda: random.choice(GENRES))
    year = factory.LazyFunction(lambda: random.randint(MIN_YEAR, MAX_YEAR))
    price = factory.LazyFunction(lambda: random.randrange(100_00, 1000_00) / 100)
