"""Case-insensitive author matching."""


class AuthorMatcher:
    """
    Predicate matching authors which contain the query, ignoring case.

    The query is a literal string: characters with a meaning in regular
    expressions match only themselves. Matching is unanchored and an empty
    query matches every author.
    """

    def __init__(self, query: str) -> None:
        """Build the matcher for a query."""
        self.query = query
        self._needle = query.casefold()

    def matches(self, author: str) -> bool:
        """Return True if the author contains the query."""
        return self._needle in author.casefold()

    def __repr__(self) -> str:
        """Return a readable representation of the matcher."""
        return f"{type(self).__name__}({self.query!r})"
