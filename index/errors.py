class IndexStoreError(Exception):
    """Base exception for search index storage errors."""


class NotFoundError(IndexStoreError):
    """No usable count is stored for a (url, term) pair."""

    def __init__(self, url: str, term: str, reason: str = "no count stored"):
        super().__init__(f"{reason} for term {term!r} at {url!r}")
        self.url = url
        self.term = term


class StoreUnavailableError(IndexStoreError):
    """Redis could not be reached or did not answer in time."""
