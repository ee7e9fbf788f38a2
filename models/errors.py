"""
Errors raised by the fetch layer.

A FetchError (or RateLimited) ends the scan of the current role/portal pair
only. DetailFetchError is confined to a single listing.
"""


class FetchError(Exception):
    """Network failure, timeout or 5xx response for a page request."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} for {url}")
        self.url = url
        self.reason = reason


class RateLimited(FetchError):
    """The portal kept answering 403 after the backoff retry."""

    def __init__(self, url: str):
        super().__init__(url, "HTTP 403 after retry")


class DetailFetchError(FetchError):
    """A listing's own page could not be fetched."""
