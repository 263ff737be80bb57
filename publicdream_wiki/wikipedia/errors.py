"""Errors raised while talking to the MediaWiki API."""


class FetchError(Exception):
    """Base exception for failed Wikipedia API requests."""

    pass


class HttpStatusError(FetchError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Wikipedia API error: {status_code} ({url})")


class ParseError(FetchError):
    """Raised when the response body is not valid JSON."""

    pass


class NetworkError(FetchError):
    """Raised when the request never got a response (DNS, connect, read)."""

    pass
