from __future__ import annotations

from typing import Optional

import requests


class RedditError(Exception):
    """
    Base class for every error raised by this package.

    `response` holds the HTTP response when the request reached the
    remote service, so callers can inspect the status code and body even
    when decoding failed. It is None for errors raised before sending.
    """

    def __init__(
        self, message: str, response: Optional[requests.Response] = None
    ) -> None:
        super().__init__(message)
        self.response = response


class ValidationError(RedditError):
    """Required input was missing; no request was sent."""


class RequestError(RedditError):
    """The request (path, options or form) could not be constructed."""


class TransportError(RedditError):
    """Network-level failure while talking to the remote service."""


class DeadlineExceeded(TransportError):
    """The caller's timeout expired before the response arrived."""


class APIError(RedditError):
    """The remote service answered with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response: Optional[requests.Response] = None,
    ) -> None:
        super().__init__(message, response=response)
        self.status_code = status_code


class DecodeError(RedditError):
    """The response body did not match the expected envelope shape."""
