from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import (
    Any,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)
from urllib.parse import quote, urlencode

import requests

from ..config import ClientConfig, get_config
from ..errors import (
    APIError,
    DeadlineExceeded,
    DecodeError,
    RequestError,
    TransportError,
)
from ..models import ListOptions

logger = logging.getLogger(__name__)


Options = Union[ListOptions, Mapping[str, Any], None]


@runtime_checkable
class RedditClient(Protocol):
    """
    Transport seam consumed by SubredditService and PostFinder.

    Implementations build requests relative to the API root and send
    them, decoding the JSON body. They must not retry.
    """

    def new_request(
        self,
        method: str,
        path: str,
        form: Optional[Mapping[str, str]] = None,
    ) -> requests.PreparedRequest:
        raise NotImplementedError

    def do(
        self,
        request: requests.PreparedRequest,
        timeout: Optional[float] = None,
    ) -> Tuple[Any, requests.Response]:
        raise NotImplementedError


@dataclass
class RedditApiCredentials:
    """
    Simple container for Reddit API credentials.

    Only a ready-made bearer token is modelled; obtaining and refreshing
    it is left to the caller.
    """

    access_token: str
    user_agent: str

    @classmethod
    def from_env(cls) -> Optional["RedditApiCredentials"]:
        """
        Load credentials from environment variables.

        Expected variables:
        - REDDIT_ACCESS_TOKEN
        - REDDIT_USER_AGENT

        Returns None if any required variable is missing.
        """
        access_token = os.getenv("REDDIT_ACCESS_TOKEN")
        user_agent = os.getenv("REDDIT_USER_AGENT")

        if not (access_token and user_agent):
            return None

        return cls(access_token=access_token, user_agent=user_agent)


def _encode_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value"):  # Enum members
        value = value.value
    if isinstance(value, (str, int, float)):
        return str(value)
    raise RequestError(f"option {key!r}: cannot encode {type(value).__name__}")


def path_segment(name: str) -> str:
    """Escape `name` for use as one path segment (no "/", "?", "#" leaks)."""
    return quote(name, safe="")


def add_options(path: str, options: Options) -> str:
    """
    Append `options` to `path` as a query string.

    `options` is a ListOptions record (absent fields skipped) or a plain
    mapping (None values skipped). Returns `path` unchanged when nothing
    is left to encode.
    """
    if options is None:
        return path

    if isinstance(options, ListOptions):
        params: Mapping[str, Any] = options.to_params()
    elif isinstance(options, Mapping):
        params = {k: v for k, v in options.items() if v is not None}
    else:
        raise RequestError(
            f"options must be ListOptions or a mapping, got {type(options).__name__}"
        )

    if not params:
        return path

    query = urlencode([(k, _encode_value(k, v)) for k, v in params.items()])
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


class RedditApiClient(RedditClient):
    """
    Reddit JSON API transport built on requests.

    - Resolves paths such as "r/golang/about" against the API root.
    - Sends form-encoded bodies for POST endpoints.
    - Maps failures onto the errors in `subreddit_api.errors`, always
      attaching the response once one was received.

    One attempt per call: no retries, no rate limiting, no caching.
    """

    def __init__(
        self,
        credentials: Optional[RedditApiCredentials] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._cfg = config or get_config().client
        self._credentials = credentials

        self._session = session or requests.Session()
        user_agent = credentials.user_agent if credentials else self._cfg.user_agent
        self._session.headers.update({"User-Agent": user_agent})
        if credentials is not None:
            self._session.headers.update(
                {"Authorization": f"bearer {credentials.access_token}"}
            )

    @property
    def base_url(self) -> str:
        return self._cfg.base_url.rstrip("/")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def new_request(
        self,
        method: str,
        path: str,
        form: Optional[Mapping[str, str]] = None,
    ) -> requests.PreparedRequest:
        """
        Build a request for `path` relative to the API root.

        When `form` is given it is sent as an
        application/x-www-form-urlencoded body.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        request = requests.Request(method=method, url=url, data=form or None)

        try:
            return self._session.prepare_request(request)
        except (requests.RequestException, ValueError) as exc:
            raise RequestError(f"cannot build {method} {path}: {exc}") from exc

    def do(
        self,
        request: requests.PreparedRequest,
        timeout: Optional[float] = None,
    ) -> Tuple[Any, requests.Response]:
        """
        Send `request` and decode its JSON body.

        Returns (decoded body or None for an empty body, response).
        """
        if timeout is None:
            timeout = self._cfg.timeout_seconds

        logger.debug("%s %s", request.method, request.url)
        try:
            response = self._session.send(request, timeout=timeout)
        except requests.Timeout as exc:
            raise DeadlineExceeded(
                f"{request.method} {request.url}: no response within {timeout}s"
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Reddit API error: %s %s -> %s",
                request.method,
                request.url,
                response.status_code,
            )
            raise APIError(
                f"{request.method} {request.url}: HTTP {response.status_code}",
                status_code=response.status_code,
                response=response,
            )

        if not response.content:
            return None, response

        try:
            return response.json(), response
        except ValueError as exc:
            raise DecodeError(
                f"{request.method} {request.url}: response is not JSON",
                response=response,
            ) from exc
