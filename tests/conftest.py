from __future__ import annotations

import json
from typing import Any, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from subreddit_api.clients import RedditApiClient
from subreddit_api.config import ClientConfig


BASE_URL = "https://api.test"


def make_response(
    status_code: int = 200,
    payload: Any = None,
    body: Optional[bytes] = None,
) -> requests.Response:
    """Build a requests.Response carrying `payload` as JSON (or raw `body`)."""
    resp = requests.Response()
    resp.status_code = status_code
    if body is None:
        body = json.dumps(payload).encode("utf-8") if payload is not None else b""
    resp._content = body
    resp.headers["Content-Type"] = "application/json"
    resp.encoding = "utf-8"
    return resp


class FakeSession(requests.Session):
    """
    requests.Session that records sent requests and replays queued
    responses (or raises queued exceptions) instead of touching the network.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: List[requests.PreparedRequest] = []
        self.timeouts: List[Any] = []
        self._queue: List[Any] = []

    def queue(self, item: Any) -> None:
        self._queue.append(item)

    def send(self, request, **kwargs):  # type: ignore[override]
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))
        item = self._queue.pop(0) if self._queue else make_response(200, {})
        if isinstance(item, Exception):
            raise item
        item.request = request
        item.url = request.url
        return item

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]


def path_of(request: requests.PreparedRequest) -> str:
    return urlsplit(request.url).path.lstrip("/")


def query_of(request: requests.PreparedRequest) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(request.url).query).items()}


def form_of(request: requests.PreparedRequest) -> dict:
    body = request.body or ""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return {k: v[0] for k, v in parse_qs(body).items()}


def thing(kind: str, **data: Any) -> dict:
    return {"kind": kind, "data": data}


def listing(*children: dict, after: Optional[str] = None, before: Optional[str] = None) -> dict:
    return {
        "kind": "Listing",
        "data": {"children": list(children), "after": after, "before": before},
    }


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> RedditApiClient:
    return RedditApiClient(
        config=ClientConfig(base_url=BASE_URL, user_agent="tests/1.0", timeout_seconds=5.0),
        session=session,
    )
