from __future__ import annotations

"""
HTTP transport for the Reddit JSON API.

This package exposes:
- RedditClient: protocol for building and sending API requests.
- RedditApiClient: requests-based implementation of that protocol.
- RedditApiCredentials: helper for loading a bearer token from env vars.
- add_options: encodes listing options into a path's query string.
- path_segment: escapes a subreddit name for use inside a path.
"""

from .reddit_client import (
    RedditApiClient,
    RedditApiCredentials,
    RedditClient,
    add_options,
    path_segment,
)

__all__ = [
    "RedditClient",
    "RedditApiClient",
    "RedditApiCredentials",
    "add_options",
    "path_segment",
]
