from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import requests

from .clients.reddit_client import RedditClient, add_options, path_segment
from .envelopes import resolve_listing
from .models import Post, PostListOptions, Posts, Sort, Timespan

logger = logging.getLogger(__name__)


class PostFinder:
    """
    Chainable builder for a post listing search.

    Setters only record state and return the finder itself; nothing is
    sent until `execute()`. With no subreddits set, the listing comes from
    the front page the service picks for the caller (subscriptions when
    authenticated, defaults otherwise).

    Usage:
        posts, resp = (
            service.get_posts()
            .from_subreddits("golang", "python")
            .sort(Sort.TOP)
            .timespan(Timespan.WEEK)
            .limit(10)
            .execute()
        )

        # next page, same sort and subreddits
        more, resp = finder.after(posts.after).execute()

    One finder must not be mutated while it is executing; separate
    finders share nothing.
    """

    def __init__(self, client: RedditClient) -> None:
        self._client = client
        self._subreddits: List[str] = []
        self._sort: Sort = Sort.HOT
        self._opts = PostListOptions()

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def from_subreddits(self, *subreddits: str) -> "PostFinder":
        """Restrict the search to these subreddits (none = front page)."""
        self._subreddits = list(subreddits)
        return self

    def from_all(self) -> "PostFinder":
        """Search r/all."""
        self._subreddits = ["all"]
        return self

    def sort(self, sort: Sort) -> "PostFinder":
        self._sort = Sort(sort)
        return self

    def timespan(self, timespan: Timespan) -> "PostFinder":
        # Only top/controversial honour it; the service decides otherwise.
        self._opts.timespan = Timespan(timespan)
        return self

    def after(self, after: Optional[str]) -> "PostFinder":
        self._opts.after = after or None
        return self

    def before(self, before: Optional[str]) -> "PostFinder":
        self._opts.before = before or None
        return self

    def limit(self, limit: int) -> "PostFinder":
        """Cap the page size; 0 or less leaves it to the service."""
        self._opts.limit = limit if limit > 0 else None
        return self

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Listing path for the current subreddits and sort."""
        if self._subreddits:
            names = "+".join(path_segment(name) for name in self._subreddits)
            return f"r/{names}/{self._sort.value}"
        return self._sort.value

    @property
    def options(self) -> PostListOptions:
        """A copy of the accumulated query options."""
        return PostListOptions(
            after=self._opts.after,
            before=self._opts.before,
            limit=self._opts.limit,
            timespan=self._opts.timespan,
        )

    def execute(
        self, timeout: Optional[float] = None
    ) -> Tuple[Posts, requests.Response]:
        """
        Run the search once.

        Returns (posts page, response). Errors propagate as raised by
        the transport; once a response exists it is attached to them.
        """
        path = add_options(self.path, self.options)

        request = self._client.new_request("GET", path)
        payload, response = self._client.do(request, timeout=timeout)

        listing = resolve_listing(payload, Post.from_dict, response=response)
        logger.debug("%s: %d posts", self.path, len(listing.items))

        return Posts(posts=listing.items, after=listing.after, before=listing.before), response
