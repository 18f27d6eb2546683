from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import requests

from .clients.reddit_client import RedditClient, add_options, path_segment
from .envelopes import (
    resolve_embedded_first,
    resolve_listing,
    resolve_moderators,
    resolve_named_list,
    resolve_post_and_comments,
    resolve_thing,
)
from .errors import ValidationError
from .models import (
    Comment,
    ListOptions,
    Moderator,
    Post,
    Sort,
    Subreddit,
    SubredditInfo,
    Subreddits,
)
from .post_finder import PostFinder

logger = logging.getLogger(__name__)


def _require_name(name: str, field_name: str = "name") -> None:
    if not name:
        raise ValidationError(f"{field_name}: must not be empty")


class SubredditService:
    """
    Subreddit endpoints of the Reddit API.

    Data calls return (result, response); subscription calls return the
    response alone. Every call takes an optional `timeout` in seconds.

    Reddit API docs: https://www.reddit.com/dev/api/#section_subreddits
    """

    def __init__(self, client: RedditClient) -> None:
        self._client = client

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def get_posts(self) -> PostFinder:
        """
        Start a post search, preset to the hottest posts of r/all.

        Hot listings of a single subreddit include its stickied posts on
        top of `limit` regular ones.
        """
        return PostFinder(self._client).sort(Sort.HOT).from_all()

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(
        self, name: str, timeout: Optional[float] = None
    ) -> Tuple[Subreddit, requests.Response]:
        """Get a subreddit by name."""
        _require_name(name)

        request = self._client.new_request("GET", f"r/{path_segment(name)}/about")
        payload, response = self._client.do(request, timeout=timeout)
        return resolve_thing(payload, Subreddit.from_dict, response=response), response

    def get_popular(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        return self._get_subreddits("subreddits/popular", opts, timeout)

    def get_new(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        return self._get_subreddits("subreddits/new", opts, timeout)

    def get_gold(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        return self._get_subreddits("subreddits/gold", opts, timeout)

    def get_default(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        return self._get_subreddits("subreddits/default", opts, timeout)

    def get_subscribed(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        """Subreddits the authenticated user is subscribed to."""
        return self._get_subreddits("subreddits/mine/subscriber", opts, timeout)

    def get_approved(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        """Subreddits the authenticated user is an approved user in."""
        return self._get_subreddits("subreddits/mine/contributor", opts, timeout)

    def get_moderated(
        self, opts: Optional[ListOptions] = None, timeout: Optional[float] = None
    ) -> Tuple[Subreddits, requests.Response]:
        """Subreddits the authenticated user moderates."""
        return self._get_subreddits("subreddits/mine/moderator", opts, timeout)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, *subreddits: str, timeout: Optional[float] = None) -> requests.Response:
        """Subscribe to subreddits by name."""
        return self._handle_subscription("sub", "sr_name", subreddits, timeout)

    def subscribe_by_id(self, *ids: str, timeout: Optional[float] = None) -> requests.Response:
        """Subscribe to subreddits by fullname (t5_...)."""
        return self._handle_subscription("sub", "sr", ids, timeout)

    def unsubscribe(self, *subreddits: str, timeout: Optional[float] = None) -> requests.Response:
        return self._handle_subscription("unsub", "sr_name", subreddits, timeout)

    def unsubscribe_by_id(self, *ids: str, timeout: Optional[float] = None) -> requests.Response:
        return self._handle_subscription("unsub", "sr", ids, timeout)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self, query: str, timeout: Optional[float] = None
    ) -> Tuple[List[SubredditInfo], requests.Response]:
        """
        Subreddits whose names begin with `query`, with subscriber and
        active user counts only.
        """
        request = self._client.new_request(
            "POST", "api/search_subreddits", form={"query": query}
        )
        payload, response = self._client.do(request, timeout=timeout)
        infos = resolve_named_list(
            payload, "subreddits", SubredditInfo.from_dict, response=response
        )
        return infos, response

    def search_names(
        self, query: str, timeout: Optional[float] = None
    ) -> Tuple[List[str], requests.Response]:
        """Names of subreddits beginning with `query`."""
        path = add_options("api/search_reddit_names", {"query": query})
        request = self._client.new_request("GET", path)
        payload, response = self._client.do(request, timeout=timeout)
        return resolve_named_list(payload, "names", response=response), response

    # -------------------------------------------------------------------------
    # Stickies, moderators, random
    # -------------------------------------------------------------------------

    def get_sticky1(
        self, name: str, timeout: Optional[float] = None
    ) -> Tuple[Optional[Post], List[Comment], requests.Response]:
        """The first stickied post of a subreddit and its comments."""
        return self._get_sticky(name, 1, timeout)

    def get_sticky2(
        self, name: str, timeout: Optional[float] = None
    ) -> Tuple[Optional[Post], List[Comment], requests.Response]:
        """The second stickied post of a subreddit and its comments."""
        return self._get_sticky(name, 2, timeout)

    def moderators(
        self, name: str, timeout: Optional[float] = None
    ) -> Tuple[List[Moderator], requests.Response]:
        _require_name(name)

        request = self._client.new_request("GET", f"r/{path_segment(name)}/about/moderators")
        payload, response = self._client.do(request, timeout=timeout)
        return resolve_moderators(payload, response=response), response

    def random(
        self, timeout: Optional[float] = None
    ) -> Tuple[Optional[Subreddit], requests.Response]:
        """A random SFW subreddit, or None if the service picked nothing."""
        return self._random(False, timeout)

    def random_nsfw(
        self, timeout: Optional[float] = None
    ) -> Tuple[Optional[Subreddit], requests.Response]:
        """A random NSFW subreddit, or None if the service picked nothing."""
        return self._random(True, timeout)

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _get_subreddits(
        self, path: str, opts: Optional[ListOptions], timeout: Optional[float]
    ) -> Tuple[Subreddits, requests.Response]:
        path = add_options(path, opts)

        request = self._client.new_request("GET", path)
        payload, response = self._client.do(request, timeout=timeout)

        listing = resolve_listing(payload, Subreddit.from_dict, response=response)
        return (
            Subreddits(subreddits=listing.items, after=listing.after, before=listing.before),
            response,
        )

    def _handle_subscription(
        self,
        action: str,
        field_name: str,
        values: Tuple[str, ...],
        timeout: Optional[float],
    ) -> requests.Response:
        if not values:
            raise ValidationError(f"{field_name}: at least one subreddit is required")

        form: Dict[str, str] = {"action": action, field_name: ",".join(values)}
        logger.info("%s %s=%s", action, field_name, form[field_name])

        request = self._client.new_request("POST", "api/subscribe", form=form)
        _, response = self._client.do(request, timeout=timeout)
        return response

    def _get_sticky(
        self, name: str, num: int, timeout: Optional[float]
    ) -> Tuple[Optional[Post], List[Comment], requests.Response]:
        _require_name(name)

        path = add_options(f"r/{path_segment(name)}/about/sticky", {"num": num})
        request = self._client.new_request("GET", path)
        payload, response = self._client.do(request, timeout=timeout)

        post, comments = resolve_post_and_comments(payload, response=response)
        return post, comments, response

    def _random(
        self, nsfw: bool, timeout: Optional[float]
    ) -> Tuple[Optional[Subreddit], requests.Response]:
        path = "r/randnsfw" if nsfw else "r/random"
        path = add_options(path, {"sr_detail": True, "limit": 1})

        request = self._client.new_request("GET", path)
        payload, response = self._client.do(request, timeout=timeout)

        subreddit = resolve_embedded_first(
            payload, "sr_detail", Subreddit.from_dict, response=response
        )
        return subreddit, response
