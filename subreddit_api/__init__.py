from __future__ import annotations

"""
Typed client for the subreddit endpoints of the Reddit API.

    from subreddit_api import RedditApiClient, SubredditService, Sort

    service = SubredditService(RedditApiClient())
    posts, resp = service.get_posts().from_subreddits("golang").sort(Sort.NEW).execute()
"""

from .clients import RedditApiClient, RedditApiCredentials, RedditClient
from .errors import (
    APIError,
    DeadlineExceeded,
    DecodeError,
    RedditError,
    RequestError,
    TransportError,
    ValidationError,
)
from .models import (
    Comment,
    ListOptions,
    Moderator,
    Post,
    PostListOptions,
    Posts,
    Sort,
    Subreddit,
    SubredditInfo,
    Subreddits,
    Timespan,
)
from .post_finder import PostFinder
from .subreddits import SubredditService

__all__ = [
    "APIError",
    "Comment",
    "DeadlineExceeded",
    "DecodeError",
    "ListOptions",
    "Moderator",
    "Post",
    "PostFinder",
    "PostListOptions",
    "Posts",
    "RedditApiClient",
    "RedditApiCredentials",
    "RedditClient",
    "RedditError",
    "RequestError",
    "Sort",
    "Subreddit",
    "SubredditInfo",
    "SubredditService",
    "Subreddits",
    "Timespan",
    "TransportError",
    "ValidationError",
]
