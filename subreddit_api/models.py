from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Sort(str, Enum):
    """Sort order of a post listing."""

    HOT = "hot"
    NEW = "new"
    TOP = "top"
    RISING = "rising"
    CONTROVERSIAL = "controversial"
    BEST = "best"


class Timespan(str, Enum):
    """Time window for `top` and `controversial` listings."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


def _edited(value: Any) -> Optional[float]:
    # Reddit sends `false` for never-edited things and a timestamp otherwise.
    if value is None or isinstance(value, bool):
        return None
    return float(value)


@dataclass
class Subreddit:
    """
    A subreddit as returned by r/{name}/about and subreddit listings.

    Every field has a zero value so that an envelope without `data`
    decodes to an empty Subreddit rather than failing.
    """

    id: str = ""  # base36 id (e.g. 2rc7j)
    full_id: str = ""  # fullname (e.g. t5_2rc7j)
    created_utc: float = 0.0  # Unix timestamp

    url: str = ""  # e.g. /r/golang/
    name: str = ""  # display name, case preserved
    name_prefixed: str = ""  # e.g. r/golang
    title: str = ""
    description: str = ""  # public description
    type: str = ""  # public, private, restricted, ...

    suggested_comment_sort: Optional[str] = None
    subscribers: int = 0
    active_user_count: Optional[int] = None
    nsfw: bool = False

    user_is_moderator: bool = False
    subscribed: bool = False
    favorite: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Subreddit":
        # The random endpoint's embedded sr_detail spells it over_18.
        nsfw = data.get("over18")
        if nsfw is None:
            nsfw = data.get("over_18")

        return cls(
            id=data.get("id", "") or "",
            full_id=data.get("name", "") or "",
            created_utc=float(data.get("created_utc") or 0.0),
            url=data.get("url", "") or "",
            name=data.get("display_name", "") or "",
            name_prefixed=data.get("display_name_prefixed", "") or "",
            title=data.get("title", "") or "",
            description=data.get("public_description", "") or "",
            type=data.get("subreddit_type", "") or "",
            suggested_comment_sort=data.get("suggested_comment_sort"),
            subscribers=int(data.get("subscribers") or 0),
            active_user_count=data.get("active_user_count"),
            nsfw=bool(nsfw),
            user_is_moderator=bool(data.get("user_is_moderator")),
            subscribed=bool(data.get("user_is_subscriber")),
            favorite=bool(data.get("user_has_favorited")),
        )


@dataclass(frozen=True)
class SubredditInfo:
    """
    Minimal subreddit projection returned by api/search_subreddits.
    """

    name: str
    subscribers: int
    active_users: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubredditInfo":
        return cls(
            name=data.get("name", "") or "",
            subscribers=int(data.get("subscriber_count") or 0),
            active_users=int(data.get("active_user_count") or 0),
        )


@dataclass
class Moderator:
    """
    A user who moderates a subreddit.

    `permissions` keeps the order the service stored them in.
    """

    id: str
    name: str
    permissions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Moderator":
        permissions = data.get("mod_permissions")
        if permissions is None:
            permissions = []
        if not isinstance(permissions, list):
            raise TypeError(
                f"mod_permissions must be a list, got {type(permissions).__name__}"
            )

        return cls(
            id=data.get("id", "") or "",
            name=data.get("name", "") or "",
            permissions=list(permissions),
        )


@dataclass
class Post:
    """A link or self post (kind t3)."""

    id: str = ""
    full_id: str = ""  # e.g. t3_abc123
    created_utc: float = 0.0
    edited_utc: Optional[float] = None

    permalink: str = ""
    url: str = ""

    title: str = ""
    body: str = ""  # selftext, empty for link posts

    # True = upvoted, False = downvoted, None = no vote
    likes: Optional[bool] = None

    score: int = 0
    upvote_ratio: float = 0.0
    num_comments: int = 0

    subreddit_name: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_id: str = ""

    author: str = ""
    author_id: str = ""

    spoiler: bool = False
    locked: bool = False
    nsfw: bool = False
    is_self_post: bool = False
    saved: bool = False
    stickied: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Post":
        return cls(
            id=data.get("id", "") or "",
            full_id=data.get("name", "") or "",
            created_utc=float(data.get("created_utc") or 0.0),
            edited_utc=_edited(data.get("edited")),
            permalink=data.get("permalink", "") or "",
            url=data.get("url", "") or "",
            title=data.get("title", "") or "",
            body=data.get("selftext", "") or "",
            likes=data.get("likes"),
            score=int(data.get("score") or 0),
            upvote_ratio=float(data.get("upvote_ratio") or 0.0),
            num_comments=int(data.get("num_comments") or 0),
            subreddit_name=data.get("subreddit", "") or "",
            subreddit_name_prefixed=data.get("subreddit_name_prefixed", "") or "",
            subreddit_id=data.get("subreddit_id", "") or "",
            author=data.get("author", "") or "",
            author_id=data.get("author_fullname", "") or "",
            spoiler=bool(data.get("spoiler")),
            locked=bool(data.get("locked")),
            nsfw=bool(data.get("over_18")),
            is_self_post=bool(data.get("is_self")),
            saved=bool(data.get("saved")),
            stickied=bool(data.get("stickied")),
        )


@dataclass
class Comment:
    """A comment (kind t1), with its reply tree already decoded."""

    id: str = ""
    full_id: str = ""  # e.g. t1_def456
    created_utc: float = 0.0
    edited_utc: Optional[float] = None

    parent_id: str = ""  # fullname of the parent post or comment
    permalink: str = ""

    body: str = ""
    author: str = ""
    author_id: str = ""
    author_flair_text: Optional[str] = None

    subreddit_name: str = ""
    post_id: str = ""  # fullname of the post (link_id)

    score: int = 0
    controversiality: int = 0
    stickied: bool = False
    likes: Optional[bool] = None

    replies: List["Comment"] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], replies: Optional[List["Comment"]] = None
    ) -> "Comment":
        return cls(
            id=data.get("id", "") or "",
            full_id=data.get("name", "") or "",
            created_utc=float(data.get("created_utc") or 0.0),
            edited_utc=_edited(data.get("edited")),
            parent_id=data.get("parent_id", "") or "",
            permalink=data.get("permalink", "") or "",
            body=data.get("body", "") or "",
            author=data.get("author", "") or "",
            author_id=data.get("author_fullname", "") or "",
            author_flair_text=data.get("author_flair_text"),
            subreddit_name=data.get("subreddit", "") or "",
            post_id=data.get("link_id", "") or "",
            score=int(data.get("score") or 0),
            controversiality=int(data.get("controversiality") or 0),
            stickied=bool(data.get("stickied")),
            likes=data.get("likes"),
            replies=replies or [],
        )


@dataclass
class Posts:
    """One page of posts plus the cursors around it."""

    posts: List[Post] = field(default_factory=list)
    after: Optional[str] = None  # pass to PostFinder.after() for the next page
    before: Optional[str] = None


@dataclass
class Subreddits:
    """One page of subreddits plus the cursors around it."""

    subreddits: List[Subreddit] = field(default_factory=list)
    after: Optional[str] = None
    before: Optional[str] = None


# ---------- Query options ----------


@dataclass
class ListOptions:
    """
    Pagination options shared by listing endpoints.

    Each field is None when absent; absent fields are never sent.
    """

    after: Optional[str] = None
    before: Optional[str] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        if self.limit is not None and self.limit > 0:
            params["limit"] = self.limit
        return params


@dataclass
class PostListOptions(ListOptions):
    """Listing options for post searches, adding the time window (`t`)."""

    timespan: Optional[Timespan] = None

    def to_params(self) -> Dict[str, Any]:
        params = super().to_params()
        if self.timespan is not None:
            params["t"] = Timespan(self.timespan).value
        return params
