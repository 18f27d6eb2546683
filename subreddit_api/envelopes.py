"""
Decoders for the wrappers Reddit puts around API payloads.

Each endpoint wraps its payload in one known shape, so every call site
picks the matching resolver instead of sniffing the shape at runtime:

- thing:          {"kind": "t5", "data": {...}}
- listing:        {"kind": "Listing", "data": {"children": [thing, ...],
                                               "after": ..., "before": ...}}
- named list:     {"names": [...]} / {"subreddits": [...]}
- embedded first: a listing whose first child carries a second entity
                  under a known key (r/random with sr_detail)
- post+comments:  [post listing, comment listing]
- moderators:     {"kind": "UserList", "data": {"children": [...]}}

A payload that does not have the expected container types raises
DecodeError. Missing optional parts decode to empty results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

import requests

from .errors import DecodeError
from .models import Comment, Moderator, Post

T = TypeVar("T")

Decoder = Callable[[Mapping[str, Any]], T]


@dataclass
class Listing(Generic[T]):
    items: List[T] = field(default_factory=list)
    after: Optional[str] = None
    before: Optional[str] = None


def _expect_mapping(
    value: Any, what: str, response: Optional[requests.Response]
) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"{what}: expected an object, got {type(value).__name__}",
            response=response,
        )
    return value


def _expect_list(
    value: Any, what: str, response: Optional[requests.Response]
) -> List[Any]:
    if not isinstance(value, list):
        raise DecodeError(
            f"{what}: expected an array, got {type(value).__name__}",
            response=response,
        )
    return value



def _get(
    container: Mapping[str, Any], key: str, default: Any
) -> Any:
    # Only an absent or null value falls back; a wrong-typed falsy value
    # ("" or [] where an object is expected) must still fail the checks.
    value = container.get(key)
    return default if value is None else value


def _decode(
    decode: Decoder[T],
    data: Mapping[str, Any],
    what: str,
    response: Optional[requests.Response],
) -> T:
    try:
        return decode(data)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{what}: {exc}", response=response) from exc


def _listing_data(
    payload: Any, response: Optional[requests.Response]
) -> Tuple[Mapping[str, Any], List[Any]]:
    root = _expect_mapping(payload if payload is not None else {}, "listing", response)
    data = _expect_mapping(_get(root, "data", {}), "listing.data", response)
    children = _expect_list(
        _get(data, "children", []), "listing.data.children", response
    )
    return data, children


# -----------------------------------------------------------------------------
# Resolvers
# -----------------------------------------------------------------------------


def resolve_thing(
    payload: Any,
    decode: Decoder[T],
    response: Optional[requests.Response] = None,
) -> T:
    """
    Unwrap {"kind", "data"} and decode `data`.

    A missing or null `data` decodes as an empty object, giving the
    entity's zero value rather than an error.
    """
    root = _expect_mapping(payload if payload is not None else {}, "thing", response)
    data = _expect_mapping(_get(root, "data", {}), "thing.data", response)
    return _decode(decode, data, "thing.data", response)


def resolve_listing(
    payload: Any,
    decode: Decoder[T],
    response: Optional[requests.Response] = None,
) -> Listing[T]:
    """
    Decode every child's `data` in order, keeping the page cursors.
    """
    data, children = _listing_data(payload, response)

    items: List[T] = []
    for index, child in enumerate(children):
        what = f"listing child {index}.data"
        child = _expect_mapping(child, f"listing child {index}", response)
        child_data = _expect_mapping(_get(child, "data", {}), what, response)
        items.append(_decode(decode, child_data, what, response))

    return Listing(
        items=items,
        after=data.get("after") or None,
        before=data.get("before") or None,
    )


def resolve_named_list(
    payload: Any,
    key: str,
    decode: Optional[Decoder[T]] = None,
    response: Optional[requests.Response] = None,
) -> List[Any]:
    """
    Return the array stored under `key`, decoding each item when
    `decode` is given (plain values such as names are returned as-is).
    """
    root = _expect_mapping(payload if payload is not None else {}, key, response)
    values = _expect_list(_get(root, key, []), key, response)
    if decode is None:
        return list(values)

    what = f"{key} item"
    return [
        _decode(decode, _expect_mapping(v, what, response), what, response)
        for v in values
    ]


def resolve_embedded_first(
    payload: Any,
    key: str,
    decode: Decoder[T],
    response: Optional[requests.Response] = None,
) -> Optional[T]:
    """
    Decode the entity embedded under `key` in the first child's data.

    Returns None when the listing has no children or the first child
    carries no embedded entity: an empty pick is a valid outcome.
    """
    _, children = _listing_data(payload, response)
    if not children:
        return None

    first = _expect_mapping(children[0], "listing child 0", response)
    first_data = _expect_mapping(
        _get(first, "data", {}), "listing child 0.data", response
    )
    embedded = first_data.get(key)
    if embedded is None:
        return None
    return _decode(decode, _expect_mapping(embedded, key, response), key, response)


def _decode_comment_tree(
    children: List[Any], response: Optional[requests.Response]
) -> List[Comment]:
    comments: List[Comment] = []
    for index, child in enumerate(children):
        child = _expect_mapping(child, f"comment {index}", response)
        if child.get("kind") == "more":
            continue

        what = f"comment {index}.data"
        data = _expect_mapping(_get(child, "data", {}), what, response)

        # Leaf comments carry "" instead of a listing.
        replies: List[Comment] = []
        if data.get("replies") not in (None, ""):
            _, reply_children = _listing_data(data["replies"], response)
            replies = _decode_comment_tree(reply_children, response)

        comments.append(
            _decode(lambda d: Comment.from_dict(d, replies=replies), data, what, response)
        )
    return comments


def resolve_post_and_comments(
    payload: Any,
    response: Optional[requests.Response] = None,
) -> Tuple[Optional[Post], List[Comment]]:
    """
    Decode the [post listing, comment listing] pair served by comment
    pages and by r/{name}/about/sticky.

    No filtering happens here: an empty post listing yields None.
    """
    pair = _expect_list(payload if payload is not None else [], "post and comments", response)

    post: Optional[Post] = None
    if pair:
        posts = resolve_listing(pair[0], Post.from_dict, response=response)
        if posts.items:
            post = posts.items[0]

    comments: List[Comment] = []
    if len(pair) > 1:
        _, children = _listing_data(pair[1], response)
        comments = _decode_comment_tree(children, response)

    return post, comments


def resolve_moderators(
    payload: Any,
    response: Optional[requests.Response] = None,
) -> List[Moderator]:
    """
    Decode a UserList of moderators. Children here are the moderator
    records themselves, not {"kind", "data"} things.
    """
    _, children = _listing_data(payload, response)
    return [
        _decode(
            Moderator.from_dict,
            _expect_mapping(child, "moderator", response),
            "moderator",
            response,
        )
        for child in children
    ]
