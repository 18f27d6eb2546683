from __future__ import annotations

import pytest

from conftest import form_of, listing, make_response, path_of, query_of, thing
from subreddit_api import (
    APIError,
    DecodeError,
    ListOptions,
    SubredditService,
    ValidationError,
)


@pytest.fixture
def service(client) -> SubredditService:
    return SubredditService(client)


# -----------------------------------------------------------------------------
# Lookup
# -----------------------------------------------------------------------------


def test_get_subreddit(service, session):
    session.queue(
        make_response(
            200,
            thing(
                "t5",
                id="2rc7j",
                name="t5_2rc7j",
                display_name="golang",
                display_name_prefixed="r/golang",
                title="The Go Programming Language",
                subscribers=200000,
                over18=False,
                user_is_subscriber=True,
            ),
        )
    )

    sr, resp = service.get("golang")

    assert session.last.method == "GET"
    assert path_of(session.last) == "r/golang/about"
    assert sr.name == "golang"
    assert sr.name_prefixed == "r/golang"
    assert sr.subscribed is True
    assert resp.status_code == 200


def test_get_with_empty_name_sends_nothing(service, session):
    with pytest.raises(ValidationError):
        service.get("")
    assert session.sent == []


def test_error_status_raises_with_response(service, session):
    session.queue(make_response(404, {"message": "Not Found", "error": 404}))

    with pytest.raises(APIError) as exc_info:
        service.get("doesnotexist")

    assert exc_info.value.status_code == 404
    assert exc_info.value.response.status_code == 404


@pytest.mark.parametrize(
    "method_name, expected_path",
    [
        ("get_popular", "subreddits/popular"),
        ("get_new", "subreddits/new"),
        ("get_gold", "subreddits/gold"),
        ("get_default", "subreddits/default"),
        ("get_subscribed", "subreddits/mine/subscriber"),
        ("get_approved", "subreddits/mine/contributor"),
        ("get_moderated", "subreddits/mine/moderator"),
    ],
)
def test_subreddit_lists_hit_expected_paths(service, session, method_name, expected_path):
    session.queue(
        make_response(
            200,
            listing(
                thing("t5", display_name="first"),
                thing("t5", display_name="second"),
                after="t5_second",
            ),
        )
    )

    subreddits, _ = getattr(service, method_name)(ListOptions(limit=2, after="t5_x"))

    assert path_of(session.last) == expected_path
    assert query_of(session.last) == {"after": "t5_x", "limit": "2"}
    assert [s.name for s in subreddits.subreddits] == ["first", "second"]
    assert subreddits.after == "t5_second"


def test_subreddit_list_without_options_has_no_query(service, session):
    service.get_popular()
    assert query_of(session.last) == {}


# -----------------------------------------------------------------------------
# Subscriptions
# -----------------------------------------------------------------------------


def test_subscribe_by_name(service, session):
    service.subscribe("golang", "python")

    assert session.last.method == "POST"
    assert path_of(session.last) == "api/subscribe"
    assert form_of(session.last) == {"action": "sub", "sr_name": "golang,python"}


def test_subscribe_by_id(service, session):
    service.subscribe_by_id("t5_1", "t5_2")
    assert form_of(session.last) == {"action": "sub", "sr": "t5_1,t5_2"}


def test_unsubscribe_by_name_and_id(service, session):
    service.unsubscribe("golang")
    service.unsubscribe_by_id("t5_1")

    by_name, by_id = (form_of(r) for r in session.sent)
    assert by_name == {"action": "unsub", "sr_name": "golang"}
    assert by_id == {"action": "unsub", "sr": "t5_1"}


def test_subscribe_with_nothing_is_rejected(service, session):
    with pytest.raises(ValidationError):
        service.subscribe()
    assert session.sent == []


def test_subscribe_returns_response_for_empty_body(service, session):
    session.queue(make_response(200, body=b""))

    resp = service.subscribe("golang")

    assert resp.status_code == 200


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------


def test_search_posts_query_form(service, session):
    session.queue(
        make_response(
            200,
            {"subreddits": [{"name": "golang", "subscriber_count": 5, "active_user_count": 1}]},
        )
    )

    infos, _ = service.search("gol")

    assert session.last.method == "POST"
    assert path_of(session.last) == "api/search_subreddits"
    assert form_of(session.last) == {"query": "gol"}
    assert infos[0].name == "golang"
    assert infos[0].subscribers == 5
    assert infos[0].active_users == 1


def test_search_names_escapes_query(service, session):
    session.queue(make_response(200, {"names": ["golang", "golang_jobs"]}))

    names, _ = service.search_names("go lang&x")

    assert session.last.method == "GET"
    assert path_of(session.last) == "api/search_reddit_names"
    assert query_of(session.last) == {"query": "go lang&x"}
    assert names == ["golang", "golang_jobs"]


# -----------------------------------------------------------------------------
# Stickies, moderators, random
# -----------------------------------------------------------------------------


def test_stickies_differ_only_in_num(service, session):
    pair = [listing(thing("t3", id="s", title="Rules")), listing()]
    session.queue(make_response(200, pair))
    session.queue(make_response(200, pair))

    post, comments, _ = service.get_sticky1("golang")
    service.get_sticky2("golang")

    first, second = session.sent
    assert path_of(first) == path_of(second) == "r/golang/about/sticky"
    assert query_of(first) == {"num": "1"}
    assert query_of(second) == {"num": "2"}
    assert post.title == "Rules"
    assert comments == []


def test_missing_sticky_error_passes_through(service, session):
    session.queue(make_response(404, {"message": "Not Found", "error": 404}))

    with pytest.raises(APIError) as exc_info:
        service.get_sticky2("golang")

    assert exc_info.value.status_code == 404


def test_moderators(service, session):
    session.queue(
        make_response(
            200,
            {
                "kind": "UserList",
                "data": {
                    "children": [
                        {"id": "t2_a", "name": "alice", "mod_permissions": ["posts", "all"]},
                    ]
                },
            },
        )
    )

    mods, _ = service.moderators("golang")

    assert path_of(session.last) == "r/golang/about/moderators"
    assert mods[0].name == "alice"
    assert mods[0].permissions == ["posts", "all"]


@pytest.mark.parametrize(
    "method_name, expected_path",
    [("random", "r/random"), ("random_nsfw", "r/randnsfw")],
)
def test_random_requests_detail_and_single_item(service, session, method_name, expected_path):
    session.queue(
        make_response(200, listing(thing("t3", sr_detail={"display_name": "picked"})))
    )

    sr, _ = getattr(service, method_name)()

    assert path_of(session.last) == expected_path
    assert query_of(session.last) == {"sr_detail": "true", "limit": "1"}
    assert sr.name == "picked"


def test_random_with_empty_listing_is_none(service, session):
    session.queue(make_response(200, listing()))

    sr, resp = service.random()

    assert sr is None
    assert resp.status_code == 200


def test_get_posts_defaults_to_hot_on_all(service, session):
    service.get_posts().execute()
    assert path_of(session.last) == "r/all/hot"


def test_badly_typed_field_is_decode_error_with_response(service, session):
    session.queue(make_response(200, thing("t5", display_name="golang", subscribers="n/a")))

    with pytest.raises(DecodeError) as exc_info:
        service.get("golang")

    assert exc_info.value.response.status_code == 200


@pytest.mark.parametrize(
    "call, payload, expected_path",
    [
        (lambda s: s.get("go?lang"), thing("t5"), "r/go%3Flang/about"),
        (lambda s: s.moderators("go#lang"), listing(), "r/go%23lang/about/moderators"),
        (lambda s: s.get_sticky1("go/lang"), [listing(), listing()], "r/go%2Flang/about/sticky"),
    ],
)
def test_subreddit_names_are_escaped_in_path(service, session, call, payload, expected_path):
    session.queue(make_response(200, payload))

    call(service)

    assert path_of(session.last) == expected_path
    assert "lang" not in query_of(session.last)
