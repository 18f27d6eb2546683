from __future__ import annotations

"""
CLI entrypoint for browsing the configured subreddits.

Usage (from repo root):

    python -m subreddit_api.run_browse

For each subreddit in BrowseConfig.target_subreddits this prints:
- the subreddit's title and subscriber count
- its stickied posts (slots 1 and 2)
- how many moderators it has
- the first page of posts in the configured sort order

Set REDDIT_ACCESS_TOKEN and REDDIT_USER_AGENT to browse as a user;
otherwise requests are anonymous.
"""

import sys

from .clients import RedditApiClient, RedditApiCredentials
from .config import AppConfig, get_config
from .errors import APIError, RedditError
from .models import Sort
from .subreddits import SubredditService


def _build_service(cfg: AppConfig) -> SubredditService:
    creds = RedditApiCredentials.from_env()
    if creds is None:
        print("[browse] No REDDIT_ACCESS_TOKEN/REDDIT_USER_AGENT; browsing anonymously.")
    return SubredditService(RedditApiClient(credentials=creds, config=cfg.client))


def browse_subreddit(service: SubredditService, name: str, cfg: AppConfig) -> None:
    subreddit, _ = service.get(name)
    print(f"[browse] r/{subreddit.name or name}: {subreddit.title!r} ({subreddit.subscribers} subscribers)")

    for slot, getter in ((1, service.get_sticky1), (2, service.get_sticky2)):
        try:
            post, comments, _ = getter(name)
        except APIError as exc:
            # Reddit answers 404 when the slot is empty.
            if exc.status_code != 404:
                raise
            post, comments = None, []
        if post is not None:
            print(f"[browse]   sticky {slot}: {post.title} ({len(comments)} top-level comments)")

    moderators, _ = service.moderators(name)
    print(f"[browse]   {len(moderators)} moderators")

    posts, _ = (
        service.get_posts()
        .from_subreddits(name)
        .sort(Sort(cfg.browse.sort))
        .limit(cfg.browse.posts_per_subreddit)
        .execute()
    )
    for post in posts.posts:
        print(f"[browse]   [{post.score}] {post.title}")
    if posts.after:
        print(f"[browse]   next page: after={posts.after}")


def main() -> None:
    cfg = get_config()

    valid_sorts = [s.value for s in Sort]
    if cfg.browse.sort not in valid_sorts:
        print(
            f"[browse] ERROR: unknown sort {cfg.browse.sort!r} "
            f"(expected one of: {', '.join(valid_sorts)})",
            file=sys.stderr,
        )
        sys.exit(1)

    service = _build_service(cfg)

    targets = cfg.browse.target_subreddits
    print(f"[browse] Browsing {len(targets)} subreddits (sort={cfg.browse.sort})...")

    try:
        for name in targets:
            browse_subreddit(service, name, cfg)
    except RedditError as exc:
        status = exc.response.status_code if exc.response is not None else "n/a"
        print(f"[browse] ERROR: {exc} (status={status})", file=sys.stderr)
        sys.exit(1)

    print("[browse] Done.")


if __name__ == "__main__":
    main()
