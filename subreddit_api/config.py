from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional


# ---------- HTTP client configuration ----------


@dataclass
class ClientConfig:
    """
    Settings for talking to the Reddit JSON API.
    """

    base_url: str = "https://oauth.reddit.com"
    user_agent: str = "subreddit-api/0.1"
    timeout_seconds: float = 10.0  # default per-request deadline


# ---------- CLI browsing configuration ----------


@dataclass
class BrowseConfig:
    """
    What the `run_browse` script looks at.

    An empty subreddit list means "the front page": posts come from the
    subreddits the authenticated user is subscribed to, or from the
    service's default set for anonymous clients.
    """

    target_subreddits: List[str] = field(
        default_factory=lambda: [
            "golang",
            "python",
        ]
    )

    # One of: hot, new, top, rising, controversial, best
    sort: str = "hot"

    # Posts per subreddit page (0 lets the service pick its default)
    posts_per_subreddit: int = 10


# ---------- Top-level application configuration ----------


@dataclass
class AppConfig:
    client: ClientConfig = field(default_factory=ClientConfig)
    browse: BrowseConfig = field(default_factory=BrowseConfig)


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def get_config() -> AppConfig:
    """
    Main entrypoint to get the full application config.

    Environment overrides:
    - REDDIT_BASE_URL
    - REDDIT_TIMEOUT_SECONDS

    Usage:
        from subreddit_api.config import get_config
        cfg = get_config()
        cfg.client.base_url
    """
    cfg = AppConfig()

    base_url = os.getenv("REDDIT_BASE_URL")
    if base_url:
        cfg.client.base_url = base_url.rstrip("/")

    timeout = _env_float("REDDIT_TIMEOUT_SECONDS")
    if timeout is not None:
        cfg.client.timeout_seconds = timeout

    return cfg
