"""Transfer news pipeline.

fetch -> relevance filter -> dedupe by url -> newest first -> fallback

Each call builds its own queries and articles; nothing is shared between
calls, so a refresh is simply another call.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
import requests
import structlog
from .config import Settings, settings as default_settings
from .dedupe import dedupe_by_url
from .errors import ErrorKind, FetchError
from .fallback import apply_fallback
from .fetcher import fetch_articles, fetch_secondary
from .ordering import sort_newest_first
from .query import FetchProfile, NewsQuery, build_query
from .relevance import filter_relevant
from .schemas import Article
from .utils import redact_url, utcnow

logger = structlog.get_logger(__name__)

@dataclass(frozen=True)
class FeedResult:
    articles: list[Article]
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def placeholder(self) -> bool:
        return self.error is not None

def _query(profile: FetchProfile, cfg: Settings, now: datetime) -> NewsQuery:
    return build_query(
        profile,
        access_key=cfg.access_key,
        now=now,
        window_days=cfg.QUERY_WINDOW_DAYS,
        limit=cfg.RESULT_LIMIT,
    )

def refine(raw: list[Article], profile: FetchProfile) -> list[Article]:
    relevant = filter_relevant(raw, profile)
    unique = dedupe_by_url(relevant)
    logger.info("refined articles", profile=profile.value, raw=len(raw),
                relevant=len(relevant), unique=len(unique))
    return sort_newest_first(unique)

def _primary(cfg: Settings, now: datetime, session: requests.Session | None) -> list[Article]:
    raw = fetch_articles(_query(FetchProfile.PRIMARY, cfg, now), session=session, cfg=cfg)
    return refine(raw, FetchProfile.PRIMARY)

def _secondary(cfg: Settings, now: datetime, session: requests.Session | None) -> list[Article]:
    raw = fetch_secondary(_query(FetchProfile.SECONDARY, cfg, now), session=session, cfg=cfg)
    return refine(raw, FetchProfile.SECONDARY)

def fetch_transfer_feed(
    cfg: Settings | None = None,
    now: datetime | None = None,
    include_secondary: bool | None = None,
    session: requests.Session | None = None,
) -> FeedResult:
    """Run one pipeline invocation and report how it ended.

    The returned articles are never empty: failures and empty results are
    replaced by a single placeholder article and tagged via ``error``.
    """
    cfg = cfg or default_settings
    now = now or utcnow()
    if include_secondary is None:
        include_secondary = cfg.INCLUDE_SECONDARY

    try:
        if include_secondary:
            with ThreadPoolExecutor(max_workers=2) as pool:
                primary = pool.submit(_primary, cfg, now, session)
                secondary = pool.submit(_secondary, cfg, now, session)
                articles = primary.result()
                extra = secondary.result()
            # merged sets go through dedupe again
            articles = sort_newest_first(dedupe_by_url(articles + extra))
        else:
            articles = _primary(cfg, now, session)
    except FetchError as e:
        detail = redact_url(str(e))
        logger.error("transfer news fetch failed", kind=e.kind.value, error=detail)
        return FeedResult(apply_fallback(None, error=e, now=now), e.kind, detail)
    except Exception as e:
        # the feed must still render something
        detail = redact_url(f"{type(e).__name__}: {e}")
        logger.error("unexpected error in transfer news pipeline", error=detail)
        return FeedResult(apply_fallback(None, error=e, now=now), ErrorKind.INTERNAL, detail)

    if not articles:
        logger.warning("no transfer news after filtering")
        return FeedResult(apply_fallback(articles, now=now), ErrorKind.EMPTY_RESULT,
                          "no results - check configuration")
    return FeedResult(apply_fallback(articles, now=now))

def fetch_transfer_news(
    cfg: Settings | None = None,
    now: datetime | None = None,
    include_secondary: bool | None = None,
    session: requests.Session | None = None,
) -> list[Article]:
    """Newest-first transfer articles; never raises, never empty."""
    return fetch_transfer_feed(cfg, now, include_secondary, session).articles
