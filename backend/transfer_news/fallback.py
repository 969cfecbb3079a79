"""What the consumer gets when the fetch fails or nothing qualifies.

The feed must never be empty and this layer must never raise, so both
placeholders are built from constants and the current time only.
"""
from __future__ import annotations
from datetime import datetime
from typing import Sequence
from .config import settings
from .errors import FetchError
from .schemas import Article
from .utils import redact_url, utcnow

ERROR_SOURCE = "Error Handler"
EMPTY_SOURCE = "Debug Source"
PLACEHOLDER_SOURCES = frozenset({ERROR_SOURCE, EMPTY_SOURCE})

def _placeholder(now: datetime | None, **fields) -> Article:
    now = now or utcnow()
    return Article(
        url=settings.MEDIASTACK_DOCS_URL,
        image=None,
        category="sports",
        language="en",
        country="gb",
        published_at=now.isoformat(),
        **fields,
    )

def error_placeholder(error: BaseException, now: datetime | None = None) -> Article:
    if isinstance(error, FetchError):
        detail = error.describe()
    else:
        detail = redact_url(f"{type(error).__name__}: {error}")
    return _placeholder(
        now,
        author="Error Reporter",
        title="Error Fetching News",
        description=(
            f"An error occurred while fetching news ({detail}). "
            "Please check your API key and network connection."
        ),
        source=ERROR_SOURCE,
    )

def empty_placeholder(now: datetime | None = None) -> Article:
    return _placeholder(
        now,
        author="Debug Test",
        title="MediaStack API Returned No Results",
        description=(
            "No transfer news matched. Your API key may be invalid or expired; "
            "check MEDIASTACK_ACCESS_KEY and your MediaStack account."
        ),
        source=EMPTY_SOURCE,
    )

def is_placeholder(article: Article) -> bool:
    return article.source in PLACEHOLDER_SOURCES

def apply_fallback(
    articles: Sequence[Article] | None,
    error: BaseException | None = None,
    now: datetime | None = None,
) -> list[Article]:
    if error is not None:
        return [error_placeholder(error, now)]
    if not articles:
        return [empty_placeholder(now)]
    return list(articles)
