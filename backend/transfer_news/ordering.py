from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable
from dateutil import parser as date_parser
from .schemas import Article

# anything we cannot read sorts as the oldest item
OLDEST = datetime.min.replace(tzinfo=timezone.utc)

def parse_published(value: str | None) -> datetime | None:
    if not value or not value.strip():
        return None
    try:
        dt = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

def published_key(article: Article) -> datetime:
    return parse_published(article.published_at) or OLDEST

def sort_newest_first(articles: Iterable[Article]) -> list[Article]:
    # sorted() stays stable with reverse=True, so equal timestamps keep input order
    return sorted(articles, key=published_key, reverse=True)
