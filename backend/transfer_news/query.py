from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from .utils import REDACTED

class FetchProfile(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"

PROFILE_KEYWORDS = {
    # one broad keyword; relevance is decided afterwards
    FetchProfile.PRIMARY: "soccer",
    FetchProfile.SECONDARY: 'football deal OR "player joins" OR "player signs" OR "new signing"',
}

DATE_FMT = "%Y-%m-%d"

@dataclass(frozen=True)
class NewsQuery:
    profile: FetchProfile
    access_key: str
    keywords: str
    date: str
    categories: str = "sports"
    languages: str = "en"
    sort: str = "published_desc"
    limit: int = 100

    def params(self) -> dict[str, str | int]:
        return {
            "access_key": self.access_key,
            "keywords": self.keywords,
            "categories": self.categories,
            "languages": self.languages,
            "date": self.date,
            "sort": self.sort,
            "limit": self.limit,
        }

    def redacted_params(self) -> dict[str, str | int]:
        return {**self.params(), "access_key": REDACTED}

    def __repr__(self) -> str:
        return f"NewsQuery(profile={self.profile.value!r}, keywords={self.keywords!r}, date={self.date!r})"

def date_window(now: datetime, days: int = 30) -> tuple[str, str]:
    """Closed [now - days, now] window as YYYY-MM-DD strings, in UTC."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    start = now - timedelta(days=days)
    return start.strftime(DATE_FMT), now.strftime(DATE_FMT)

def build_query(
    profile: FetchProfile,
    access_key: str,
    now: datetime | None = None,
    window_days: int = 30,
    limit: int = 100,
) -> NewsQuery:
    now = now or datetime.now(timezone.utc)
    start, end = date_window(now, window_days)
    return NewsQuery(
        profile=profile,
        access_key=access_key,
        keywords=PROFILE_KEYWORDS[profile],
        date=f"{start},{end}",
        limit=limit,
    )
