from __future__ import annotations
from typing import Iterable
from .schemas import Article

class UrlDupeFilter:
    def __init__(self):
        self.index: set[str] = set()

    def seen(self, url: str) -> bool:
        # url-less records have no identity, so they never collide
        if not url:
            return False
        if url in self.index:
            return True
        self.index.add(url)
        return False

def dedupe_by_url(articles: Iterable[Article]) -> list[Article]:
    """First occurrence of each url wins; input order is kept."""
    dupes = UrlDupeFilter()
    return [a for a in articles if not dupes.seen(a.url)]
