"""Keyword heuristics deciding which articles are transfer stories."""
from __future__ import annotations
from typing import Iterable
from .query import FetchProfile
from .schemas import Article

TRANSFER_KEYWORDS = (
    "transfer", "sign", "deal", "move", "joins", "bid",
    "rumour", "rumor", "target", "fee",
)

# "sign " keeps the trailing space so that "signal" does not count
TRANSFER_ACTION_KEYWORDS = (
    "transfer", "sign ", "signs", "signed", "signing",
    "deal", "move", "joins", "joined", "bid",
    "rumour", "rumor", "target", "fee",
)

FOOTBALL_KEYWORDS = (
    "football", "soccer", "league", "club",
    "premier league", "serie a", "la liga", "bundesliga",
)

def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)

def is_transfer_story(article: Article) -> bool:
    """Permissive check: a title hit is enough, so is a single description hit."""
    if _contains_any(article.title.lower(), TRANSFER_KEYWORDS):
        return True
    return _contains_any((article.description or "").lower(), TRANSFER_KEYWORDS)

def is_football_transfer(article: Article) -> bool:
    """Stricter check: needs both a transfer action and a football term."""
    text = f"{article.title} {article.description or ''}".lower()
    return (
        _contains_any(text, TRANSFER_ACTION_KEYWORDS)
        and _contains_any(text, FOOTBALL_KEYWORDS)
    )

POLICIES = {
    FetchProfile.PRIMARY: is_transfer_story,
    FetchProfile.SECONDARY: is_football_transfer,
}

def filter_relevant(articles: Iterable[Article], profile: FetchProfile = FetchProfile.PRIMARY) -> list[Article]:
    keep = POLICIES[profile]
    return [a for a in articles if keep(a)]
