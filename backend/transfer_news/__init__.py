"""Football transfer news feed backed by the mediastack news API."""
from .pipeline import FeedResult, fetch_transfer_feed, fetch_transfer_news

__all__ = ["FeedResult", "fetch_transfer_feed", "fetch_transfer_news"]
