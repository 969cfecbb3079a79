from unittest.mock import MagicMock
import io
from datetime import datetime, timezone
import pytest
import requests
import structlog
from transfer_news.config import Settings
from transfer_news.errors import ErrorKind
from transfer_news.fallback import EMPTY_SOURCE, ERROR_SOURCE, is_placeholder
from transfer_news.pipeline import fetch_transfer_feed, fetch_transfer_news

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
CFG = Settings(MEDIASTACK_ACCESS_KEY="secret-key")

def response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    resp.json.return_value = payload
    return resp

def session_returning(resp):
    s = MagicMock()
    s.get.return_value = resp
    return s

def envelope(*rows):
    return {"pagination": {"limit": 100, "offset": 0, "count": len(rows), "total": len(rows)}, "data": list(rows)}

def test_filter_then_dedupe_scenario():
    payload = envelope(
        {"url": "a", "title": "X signs new deal", "published_at": "2024-01-02"},
        {"url": "b", "title": "Random sports news", "published_at": "2024-01-03"},
        {"url": "a", "title": "X signs new deal (dup)", "published_at": "2024-01-02"},
    )
    out = fetch_transfer_news(CFG, now=NOW, session=session_returning(response(payload=payload)))
    assert [(a.url, a.title) for a in out] == [("a", "X signs new deal")]

def test_result_sorted_newest_first():
    payload = envelope(
        {"url": "old", "title": "Old transfer", "published_at": "2024-03-01T10:00:00+00:00"},
        {"url": "new", "title": "New transfer", "published_at": "2024-03-14T10:00:00+00:00"},
        {"url": "mid", "title": "Mid transfer", "published_at": "2024-03-07T10:00:00+00:00"},
    )
    result = fetch_transfer_feed(CFG, now=NOW, session=session_returning(response(payload=payload)))
    assert result.ok and not result.placeholder
    assert [a.url for a in result.articles] == ["new", "mid", "old"]

def test_http_500_yields_error_placeholder():
    result = fetch_transfer_feed(CFG, now=NOW, session=session_returning(response(500, text="oops")))
    assert len(result.articles) == 1
    ph = result.articles[0]
    assert ph.source == ERROR_SOURCE
    assert is_placeholder(ph)
    assert "upstream_http" in ph.description
    assert ph.published_at == NOW.isoformat()
    assert result.error is ErrorKind.UPSTREAM_HTTP

def test_no_matching_articles_yields_empty_placeholder():
    payload = envelope(
        {"url": "a", "title": "Match report", "published_at": "2024-03-01"},
        {"url": "b", "title": "Injury update", "published_at": "2024-03-02"},
        {"url": "c", "title": "Fixtures", "published_at": "2024-03-03"},
    )
    result = fetch_transfer_feed(CFG, now=NOW, session=session_returning(response(payload=payload)))
    assert [a.source for a in result.articles] == [EMPTY_SOURCE]
    assert result.error is ErrorKind.EMPTY_RESULT

def _transport_failure():
    s = MagicMock()
    s.get.side_effect = requests.ConnectionError("dns")
    return s

@pytest.mark.parametrize("make_session", [
    lambda: session_returning(response(payload=envelope())),
    lambda: session_returning(response(payload=envelope({"url": "a", "title": "Deal done", "published_at": "2024-03-01"}))),
    lambda: session_returning(response(404, text="nope")),
    lambda: session_returning(response(payload={"error": {"code": "invalid_access_key", "message": "bad key"}})),
    _transport_failure,
])
def test_output_never_empty(make_session):
    assert len(fetch_transfer_news(CFG, now=NOW, session=make_session())) >= 1

def test_unexpected_error_still_yields_placeholder():
    s = MagicMock()
    s.get.side_effect = RuntimeError("surprise")
    result = fetch_transfer_feed(CFG, now=NOW, session=s)
    assert result.error is ErrorKind.INTERNAL
    assert result.articles[0].source == ERROR_SOURCE

def _by_profile(primary, secondary):
    def get(url, params=None, **kwargs):
        return primary if params["keywords"] == "soccer" else secondary
    s = MagicMock()
    s.get.side_effect = get
    return s

def test_secondary_merged_through_dedupe():
    primary = response(payload=envelope(
        {"url": "a", "title": "Striker joins", "published_at": "2024-03-10T00:00:00Z"},
    ))
    secondary = response(payload=envelope(
        {"url": "a", "title": "Striker joins club", "description": "Premier League", "published_at": "2024-03-10T00:00:00Z"},
        {"url": "b", "title": "Club signs keeper", "description": "football", "published_at": "2024-03-12T00:00:00Z"},
        {"url": "c", "title": "Tennis deal", "published_at": "2024-03-13T00:00:00Z"},
    ))
    s = _by_profile(primary, secondary)
    out = fetch_transfer_news(CFG, now=NOW, include_secondary=True, session=s)
    assert [a.url for a in out] == ["b", "a"]
    assert out[1].title == "Striker joins"
    assert s.get.call_count == 2

def test_secondary_failure_does_not_abort_primary():
    primary = response(payload=envelope({"url": "a", "title": "Bid accepted", "published_at": "2024-03-10"}))
    s = _by_profile(primary, response(502, text="bad gateway"))
    result = fetch_transfer_feed(CFG, now=NOW, include_secondary=True, session=s)
    assert result.ok
    assert [a.url for a in result.articles] == ["a"]

def test_primary_failure_wins_over_secondary_results():
    secondary = response(payload=envelope({"url": "b", "title": "Club signs keeper", "published_at": "2024-03-12"}))
    s = _by_profile(response(500), secondary)
    result = fetch_transfer_feed(CFG, now=NOW, include_secondary=True, session=s)
    assert result.error is ErrorKind.UPSTREAM_HTTP
    assert len(result.articles) == 1

LEAKY_URL = "http://api.example/v1/news?access_key=secret-key&keywords=soccer"

def _leaky_transport_failure():
    s = MagicMock()
    s.get.side_effect = requests.ConnectionError(f"Max retries exceeded with url: {LEAKY_URL}")
    return s

def test_transport_error_text_hides_access_key():
    result = fetch_transfer_feed(CFG, now=NOW, session=_leaky_transport_failure())
    assert result.error is ErrorKind.TRANSPORT
    assert "secret-key" not in result.articles[0].description
    assert "secret-key" not in result.detail
    assert "access_key=[REDACTED]" in result.detail

def test_unresolvable_host_does_not_leak_access_key():
    cfg = Settings(
        MEDIASTACK_ACCESS_KEY="s3cr3t-key",
        MEDIASTACK_BASE_URL="http://nonexistent-host.invalid/v1/news",
        REQUEST_TIMEOUT=5,
    )
    result = fetch_transfer_feed(cfg, now=NOW, session=requests.Session())
    assert result.error is ErrorKind.TRANSPORT
    assert "s3cr3t-key" not in result.articles[0].description
    assert "s3cr3t-key" not in result.detail

def test_logs_never_carry_access_key(monkeypatch):
    # plain logger with no redacting processor installed
    buf = io.StringIO()
    plain = structlog.wrap_logger(
        structlog.PrintLogger(file=buf),
        wrapper_class=structlog.BoundLogger,
        processors=[structlog.processors.KeyValueRenderer()],
    )
    monkeypatch.setattr("transfer_news.fetcher.logger", plain)
    monkeypatch.setattr("transfer_news.pipeline.logger", plain)
    out = fetch_transfer_news(CFG, now=NOW, session=_leaky_transport_failure())
    logged = buf.getvalue()
    assert "transfer news fetch failed" in logged
    assert "secret-key" not in logged
    assert out[0].source == ERROR_SOURCE
