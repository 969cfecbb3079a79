from __future__ import annotations
import requests
import structlog
from pydantic import ValidationError
from .config import Settings, settings as default_settings
from .errors import FetchError, TransportError, UpstreamApiError, UpstreamHttpError
from .query import NewsQuery
from .schemas import Article, NewsEnvelope
from .utils import redact_url

logger = structlog.get_logger(__name__)

BODY_PREVIEW = 500

def _headers(cfg: Settings) -> dict[str, str]:
    return {"User-Agent": cfg.USER_AGENT, "Accept": "application/json"}

def _parse_envelope(resp: requests.Response) -> NewsEnvelope:
    try:
        return NewsEnvelope.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        # requests' JSONDecodeError is a ValueError
        raise UpstreamApiError(f"Malformed response envelope: {e}", code="invalid_response") from e

def _to_articles(rows: list[dict], query: NewsQuery) -> list[Article]:
    out = []
    dropped = 0
    for row in rows:
        try:
            art = Article.model_validate(row)
        except ValidationError:
            dropped += 1
            continue
        # url is the dedup identity and title the relevance signal
        if not art.url or not art.title:
            dropped += 1
            continue
        out.append(art)
    if dropped:
        logger.warning("dropped malformed articles", profile=query.profile.value, dropped=dropped)
    return out

def fetch_articles(
    query: NewsQuery,
    session: requests.Session | None = None,
    cfg: Settings | None = None,
) -> list[Article]:
    """One GET against the news API for ``query``.

    Returns the envelope's data, unfiltered. Raises TransportError,
    UpstreamHttpError or UpstreamApiError.
    """
    cfg = cfg or default_settings
    http = session or requests
    logger.info("fetching news", profile=query.profile.value, url=cfg.MEDIASTACK_BASE_URL,
                params=query.redacted_params())
    try:
        resp = http.get(
            cfg.MEDIASTACK_BASE_URL,
            params=query.params(),
            headers=_headers(cfg),
            timeout=cfg.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("news request failed", profile=query.profile.value, error=redact_url(str(e)))
        raise TransportError(e) from e

    if not 200 <= resp.status_code < 300:
        body = resp.text or ""
        logger.error("news api returned status", profile=query.profile.value,
                     status=resp.status_code, body=body[:BODY_PREVIEW])
        raise UpstreamHttpError(resp.status_code, body)

    envelope = _parse_envelope(resp)
    if envelope.error is not None:
        logger.error("news api error", profile=query.profile.value,
                     code=envelope.error.code, message=envelope.error.message)
        raise UpstreamApiError(envelope.error.message, envelope.error.code, envelope.error.context)

    articles = _to_articles(envelope.data, query)
    logger.info("news api returned articles", profile=query.profile.value,
                count=len(articles), total=envelope.pagination.total if envelope.pagination else None)
    return articles

def fetch_secondary(
    query: NewsQuery,
    session: requests.Session | None = None,
    cfg: Settings | None = None,
) -> list[Article]:
    """Best-effort fetch: any fetch failure becomes an empty result."""
    try:
        return fetch_articles(query, session=session, cfg=cfg)
    except FetchError as e:
        logger.warning("secondary fetch failed, continuing without it",
                       kind=e.kind.value, error=redact_url(str(e)))
        return []
