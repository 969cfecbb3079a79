from fastapi import FastAPI, Query, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging
import structlog
import traceback
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from .schemas import ArticleOut, FeedOut
from .fallback import is_placeholder
from .pipeline import fetch_transfer_feed
from .utils import redact_secrets
from .config import settings

# Configure structured logging
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.LOG_LEVEL.upper())
    ),
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

VERSION = "1.0.0"

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title="Transfer News API", version=VERSION)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"]
)

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        path=request.url.path,
        method=request.method,
        traceback=traceback.format_exc()
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "path": request.url.path}
    )

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    if settings.is_production and not settings.access_key:
        logger.error("Health check failed", reason="MEDIASTACK_ACCESS_KEY not set")
        raise HTTPException(status_code=503, detail="Service unhealthy")
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION
    }

@app.get("/api/transfers", response_model=FeedOut)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
def list_transfers(
    request: Request,
    include_secondary: bool | None = Query(None),
):
    # one fresh pipeline run per request; pull-to-refresh is just another GET
    result = fetch_transfer_feed(include_secondary=include_secondary)
    items = [
        ArticleOut(**a.model_dump(), placeholder=is_placeholder(a))
        for a in result.articles
    ]
    return FeedOut(
        items=items,
        total=len(items),
        placeholder=result.placeholder,
        error=result.error.value if result.error else None,
        detail=result.detail,
        fetched_at=datetime.now(timezone.utc),
    )
