from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..core.retrieval import NewsService
from ..models.errors import NewsProxyError
from ..tools.cache import TTLCache
from ..tools.gnews_tool import GNewsClient
from ..logging_config import get_logger


app = FastAPI(
    title="GNews Proxy API",
    description="Cached facade over the GNews search API",
    version="1.0.0",
)
logger = get_logger("api.server")

# One cache for the lifetime of the process, shared by every request.
_news_service = NewsService(
    client=GNewsClient(settings),
    cache=TTLCache(default_ttl_seconds=settings.cache_ttl_seconds),
    config=settings,
)


def get_news_service() -> NewsService:
    return _news_service


@app.exception_handler(NewsProxyError)
async def handle_news_proxy_error(request: Request, exc: NewsProxyError) -> JSONResponse:
    logger.warning(
        "news_request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


# ============================================================================
# Health and Status Endpoints
# ============================================================================


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


# ============================================================================
# News Endpoints
# ============================================================================


@app.get("/news")
def get_news(
    n: Optional[str] = None,
    limit: Optional[str] = None,
    q: Optional[str] = None,
    lang: Optional[str] = None,
    country: Optional[str] = None,
    service: NewsService = Depends(get_news_service),
) -> dict:
    """Top headlines, or a keyword search when ``q`` is given.

    ``n`` and ``limit`` are aliases for the article count; ``n`` wins when
    both are present.
    """
    logger.info("news_request", q=q, n=n, limit=limit, lang=lang, country=country)
    document = service.search_headlines(q, max_articles=n or limit, lang=lang, country=country)
    return document.to_response()


@app.get("/news/title/{title}")
def get_news_by_title(title: str, service: NewsService = Depends(get_news_service)) -> dict:
    logger.info("news_title_request", title=title)
    document = service.search_title(title)
    return document.to_response()


@app.get("/news/author/{author}")
def get_news_by_author(
    author: str,
    limit: Optional[str] = None,
    service: NewsService = Depends(get_news_service),
) -> dict:
    logger.info("news_author_request", author=author, limit=limit)
    document = service.search_author(author, limit=limit)
    return document.to_response()
