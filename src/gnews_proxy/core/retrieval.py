from functools import partial
from typing import Callable, Optional

from ..config import Settings, settings as default_settings
from ..models.errors import (
    ClientInputError,
    ConfigurationError,
    InternalError,
    NewsProxyError,
    ProviderError,
)
from ..models.news import NewsDocument, NewsQuery
from ..tools.cache import TTLCache
from ..tools.gnews_tool import GNewsClient
from ..logging_config import get_logger
from .filters import filter_by_author, normalize_key_text, select_exact_title


logger = get_logger("core.retrieval")

MIN_ARTICLES = 1
MAX_ARTICLES = 100


def parse_max_articles(value: str | int | None, default: int) -> int:
    """Validate a requested article count, rejecting anything outside 1..100."""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return default
    try:
        count = int(value)
    except (TypeError, ValueError):
        count = None
    if count is None or not MIN_ARTICLES <= count <= MAX_ARTICLES:
        raise ClientInputError(
            'Parameter "n" or "limit" must be a positive number '
            f"(between {MIN_ARTICLES} and {MAX_ARTICLES})."
        )
    return count


class NewsService:
    """Cache-backed fetch, filter and store pipeline over GNews.

    Each lookup derives a cache key from its normalized query. A hit returns
    the stored document without touching the network; a miss calls GNews,
    applies the optional local filter and stores the result. Provider errors
    are never cached.
    """

    def __init__(
        self,
        client: GNewsClient | None = None,
        cache: TTLCache | None = None,
        config: Settings | None = None,
    ) -> None:
        self._settings = config or default_settings
        self._client = client if client is not None else GNewsClient(self._settings)
        # an empty TTLCache is falsy, so test against None
        self._cache = (
            cache
            if cache is not None
            else TTLCache(default_ttl_seconds=self._settings.cache_ttl_seconds)
        )

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def search_headlines(
        self,
        query: str | None = None,
        max_articles: str | int | None = None,
        lang: str | None = None,
        country: str | None = None,
    ) -> NewsDocument:
        """Keyword search when ``query`` has text, top headlines otherwise."""
        api_key = self._api_key()
        count = parse_max_articles(max_articles, self._settings.default_max_articles)
        lang = lang or self._settings.default_lang
        country = country or self._settings.default_country
        text = (query or "").strip()

        if text:
            news_query = NewsQuery(
                mode="search",
                text=normalize_key_text(text),
                max_articles=count,
                lang=lang,
                country=country,
            )
            fetch = partial(
                self._client.search, api_key, text, max_results=count, lang=lang, country=country
            )
        else:
            news_query = NewsQuery(
                mode="top-headlines", max_articles=count, lang=lang, country=country
            )
            fetch = partial(
                self._client.top_headlines, api_key, max_results=count, lang=lang, country=country
            )

        return self._fetch_cached(news_query, fetch)

    def search_title(self, title: str | None) -> NewsDocument:
        """Search titles, narrowing to an exact case-insensitive match if one exists."""
        api_key = self._api_key()
        text = (title or "").strip()
        if not text:
            raise ClientInputError("Title parameter is required and must be a non-empty string.")

        news_query = NewsQuery(mode="title", text=normalize_key_text(text))
        return self._fetch_cached(
            news_query,
            partial(self._client.search, api_key, text, in_fields="title"),
            refine=partial(select_exact_title, title=text),
            provider_message="Error fetching news by title from provider.",
        )

    def search_author(self, author: str | None, limit: str | int | None = None) -> NewsDocument:
        """Keyword search on the author name, refined to articles by that author.

        Falls back to the unfiltered keyword results when no article credits
        the author.
        """
        api_key = self._api_key()
        name = (author or "").strip()
        if not name:
            raise ClientInputError("Author parameter is required.")
        count = parse_max_articles(limit, self._settings.default_max_articles)

        news_query = NewsQuery(mode="author", text=normalize_key_text(name), max_articles=count)
        return self._fetch_cached(
            news_query,
            partial(self._client.search, api_key, name, max_results=count),
            refine=partial(filter_by_author, author=name),
            provider_message="Error fetching news by author from provider.",
            unwrap_error_list=True,
        )

    def _api_key(self) -> str:
        api_key = self._settings.gnews_api_key
        if not api_key:
            logger.error("gnews_api_key_missing")
            raise ConfigurationError("GNews API key is not configured.")
        return api_key

    def _fetch_cached(
        self,
        news_query: NewsQuery,
        fetch: Callable[[], NewsDocument],
        refine: Optional[Callable[[NewsDocument], NewsDocument]] = None,
        provider_message: str | None = None,
        unwrap_error_list: bool = False,
    ) -> NewsDocument:
        cache_key = news_query.cache_key()
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.info("news_cache_hit", cache_key=cache_key, mode=news_query.mode)
            return cached

        try:
            document = fetch()
            if refine is not None:
                document = refine(document)
        except ProviderError as exc:
            if provider_message is None:
                raise
            details = exc.details
            if unwrap_error_list and isinstance(details, dict) and details.get("errors"):
                details = details["errors"]
            raise ProviderError(
                provider_message, details=details, status_code=exc.status_code
            ) from exc
        except NewsProxyError:
            raise
        except Exception as exc:
            logger.exception("news_fetch_unexpected_error", cache_key=cache_key)
            raise InternalError("Internal server error.", details=str(exc)) from exc

        self._cache.put(cache_key, document, self._settings.cache_ttl_seconds)
        logger.info(
            "news_fetched",
            cache_key=cache_key,
            mode=news_query.mode,
            results=len(document.articles),
            total_articles=document.total_articles,
        )
        return document
