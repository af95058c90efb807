from typing import Any, Dict

import httpx
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..logging_config import get_logger
from ..models.errors import InternalError, ProviderError
from ..models.news import NewsDocument


logger = get_logger("tools.gnews")

_DEFAULT_PROVIDER_MESSAGE = "Failed to fetch from GNews."


def _provider_message(body: Any) -> str:
    """Pick a human readable message out of a GNews error body.

    GNews reports errors either as ``{"message": ...}`` or as
    ``{"errors": [...]}`` whose items are plain strings or ``{"message": ...}``.
    """
    if not isinstance(body, dict):
        return _DEFAULT_PROVIDER_MESSAGE
    if body.get("message"):
        return str(body["message"])
    errors = body.get("errors")
    if isinstance(errors, dict):
        errors = list(errors.values())
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
        if isinstance(first, str):
            return first
    return _DEFAULT_PROVIDER_MESSAGE


class GNewsClient:
    """Thin synchronous client for the GNews v4 REST API.

    Every call returns a parsed ``NewsDocument`` or raises ``ProviderError``
    (non-success status) or ``InternalError`` (network or parse failure).
    There are no retries.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or default_settings

    def search(
        self,
        api_key: str,
        query: str,
        max_results: int | None = None,
        lang: str | None = None,
        country: str | None = None,
        in_fields: str | None = None,
    ) -> NewsDocument:
        params: Dict[str, Any] = {"q": query}
        if in_fields:
            params["in"] = in_fields
        if max_results is not None:
            params["max"] = max_results
        if lang:
            params["lang"] = lang
        if country:
            params["country"] = country
        return self._get("search", params, api_key)

    def top_headlines(
        self,
        api_key: str,
        max_results: int | None = None,
        lang: str | None = None,
        country: str | None = None,
    ) -> NewsDocument:
        params: Dict[str, Any] = {}
        if max_results is not None:
            params["max"] = max_results
        if lang:
            params["lang"] = lang
        if country:
            params["country"] = country
        return self._get("top-headlines", params, api_key)

    def _get(self, endpoint: str, params: Dict[str, Any], api_key: str) -> NewsDocument:
        url = f"{self._settings.gnews_base_url.rstrip('/')}/{endpoint}"
        logger.info("gnews_request", endpoint=endpoint, params=params)

        request_params = dict(params, expand="content", apikey=api_key)
        try:
            response = httpx.get(url, params=request_params, timeout=self._settings.request_timeout)
        except httpx.HTTPError as exc:
            logger.error("gnews_request_failed", endpoint=endpoint, error=str(exc))
            raise InternalError(
                "Internal Server Error while fetching GNews.", details=str(exc)
            ) from exc

        if not response.is_success:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            logger.error(
                "gnews_provider_error",
                endpoint=endpoint,
                status_code=response.status_code,
                body=body,
            )
            raise ProviderError(
                _provider_message(body), details=body, status_code=response.status_code
            )

        try:
            return NewsDocument.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("gnews_parse_failed", endpoint=endpoint, error=str(exc))
            raise InternalError(
                "Could not parse GNews response.", details=str(exc)
            ) from exc
