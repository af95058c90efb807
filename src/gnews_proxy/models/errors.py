from typing import Any


class NewsProxyError(Exception):
    """Base error for failures reported to API clients."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict:
        return {"message": self.message, "details": self.details}


class ConfigurationError(NewsProxyError):
    """Missing or invalid process configuration, e.g. no GNews API key."""

    status_code = 500


class ClientInputError(NewsProxyError):
    status_code = 400


class ProviderError(NewsProxyError):
    """GNews answered with a non-success status.

    ``status_code`` mirrors the upstream status; ``details`` holds the parsed
    error body, or the raw text when it was not JSON.
    """


class InternalError(NewsProxyError):
    """Network, parse or unexpected failure while talking to the provider."""

    status_code = 500
