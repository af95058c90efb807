from .news import Article, ArticleSource, NewsDocument, NewsQuery  # noqa: F401
from .errors import (  # noqa: F401
    NewsProxyError,
    ConfigurationError,
    ClientInputError,
    ProviderError,
    InternalError,
)
