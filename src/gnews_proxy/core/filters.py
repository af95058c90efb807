import re
from typing import List

from ..models.news import Article, NewsDocument


_WHITESPACE = re.compile(r"\s+")


def normalize_key_text(text: str) -> str:
    """Lowercase, trim and collapse whitespace runs into underscores."""
    return _WHITESPACE.sub("_", text.strip().lower())


def select_exact_title(document: NewsDocument, title: str) -> NewsDocument:
    """Narrow to the first article whose title equals ``title`` ignoring case.

    Without an exact match the provider document is returned untouched.
    """
    wanted = title.lower()
    for article in document.articles:
        if (article.title or "").lower() == wanted:
            return document.with_articles([article])
    return document


def filter_by_author(document: NewsDocument, author: str) -> NewsDocument:
    """Keep articles whose author contains ``author`` ignoring case.

    GNews has no author filter, so the keyword results are refined here.
    When nothing matches the keyword results are returned as they are.
    """
    wanted = author.lower()
    matches: List[Article] = [
        article
        for article in document.articles
        if article.author and wanted in article.author.lower()
    ]
    if not matches:
        return document
    return document.with_articles(matches)
