from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field


class ArticleSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    url: Optional[str] = None


class Article(BaseModel):
    """Single GNews article. Unknown provider fields are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    source: Optional[ArticleSource] = None
    author: Optional[str] = None


class NewsDocument(BaseModel):
    """Provider response passed through to clients.

    Only ``articles`` and ``totalArticles`` are inspected; every other field
    the provider sends is preserved so responses survive schema additions.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_articles: int = Field(default=0, alias="totalArticles")
    articles: List[Article] = []

    def with_articles(self, articles: List[Article]) -> "NewsDocument":
        """Return a copy narrowed to ``articles`` with the count updated."""
        return self.model_copy(
            update={"articles": list(articles), "total_articles": len(articles)}
        )

    def to_response(self) -> dict:
        # exclude_unset keeps the payload identical to what the provider sent;
        # with_articles marks totalArticles as set when it narrows the list
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data["articles"] = [
            article.model_dump(by_alias=True, exclude_unset=True) for article in self.articles
        ]
        return data


class NewsQuery(BaseModel):
    """Normalized request parameters, used to derive cache keys."""

    mode: Literal["search", "top-headlines", "title", "author"]
    text: str = ""
    max_articles: Optional[int] = None
    lang: Optional[str] = None
    country: Optional[str] = None

    def cache_key(self) -> str:
        parts = ["news", self.mode]
        if self.text:
            parts.append(self.text)
        if self.mode == "author":
            parts.append(f"limit{self.max_articles}")
        elif self.max_articles is not None:
            parts.append(str(self.max_articles))
        if self.lang:
            parts.append(self.lang)
        if self.country:
            parts.append(self.country)
        return "_".join(parts)
