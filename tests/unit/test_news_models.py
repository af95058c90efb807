from src.gnews_proxy.models.news import NewsDocument


def test_response_omits_count_the_provider_did_not_send() -> None:
    document = NewsDocument.model_validate({"articles": [{"title": "One"}, {"title": "Two"}]})

    body = document.to_response()

    assert "totalArticles" not in body
    assert body == {"articles": [{"title": "One"}, {"title": "Two"}]}


def test_narrowed_document_reports_new_count() -> None:
    document = NewsDocument.model_validate({"articles": [{"title": "One"}, {"title": "Two"}]})

    narrowed = document.with_articles(document.articles[1:])

    assert narrowed.to_response() == {"articles": [{"title": "Two"}], "totalArticles": 1}
    assert "totalArticles" not in document.to_response()


def test_response_keeps_provider_count_and_extra_fields() -> None:
    payload = {
        "totalArticles": 42,
        "information": {"realTimeArticles": {"message": "delayed"}},
        "articles": [{"title": "One", "publishedAt": "2024-01-01T00:00:00Z", "id": "abc"}],
    }

    assert NewsDocument.model_validate(payload).to_response() == payload
