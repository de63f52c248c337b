"""Tests for compile_news.models module."""

from compile_news.models import ErrorKind, NewsArticle, StageResult


class TestNewsArticle:
    def test_set_content_clears_derived_fields(self) -> None:
        article = NewsArticle(
            url="https://news.example.com/a",
            content="old",
            abbreviated_content="old",
            summarized_content="old",
        )

        article.set_content("New title", "new")

        assert (article.title, article.content) == ("New title", "new")
        assert article.abbreviated_content is None
        assert article.summarized_content is None

    def test_set_content_never_stores_none(self) -> None:
        article = NewsArticle()
        article.set_content(None, None)
        assert (article.title, article.content) == ("", "")

    def test_clear_content_keeps_discovery_fields(self) -> None:
        article = NewsArticle(url="https://news.example.com/a", publisher="Example", priority=3, content="text")
        article.clear_content()
        assert article.content == ""
        assert (article.url, article.publisher, article.priority) == ("https://news.example.com/a", "Example", 3)


class TestStageResult:
    def test_success(self) -> None:
        result = StageResult.success(0)
        assert result.ok
        assert result.value == 0

    def test_failure(self) -> None:
        result = StageResult.failure(ErrorKind.RANKING, "diverged")
        assert not result.ok
        assert result.value is None
        assert result.message == "diverged"
