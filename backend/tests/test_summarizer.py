import pytest

from newsfeed.articles.schemas import Article
from newsfeed.news import summarizer
from newsfeed.news.summarizer import build_summary, generate_news_for_interests, summarize_article


def _article(**fields) -> Article:
    return Article(id=1, **{"title": "Rocket lands", **fields})


class TestBuildSummary:

    def test_existing_summary_short_circuits(self):
        article = _article(summary="Done", description="Ignored")
        assert build_summary(article) == "Done"

    def test_description_content_and_source(self):
        article = _article(description="Short description.", content="Longer body text here.", source="AP")
        assert build_summary(article) == "Short description.\n\nLonger body text here.\n\nSource: AP"

    def test_content_skipped_when_duplicate_of_description(self):
        description = "The quick brown fox jumps over the lazy dog near the river."
        content = "The quick brown fox jumps over the lazy dog… [+1200 chars]"
        article = _article(description=description, content=content)
        assert build_summary(article) == description

    def test_description_only_is_trimmed(self):
        assert build_summary(_article(description="Just this.  ")) == "Just this."

    def test_content_only(self):
        assert build_summary(_article(content="Body only")) == "Body only"

    def test_title_fallback(self):
        assert build_summary(_article()) == (
            "This article covers Rocket lands. The full content is available at the original source."
        )

    def test_nothing_usable(self):
        assert build_summary(_article(title="")) is None


class TestSummarizeArticle:

    async def test_idempotent(self):
        article = _article(summary="Kept")
        assert await summarize_article(article) == "Kept"
        assert await summarize_article(article) == "Kept"

    async def test_without_key_uses_fallback(self):
        assert await summarize_article(_article(content="Body")) == "Body"

    async def test_gemini_summary_used(self, monkeypatch):
        calls = []

        async def fake_generate(article, api_key, model):
            calls.append((api_key, model))
            return "Gemini says hi"

        monkeypatch.setattr(summarizer, "_generate_with_gemini", fake_generate)
        result = await summarize_article(_article(content="Body"), api_key="g-key", model="gemini-test")
        assert result == "Gemini says hi"
        assert calls == [("g-key", "gemini-test")]

    async def test_gemini_failure_falls_back(self, monkeypatch):
        async def broken(article, api_key, model):
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(summarizer, "_generate_with_gemini", broken)
        result = await summarize_article(_article(content="Body"), api_key="g-key", model="gemini-test")
        assert result == "Body"


class TestGenerateNewsForInterests:

    def test_empty(self):
        assert generate_news_for_interests([]) is None

    @pytest.mark.parametrize(
        "interests, expected",
        [
            (["ai"], "ai"),
            (["ai", "space"], "ai OR space"),
            (["AI", "AI"], "AI OR AI"),
        ],
    )
    def test_join(self, interests, expected):
        assert generate_news_for_interests(interests) == expected
