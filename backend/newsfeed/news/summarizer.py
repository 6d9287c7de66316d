"""
기사 요약 생성 모듈

기본은 이미 받아 둔 기사 필드(description/content/source)를 조합한 요약이며,
USE_GEMINI가 켜져 있고 사용할 Gemini API 키가 있으면 Gemini 요약을 먼저 시도합니다.
"""

import logging
from typing import List, Optional

from ..articles.schemas import Article

logger = logging.getLogger(__name__)

# content 앞부분이 description에 이미 포함되어 있는지 비교할 길이
DUPLICATE_PREFIX_LENGTH = 30


def build_summary(article: Article) -> Optional[str]:
    if article.summary:
        return article.summary

    if article.description:
        description = article.description
        content = article.content or ""
        summary = f"{description}\n\n"
        # content가 description과 같은 내용으로 시작하면 생략
        if content and content[:DUPLICATE_PREFIX_LENGTH] not in description:
            summary += f"{content}\n\n"
        if article.source:
            summary += f"Source: {article.source}"
        return summary.strip()

    if article.content:
        return article.content

    if article.title:
        return f"This article covers {article.title}. The full content is available at the original source."

    return None


def _build_gemini_prompt(article: Article) -> str:
    parts = [article.title, article.description, article.content]
    body = "\n\n".join(p for p in parts if p)
    return (
        "Summarize the following news article in 3-5 sentences of plain English. "
        "Do not add information that is not in the article.\n\n"
        f"{body}"
    )


async def _generate_with_gemini(article: Article, api_key: str, model: str) -> Optional[str]:
    from google import genai

    client = genai.Client(api_key=api_key)
    response = await client.aio.models.generate_content(
        model=model,
        contents=_build_gemini_prompt(article),
    )
    text = (response.text or "").strip()
    return text or None


async def summarize_article(
    article: Article,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> Optional[str]:
    """
    기사 요약을 반환합니다. 이미 요약이 있으면 그대로 반환합니다 (멱등).

    Args:
        article: 요약할 기사
        api_key: Gemini API 키. None이면 Gemini를 호출하지 않음
        model: Gemini 모델 이름
    """
    if article.summary:
        return article.summary

    if api_key and model:
        try:
            summary = await _generate_with_gemini(article, api_key, model)
            if summary:
                logger.info(f"Gemini summary generated for article_id={article.id}")
                return summary
            logger.warning(f"Gemini returned empty summary for article_id={article.id}; using fallback")
        except Exception as e:
            logger.error(f"Gemini summarization failed for article_id={article.id}: {e}")

    return build_summary(article)


def generate_news_for_interests(interests: List[str]) -> Optional[str]:
    """관심사 목록으로 News API 검색어를 만듭니다. ("AI OR Space")"""
    if not interests:
        return None
    return " OR ".join(interests)
