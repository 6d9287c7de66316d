"""
News API(newsapi.org v2) 비동기 클라이언트
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import UpstreamError

logger = logging.getLogger(__name__)


class NewsApiClient:

    def __init__(
        self,
        base_url: str = "https://newsapi.org/v2",
        *,
        country: str = "us",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.timeout = timeout
        # 테스트에서는 httpx.MockTransport를 주입
        self._transport = transport

    async def _get(self, path: str, params: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        """
        News API GET 호출.

        Raises:
            UpstreamError: News API가 2xx가 아닌 상태 코드를 반환한 경우 (상태 코드 그대로 전달)
            httpx.HTTPError: 네트워크 오류/타임아웃
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(path, params=params, headers={"X-Api-Key": api_key})

        if response.is_error:
            logger.error(f"News API HTTP error: {response.status_code} - {response.text[:500]}")
            raise UpstreamError(response.status_code, f"News API error: {response.text}")
        return response.json()

    async def top_headlines(
        self,
        api_key: str,
        *,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"country": self.country, "page": page, "pageSize": page_size}
        if category:
            params["category"] = category
        return await self._get("/top-headlines", params, api_key)

    async def everything(
        self,
        api_key: str,
        *,
        query: str,
        page: int = 1,
        page_size: int = 10,
    ) -> Dict[str, Any]:
        params = {
            "q": query,
            "page": page,
            "pageSize": page_size,
            "language": "en",
            "sortBy": "relevancy",
        }
        return await self._get("/everything", params, api_key)
