"""Kakao (Daum) blog search API client."""

import logging
from typing import Any, Literal

import httpx

from daumblog.exceptions import ConfigurationError, SearchFailed
from daumblog.models import ErrorInfo, SearchFailure, SearchResult, SearchSuccess
from daumblog.normalize import parse_blog_payload

logger = logging.getLogger(__name__)

MAX_PAGE = 50
MAX_SIZE = 50


class BlogSearchClient:
    """Async client for the blog search endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://dapi.kakao.com/v2/search/blog",
        timeout: float = 10.0,
        sort: Literal["accuracy", "recency"] = "accuracy",
        size: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigurationError("Kakao API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sort = sort
        self.size = size
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        """Get request headers with API key."""
        return {
            "Authorization": f"KakaoAK {self.api_key}",
            "Accept": "application/json",
            "User-Agent": "DaumBlogSearch/1.0",
        }

    async def search(
        self,
        query: str,
        page: int = 1,
        size: int | None = None,
        sort: Literal["accuracy", "recency"] | None = None,
    ) -> SearchResult:
        """
        Search blogs for ``query``.

        Failures never raise; they come back as a ``SearchFailure`` carrying
        a human-readable message.

        Args:
            query: Search text
            page: Result page (1-50)
            size: Documents per page (1-50), defaults to the client setting
            sort: "accuracy" or "recency", defaults to the client setting

        Returns:
            SearchSuccess with the parsed payload, or SearchFailure
        """
        try:
            data = await self._fetch(query, page=page, size=size, sort=sort)
            payload = parse_blog_payload(data)
        except SearchFailed as e:
            return SearchFailure(
                query=query,
                error=ErrorInfo(message=e.reason, status_code=e.status_code),
            )
        logger.debug(f"Blog search for {query!r} returned {len(payload.documents)} documents")
        return SearchSuccess(query=query, payload=payload)

    async def _fetch(
        self,
        query: str,
        page: int,
        size: int | None,
        sort: str | None,
    ) -> Any:
        params: dict[str, Any] = {
            "query": query,
            "sort": self.sort if sort is None else sort,
            "page": max(1, min(page, MAX_PAGE)),
            "size": max(1, min(self.size if size is None else size, MAX_SIZE)),
        }

        logger.info(f"Blog search request: {self.base_url} with params: {params}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(self.base_url, params=params)
                logger.debug(f"Blog search response: {response.status_code}")
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                error_text = e.response.text[:1000] if e.response.text else ""
                logger.error(
                    f"Blog search API error {status}: "
                    f"URL={self.base_url}, Params={params}, Response={error_text}"
                )
                raise SearchFailed(f"API returned {status}", status_code=status) from e
            except httpx.RequestError as e:
                logger.error(f"Network error connecting to blog search API: {e}")
                raise SearchFailed(f"Network error connecting to blog search API: {e}") from e
            except ValueError as e:
                logger.error(f"Blog search API returned a non-JSON body: {e}")
                raise SearchFailed("Malformed response from blog search API") from e
