"""FastAPI dependencies."""

from daumblog.client import BlogSearchClient
from daumblog.config import get_settings
from daumblog.exceptions import ConfigurationError
from daumblog.pipeline import QueryPipeline


def get_search_client() -> BlogSearchClient:
    """Get blog search client instance via dependency injection."""
    settings = get_settings()
    if not settings.kakao_api_key:
        raise ConfigurationError("KAKAO_API_KEY is not configured. Please set it in .env")
    return BlogSearchClient(
        api_key=settings.kakao_api_key,
        base_url=settings.kakao_base_url,
        timeout=settings.search_timeout,
        sort=settings.search_sort,
        size=settings.search_page_size,
    )


def build_pipeline() -> QueryPipeline:
    """Pipeline wired to the configured client and list ordering.

    Entry point for a presentation surface that embeds the stateful
    pipeline; the HTTP app is stateless and uses the client directly.
    """
    settings = get_settings()
    return QueryPipeline(get_search_client(), missing_datetime=settings.missing_datetime)
