"""FastAPI surface over the blog search core."""

import logging
from typing import Annotated, Literal

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from daumblog.client import BlogSearchClient
from daumblog.config import get_settings
from daumblog.dependencies import get_search_client
from daumblog.exceptions import ConfigurationError
from daumblog.middleware.request_logging import RequestLoggingMiddleware
from daumblog.models import SearchFailure, SearchResponse, SortAction
from daumblog.normalize import map_to_display_records
from daumblog.sorting import sort_records
from daumblog.utils.logging import setup_logging

settings = get_settings()
setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description="Daum blog search with title and date ordering",
    debug=settings.debug,
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "api_configured": bool(settings.kakao_api_key),
    }


@app.get("/api/search", response_model=SearchResponse)
async def search(
    q: Annotated[str, Query(description="Search text")] = "",
    sort: Annotated[Literal["title", "datetime"], Query(description="List ordering")] = "title",
    client: BlogSearchClient = Depends(get_search_client),
):
    """Run one search and return the records in the requested order."""
    query = q.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query must not be blank")

    result = await client.search(query)
    if isinstance(result, SearchFailure):
        logger.warning(f"error: {result.error.message}")
        return JSONResponse(status_code=502, content={"ok": False, "error": result.error.message})

    action = SortAction(sort)
    records = sort_records(
        map_to_display_records(result.payload),
        action,
        missing_datetime=settings.missing_datetime,
    )
    return SearchResponse(
        query=query,
        sort=action,
        total=result.payload.meta.total_count,
        items=records,
    )
