"""Shared fixtures for blog search tests."""

import asyncio

import pytest

from daumblog.models import BlogPayload, ErrorInfo, SearchFailure, SearchSuccess


def make_payload(*documents: dict, total: int | None = None) -> dict:
    """Raw API body with the given documents."""
    count = len(documents) if total is None else total
    return {
        "meta": {"total_count": count, "pageable_count": count, "is_end": True},
        "documents": list(documents),
    }


def make_document(title=None, blogname=None, thumbnail=None, datetime=None) -> dict:
    doc = {"contents": "", "url": "https://blog.example.com/post"}
    if title is not None:
        doc["title"] = title
    if blogname is not None:
        doc["blogname"] = blogname
    if thumbnail is not None:
        doc["thumbnail"] = thumbnail
    if datetime is not None:
        doc["datetime"] = datetime
    return doc


def success(query: str, *documents: dict) -> SearchSuccess:
    return SearchSuccess(query=query, payload=BlogPayload.model_validate(make_payload(*documents)))


def failure(query: str, message: str = "API returned 500") -> SearchFailure:
    return SearchFailure(query=query, error=ErrorInfo(message=message, status_code=500))


class FakeSearchClient:
    """Search client returning canned results, optionally held until released."""

    def __init__(self, results: dict):
        self.results = results
        self.calls: list[str] = []
        self.cancelled: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[query] = gate
        return gate

    async def search(self, query: str):
        self.calls.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            try:
                await gate.wait()
            except asyncio.CancelledError:
                self.cancelled.append(query)
                raise
        result = self.results[query]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def sample_body():
    """Three documents in API order."""
    return make_payload(
        make_document(
            title="Spring in Seoul",
            blogname="Alice",
            thumbnail="https://search1.kakaocdn.net/argon/130x130_85_c/1",
            datetime="2023-02-01T10:00:00.000+09:00",
        ),
        make_document(
            title="Autumn hiking",
            blogname="Bob",
            thumbnail="",
            datetime="2023-03-05T08:30:00.000+09:00",
        ),
        make_document(title="Winter food", blogname="Carol"),
    )
