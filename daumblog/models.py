"""Pydantic models for data structures."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogDocument(BaseModel):
    """One document of a blog search response. Every field may be absent."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    contents: str | None = None
    url: str | None = None
    name: str | None = Field(default=None, alias="blogname")
    thumbnail: str | None = None
    timestamp: datetime | None = Field(default=None, alias="datetime")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _blank_timestamp(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SearchMeta(BaseModel):
    """Paging information returned alongside the documents."""

    total_count: int = 0
    pageable_count: int = 0
    is_end: bool = True


class BlogPayload(BaseModel):
    """Successful search response."""

    meta: SearchMeta = Field(default_factory=SearchMeta)
    documents: list[BlogDocument] = Field(default_factory=list)


class DisplayRecord(BaseModel):
    """Normalized, render-ready projection of a blog document."""

    model_config = ConfigDict(frozen=True)

    thumbnail_url: str | None = None
    name: str | None = None
    title: str | None = None
    timestamp: datetime | None = None


class ErrorInfo(BaseModel):
    """Why a search failed."""

    message: str
    status_code: int = 0


class SearchSuccess(BaseModel):
    kind: Literal["success"] = "success"
    query: str
    payload: BlogPayload


class SearchFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    query: str
    error: ErrorInfo


SearchResult = Annotated[Union[SearchSuccess, SearchFailure], Field(discriminator="kind")]


class SortAction(str, Enum):
    """Choices offered by the list alerts.

    TITLE and DATETIME are sort criteria; CANCEL and CONFIRM only dismiss
    an alert.
    """

    TITLE = "title"
    DATETIME = "datetime"
    CANCEL = "cancel"
    CONFIRM = "confirm"

    @property
    def is_sort(self) -> bool:
        return self in (SortAction.TITLE, SortAction.DATETIME)

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self]

    @property
    def style(self) -> Literal["default", "cancel"]:
        return "default" if self.is_sort else "cancel"


_ACTION_LABELS = {
    SortAction.TITLE: "Title",
    SortAction.DATETIME: "Datetime",
    SortAction.CANCEL: "Cancel",
    SortAction.CONFIRM: "Confirm",
}


class AlertRequest(BaseModel):
    """Prompt the presentation surface should show, answered by one action."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    message: str | None = None
    actions: tuple[SortAction, ...]
    style: Literal["alert", "action_sheet"] = "alert"


class SearchResponse(BaseModel):
    """Search response data for the HTTP surface."""

    query: str
    sort: SortAction
    total: int = 0
    items: list[DisplayRecord] = Field(default_factory=list)
