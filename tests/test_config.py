"""Tests for settings, wiring and log formatting."""

import json
import logging

import pytest

from daumblog.client import BlogSearchClient
from daumblog.config import Settings
from daumblog.dependencies import build_pipeline, get_search_client
from daumblog.exceptions import ConfigurationError
from daumblog.models import SortAction
from daumblog.utils.logging import (
    JSONFormatter,
    get_logger,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("KAKAO_API_KEY", raising=False)
    settings = Settings(_env_file=None)

    assert settings.kakao_api_key == ""
    assert settings.kakao_base_url == "https://dapi.kakao.com/v2/search/blog"
    assert settings.search_sort == "accuracy"
    assert settings.missing_datetime == "now"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("KAKAO_API_KEY", "from-env")
    monkeypatch.setenv("MISSING_DATETIME", "last")
    monkeypatch.setenv("SEARCH_PAGE_SIZE", "25")
    settings = Settings(_env_file=None)

    assert settings.kakao_api_key == "from-env"
    assert settings.missing_datetime == "last"
    assert settings.search_page_size == 25


def test_search_client_requires_key(monkeypatch):
    monkeypatch.setattr(
        "daumblog.dependencies.get_settings", lambda: Settings(_env_file=None, kakao_api_key="")
    )
    with pytest.raises(ConfigurationError):
        get_search_client()


def test_build_pipeline_uses_settings(monkeypatch):
    settings = Settings(
        _env_file=None,
        kakao_api_key="k",
        search_sort="recency",
        search_page_size=20,
        missing_datetime="last",
    )
    monkeypatch.setattr("daumblog.dependencies.get_settings", lambda: settings)

    pipeline = build_pipeline()

    assert isinstance(pipeline.client, BlogSearchClient)
    assert pipeline.client.sort == "recency"
    assert pipeline.client.size == 20
    assert pipeline.missing_datetime == "last"
    assert pipeline.criterion is SortAction.TITLE


def test_json_formatter_includes_context():
    record = logging.LogRecord("daumblog.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.request_id = "abc"
    record.status_code = 200

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["request_id"] == "abc"
    assert data["status_code"] == 200
    assert data["timestamp"].endswith("Z")


def test_structured_logger_stamps_request_id(caplog):
    logger = get_logger("daumblog.test")
    token = set_request_id("req-1")
    try:
        with caplog.at_level(logging.INFO, logger="daumblog.test"):
            logger.info("searching", extra={"query": "cats"})
    finally:
        reset_request_id(token)

    assert caplog.records[-1].request_id == "req-1"
    assert caplog.records[-1].query == "cats"


def test_action_labels_and_styles():
    assert SortAction.TITLE.label == "Title"
    assert SortAction.DATETIME.style == "default"
    assert SortAction.CANCEL.style == "cancel"
    assert SortAction.CONFIRM.is_sort is False


def test_request_id_is_unset_after_reset():
    token = set_request_id("req-2")
    reset_request_id(token)

    assert get_request_id() is None
