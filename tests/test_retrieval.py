"""Tests for conditional-request evaluation on stored wallpapers."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path

import pytest

from wallpaper.services.retrieval import RetrievalService
from wallpaper.storage.backend import StoredObject

DIGEST = "0" * 32
MODIFIED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc).timestamp()


@pytest.fixture
def stored() -> StoredObject:
    return StoredObject(name=f"{DIGEST}.png", path=Path(f"{DIGEST}.png"), size=1, modified_at=MODIFIED_AT)


@pytest.fixture
def non_utc_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_if_none_match_takes_precedence(stored: StoredObject) -> None:
    headers = {
        "if-none-match": '"deadbeef"',
        "if-modified-since": "Mon, 01 Jan 2024 12:00:00 GMT",
    }

    assert not RetrievalService.is_not_modified(headers, stored)
    assert RetrievalService.is_not_modified({"if-none-match": f'W/"{DIGEST}"'}, stored)
    assert RetrievalService.is_not_modified({"if-none-match": "*"}, stored)


@pytest.mark.usefixtures("non_utc_host")
def test_if_modified_since_without_zone_is_read_as_utc(stored: StoredObject) -> None:
    same_instant = {"if-modified-since": "Mon, 01 Jan 2024 12:00:00 -0000"}
    hour_earlier = {"if-modified-since": "Mon, 01 Jan 2024 11:00:00 -0000"}

    assert RetrievalService.is_not_modified(same_instant, stored)
    assert not RetrievalService.is_not_modified(hour_earlier, stored)


def test_unparseable_if_modified_since_is_ignored(stored: StoredObject) -> None:
    assert not RetrievalService.is_not_modified({"if-modified-since": "yesterday"}, stored)
