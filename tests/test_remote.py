from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from quotesync.exceptions import SyncUnavailableError
from quotesync.models.quote import QuoteRecord
from quotesync.remote import RemoteSyncClient, parse_remote_collection

_URL = "https://quotes.example.test/posts"


class _StaticTransport:
    def __init__(self, body: Any = None, *, error: SyncUnavailableError | None = None) -> None:
        self._body = body
        self._error = error
        self.posts: list[tuple[str, dict[str, Any]]] = []

    async def get_json(self, _url: str) -> Any:
        if self._error is not None:
            raise self._error
        return self._body

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        if self._error is not None:
            raise self._error
        self.posts.append((url, dict(payload)))
        return {"id": 101, **payload}


def test_parse_remote_collection_adapts_and_keeps_order() -> None:
    body = [
        {"userId": 1, "id": 1, "title": "first"},
        {"text": "second", "category": "Life"},
        "garbage",
        {"category": "Orphan"},
        {"title": "third", "category": None},
    ]

    assert parse_remote_collection(body) == [
        QuoteRecord(text="first", category="Server"),
        QuoteRecord(text="second", category="Life"),
        QuoteRecord(text="third", category="Server"),
    ]


def test_parse_remote_collection_uses_configured_default_category() -> None:
    records = parse_remote_collection([{"title": "x"}], default_category="Remote")

    assert records == [QuoteRecord(text="x", category="Remote")]


@pytest.mark.parametrize("body", [None, {"items": []}, "text", 42])
def test_non_array_body_is_sync_unavailable(body: Any) -> None:
    with pytest.raises(SyncUnavailableError):
        parse_remote_collection(body)


@pytest.mark.asyncio
async def test_fetch_remote_returns_records() -> None:
    client = RemoteSyncClient(_StaticTransport([{"title": "A", "category": "X"}]), _URL)

    assert await client.fetch_remote() == [QuoteRecord(text="A", category="X")]


@pytest.mark.asyncio
async def test_fetch_remote_malformed_body_carries_url() -> None:
    client = RemoteSyncClient(_StaticTransport({"oops": True}), _URL)

    with pytest.raises(SyncUnavailableError) as exc_info:
        await client.fetch_remote()
    assert exc_info.value.url == _URL


@pytest.mark.asyncio
async def test_fetch_remote_propagates_transport_failure() -> None:
    client = RemoteSyncClient(_StaticTransport(error=SyncUnavailableError("offline", url=_URL)), _URL)

    with pytest.raises(SyncUnavailableError, match="offline"):
        await client.fetch_remote()


@pytest.mark.asyncio
async def test_push_record_posts_text_and_category() -> None:
    transport = _StaticTransport()
    client = RemoteSyncClient(transport, _URL)
    record = QuoteRecord(text="A", category="X")

    result = await client.push_record(record)

    assert result.ok
    assert result.record == record
    assert transport.posts == [(_URL, {"text": "A", "category": "X"})]


@pytest.mark.asyncio
async def test_push_record_failure_is_reported_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    error = SyncUnavailableError("HTTP 503 from POST", status_code=503, url=_URL)
    client = RemoteSyncClient(_StaticTransport(error=error), _URL)

    result = await client.push_record(QuoteRecord(text="A", category="X"))

    assert not result.ok
    assert result.status_code == 503
    assert result.error is not None and "503" in result.error
    assert "Failed to push quote" in caplog.text
