"""Remote collection client: fetch the server snapshot, push new quotes."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from quotesync._constants import SERVER_CATEGORY
from quotesync._transport import Transport
from quotesync.exceptions import SyncUnavailableError
from quotesync.models.quote import QuoteRecord, RemoteQuote
from quotesync.models.sync import PushResult

_logger = logging.getLogger(__name__)


def parse_remote_collection(body: Any, *, default_category: str = SERVER_CATEGORY) -> list[QuoteRecord]:
    """Adapt a decoded ``GET`` body to local records, keeping server order.

    Raises :class:`SyncUnavailableError` when the body is not a JSON array.
    Individual items that are not objects or carry no text are skipped.
    """
    if not isinstance(body, list):
        raise SyncUnavailableError(f"Remote collection is not a JSON array (got {type(body).__name__})")

    records: list[QuoteRecord] = []
    for position, item in enumerate(body):
        if not isinstance(item, dict):
            _logger.debug("Skipping remote item #%d: not an object", position)
            continue
        try:
            remote = RemoteQuote.model_validate(item)
        except ValidationError:
            _logger.debug("Skipping remote item #%d: no usable text", position, exc_info=True)
            continue
        records.append(remote.to_record(default_category))
    return records


class RemoteSyncClient:
    """Talks to the remote collection endpoint through a :class:`Transport`."""

    def __init__(
        self,
        transport: Transport,
        base_url: str,
        *,
        default_category: str = SERVER_CATEGORY,
    ) -> None:
        self._transport = transport
        self._base_url = base_url
        self._default_category = default_category

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_remote(self) -> list[QuoteRecord]:
        """Fetch the remote collection.

        Raises
        ------
        SyncUnavailableError
            Network failure, non-2xx status, or a malformed body.
        """
        body = await self._transport.get_json(self._base_url)
        try:
            records = parse_remote_collection(body, default_category=self._default_category)
        except SyncUnavailableError as exc:
            exc.url = self._base_url
            raise
        _logger.debug("Fetched %d remote quotes", len(records))
        return records

    async def push_record(self, record: QuoteRecord) -> PushResult:
        """Send one locally created quote to the remote collection.

        Failures are logged and reported through the returned
        :class:`PushResult`; nothing is raised and nothing is retried.
        """
        payload = {"text": record.text, "category": record.category}
        try:
            await self._transport.post_json(self._base_url, payload)
        except SyncUnavailableError as exc:
            _logger.warning("Failed to push quote to %s: %s", self._base_url, exc)
            return PushResult(record=record, ok=False, status_code=exc.status_code, error=str(exc))
        _logger.debug("Pushed quote %r", record.text[:64])
        return PushResult(record=record, ok=True)
