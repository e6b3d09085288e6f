"""High-level async application façade for quotesync."""

from __future__ import annotations

import logging
import random
from datetime import timedelta
from typing import Any

import aiohttp

from quotesync._constants import ALL_CATEGORIES, DEFAULT_QUOTES
from quotesync._transport import HttpTransport, Transport
from quotesync.config import QuoteSyncConfig
from quotesync.exceptions import PersistenceError, QuoteSyncError
from quotesync.models.notice import Notice
from quotesync.models.quote import QuoteRecord
from quotesync.models.sync import PushResult, ReconcileResult
from quotesync.notices import NoticeBoard
from quotesync.persistence import JsonFileStorage, KeyValueStorage, LocalPersistence, MemoryStorage
from quotesync.reconcile import SyncEngine
from quotesync.remote import RemoteSyncClient
from quotesync.scheduler import SyncScheduler
from quotesync.store import RecordStore

_logger = logging.getLogger(__name__)


def default_quotes() -> list[QuoteRecord]:
    return [QuoteRecord(text=text, category=category) for text, category in DEFAULT_QUOTES]


class QuoteApp:
    """Quote collection kept in sync with a remote endpoint.

    Usage::

        async with QuoteApp(QuoteSyncConfig.from_env()) as app:
            quote = app.show_random_quote()
            await app.add_quote("Simplicity is the soul of efficiency.", "Design")

    The periodic sync starts on entry when ``config.sync_enabled`` is set;
    :meth:`sync_now` runs one cycle on demand.
    """

    def __init__(
        self,
        config: QuoteSyncConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        durable: KeyValueStorage | None = None,
        session_storage: KeyValueStorage | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._persistence = LocalPersistence(
            durable if durable is not None else JsonFileStorage(config.data_dir),
            session_storage if session_storage is not None else MemoryStorage(),
        )
        self._rng = rng or random.Random()
        self._notices = NoticeBoard(ttl=timedelta(seconds=config.notice_ttl))
        self._engine: SyncEngine | None = None
        self._scheduler: SyncScheduler | None = None
        self._last_viewed: QuoteRecord | None = None
        self._selected_category: str = ALL_CATEGORIES
        self._refresh_count = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> QuoteApp:
        # Local state first: a corrupt cache must fail before any session is opened.
        store = RecordStore(self._load_or_seed())
        self._last_viewed = self._persistence.load_session_last()
        self._selected_category = self._persistence.load_selected_category() or ALL_CATEGORIES

        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)

        remote = RemoteSyncClient(
            self._transport,
            self._config.base_url,
            default_category=self._config.server_category,
        )
        self._engine = SyncEngine(
            store,
            self._persistence,
            remote,
            notices=self._notices,
            on_refresh=self._on_refresh,
        )
        self._scheduler = SyncScheduler(self._engine.run_cycle, self._config.sync_interval)

        if self._config.sync_enabled:
            self._scheduler.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._scheduler is not None:
            self._scheduler.stop()
        if self._engine is not None:
            self._engine.close()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _load_or_seed(self) -> list[QuoteRecord]:
        records = self._persistence.load_durable()
        if records is not None:
            _logger.debug("Loaded %d quotes from durable storage", len(records))
            return records
        records = default_quotes()
        try:
            self._persistence.save_durable(records)
        except PersistenceError as exc:
            _logger.warning("Default quotes could not be saved: %s", exc)
        return records

    def _require_engine(self) -> SyncEngine:
        if self._engine is None:
            raise QuoteSyncError("App not initialized. Use 'async with QuoteApp(...) as app:'")
        return self._engine

    def _on_refresh(self, _result: ReconcileResult) -> None:
        self._refresh_count += 1

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def quotes(self) -> tuple[QuoteRecord, ...]:
        return self._require_engine().store.all()

    @property
    def last_viewed(self) -> QuoteRecord | None:
        """Quote shown most recently in this session."""
        return self._last_viewed

    @property
    def selected_category(self) -> str:
        return self._selected_category

    @property
    def notice(self) -> Notice | None:
        """Current transient notice, ``None`` once it has expired."""
        return self._notices.current()

    @property
    def refresh_count(self) -> int:
        """Number of sync cycles that changed the collection."""
        return self._refresh_count

    @property
    def scheduler(self) -> SyncScheduler | None:
        return self._scheduler

    def categories(self) -> list[str]:
        return self._require_engine().categories

    def show_random_quote(self, category: str | None = None) -> QuoteRecord | None:
        """Pick a random quote from the filtered collection.

        Uses the selected category when *category* is omitted. Returns
        ``None`` when the filter matches nothing; the session's last
        viewed quote is then left unchanged.
        """
        store = self._require_engine().store
        candidates = store.by_category(category if category is not None else self._selected_category)
        if not candidates:
            return None
        quote = self._rng.choice(candidates)
        self._last_viewed = quote
        try:
            self._persistence.save_session_last(quote)
        except PersistenceError as exc:
            _logger.warning("Could not remember last viewed quote: %s", exc)
        return quote

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def select_category(self, category: str) -> None:
        """Remember *category* as the active filter across sessions."""
        self._selected_category = category
        self._persistence.save_selected_category(category)

    async def add_quote(self, text: str, category: str) -> QuoteRecord:
        return await self._require_engine().add_quote(text, category)

    async def import_json(self, payload: str | bytes) -> list[QuoteRecord]:
        return await self._require_engine().import_quotes(payload)

    def export_json(self) -> str:
        return self._require_engine().export_quotes()

    async def sync_now(self) -> ReconcileResult | None:
        return await self._require_engine().run_cycle()

    async def wait_for_pushes(self) -> list[PushResult]:
        return await self._require_engine().wait_for_pushes()
