"""Reconciliation of the local collection with the remote snapshot.

Merge policy:

- quotes are matched by exact ``text``;
- a remote quote with unknown text is appended locally;
- on a category mismatch the remote value overwrites the local one in
  place (remote always wins, no timestamps, no three-way merge);
- local quotes absent from the remote snapshot are kept.

:class:`SyncEngine` runs the merge on each cycle and is also the single
writer for user additions and imports, so no two mutations of the
collection ever interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Iterable

from quotesync._constants import MAX_PUSH_RESULTS
from quotesync.exceptions import PersistenceError, QuoteValidationError, SyncUnavailableError
from quotesync.models.notice import NoticeLevel
from quotesync.models.quote import QuoteRecord
from quotesync.models.sync import PushResult, ReconcileResult
from quotesync.notices import NoticeBoard
from quotesync.persistence import LocalPersistence
from quotesync.remote import RemoteSyncClient
from quotesync.store import RecordStore
from quotesync.transfer import dump_export, parse_import

_logger = logging.getLogger(__name__)


def reconcile(store: RecordStore, remote_records: Iterable[QuoteRecord]) -> ReconcileResult:
    """Merge *remote_records* into *store*, in the order given."""
    added: list[QuoteRecord] = []
    updated: list[QuoteRecord] = []
    for remote in remote_records:
        local = store.find_by_text(remote.text)
        if local is None:
            store.append(remote)
            added.append(remote)
            continue
        if local.category != remote.category:
            changed = store.update_category(remote.text, remote.category)
            if changed is not None:
                updated.append(changed)
    return ReconcileResult(added=added, updated=updated)


class SyncEngine:
    """Owns every write to the collection and its durable copy.

    Parameters
    ----------
    store
        The in-memory collection.
    persistence
        Where the collection is saved after each mutation.
    remote
        Remote collection client used for pulls and pushes.
    notices
        Board receiving the transient "synced" / warning notices.
    on_refresh
        Called with the merge result whenever a cycle changed the
        collection, after the save attempt.
    max_push_results
        How many completed push results are kept for
        :meth:`wait_for_pushes`. Beyond that the oldest are dropped.
    """

    def __init__(
        self,
        store: RecordStore,
        persistence: LocalPersistence,
        remote: RemoteSyncClient,
        *,
        notices: NoticeBoard | None = None,
        on_refresh: Callable[[ReconcileResult], None] | None = None,
        max_push_results: int = MAX_PUSH_RESULTS,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._remote = remote
        self._notices = notices if notices is not None else NoticeBoard()
        self._on_refresh = on_refresh
        self._lock = asyncio.Lock()
        self._categories: list[str] = store.categories()
        self._pending_pushes: set[asyncio.Task[PushResult]] = set()
        self._push_results: deque[PushResult] = deque(maxlen=max_push_results)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def notices(self) -> NoticeBoard:
        return self._notices

    @property
    def categories(self) -> list[str]:
        """Category list as of the last mutation."""
        return list(self._categories)

    # ------------------------------------------------------------------
    # Pull
    # ------------------------------------------------------------------

    async def run_cycle(self) -> ReconcileResult | None:
        """Fetch the remote collection and merge it.

        Returns the merge result, or ``None`` when the remote was
        unavailable and the cycle was skipped.
        """
        try:
            remote_records = await self._remote.fetch_remote()
        except SyncUnavailableError as exc:
            _logger.info("Sync skipped, remote unavailable: %s", exc)
            return None

        async with self._lock:
            result = reconcile(self._store, remote_records)
            if not result.changed:
                _logger.debug("Sync cycle: no changes")
                return result
            saved = self._persist()
            self._categories = self._store.categories()

        _logger.info("Sync cycle applied remote changes: %s", result.summary())
        if saved:
            self._notices.post(f"Quotes synced with server ({result.summary()}).")
        if self._on_refresh is not None:
            self._on_refresh(result)
        return result

    # ------------------------------------------------------------------
    # Local mutations
    # ------------------------------------------------------------------

    async def add_quote(self, text: str, category: str) -> QuoteRecord:
        """Add a quote entered by the user and push it to the remote once.

        Raises
        ------
        QuoteValidationError
            Text or category is empty after trimming.
        """
        text = text.strip()
        category = category.strip()
        if not text or not category:
            raise QuoteValidationError("Please enter both a quote and a category.")
        record = QuoteRecord(text=text, category=category)

        async with self._lock:
            self._store.append(record)
            self._persist()
            self._categories = self._store.categories()

        self._schedule_push(record)
        return record

    async def import_quotes(self, payload: str | bytes) -> list[QuoteRecord]:
        """Append every quote of an exported JSON payload.

        Raises
        ------
        ImportFormatError
            The payload is not a JSON array of quotes; nothing is imported.
        """
        records = parse_import(payload)
        async with self._lock:
            self._store.extend(records)
            self._persist()
            self._categories = self._store.categories()
        _logger.info("Imported %d quotes", len(records))
        return records

    def export_quotes(self) -> str:
        return dump_export(self._store.all())

    def _persist(self) -> bool:
        try:
            self._persistence.save_durable(self._store.all())
        except PersistenceError as exc:
            _logger.warning("Quotes could not be saved and will not survive a restart: %s", exc)
            self._notices.post("Changes could not be saved locally.", NoticeLevel.WARNING)
            return False
        return True

    # ------------------------------------------------------------------
    # Push
    # ------------------------------------------------------------------

    def _schedule_push(self, record: QuoteRecord) -> None:
        task = asyncio.create_task(self._remote.push_record(record))
        self._pending_pushes.add(task)
        task.add_done_callback(self._on_push_done)

    def _on_push_done(self, task: asyncio.Task[PushResult]) -> None:
        self._pending_pushes.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("Push task failed unexpectedly", exc_info=exc)
            return
        self._push_results.append(task.result())

    async def wait_for_pushes(self) -> list[PushResult]:
        """Wait for in-flight pushes and drain the results collected so far.

        Only the most recent ``max_push_results`` results are returned.
        """
        pending = list(self._pending_pushes)
        if pending:
            await asyncio.wait(pending)
        results = list(self._push_results)
        self._push_results.clear()
        return results

    def close(self) -> None:
        """Abandon in-flight pushes."""
        for task in list(self._pending_pushes):
            if not task.done():
                task.cancel()
        self._pending_pushes.clear()
