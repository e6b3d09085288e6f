"""Local persistence for the quote collection and view state.

Two storage scopes are used:

* a durable scope that survives restarts (the collection and the
  selected category filter), and
* a session scope that only lives as long as the running session (the
  last quote shown).

Each scope is a plain key/value backend holding JSON strings. Writes to
the durable scope replace the whole value atomically; a failure leaves
the previously stored value in place and is raised as
:class:`~quotesync.exceptions.PersistenceError`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from quotesync._constants import LAST_VIEWED_KEY, QUOTES_KEY, SELECTED_CATEGORY_KEY
from quotesync.exceptions import PersistenceError
from quotesync.models.quote import QuoteRecord

_logger = logging.getLogger(__name__)

_COLLECTION_ADAPTER: TypeAdapter[list[QuoteRecord]] = TypeAdapter(list[QuoteRecord])
_CATEGORY_ADAPTER: TypeAdapter[str] = TypeAdapter(str)


class KeyValueStorage(Protocol):
    """Structural interface of a storage scope.

    Values are strings; a missing key reads as ``None``. Implementations
    raise :class:`OSError` (or a subclass of it) when a read or write
    fails, and :class:`UnicodeDecodeError` when stored bytes are not text.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Session-lived storage; everything is gone when the process exits."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStorage:
    """Durable storage with one ``<key>.json`` file per key.

    Writes go to a temporary file in the same directory which then
    replaces the target, so readers never observe a partial write.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class LocalPersistence:
    """Load/save the collection and view state to their storage scopes."""

    def __init__(self, durable: KeyValueStorage, session: KeyValueStorage) -> None:
        self._durable = durable
        self._session = session

    # ------------------------------------------------------------------
    # Durable scope
    # ------------------------------------------------------------------

    def load_durable(self) -> list[QuoteRecord] | None:
        """Return the stored collection, or ``None`` when nothing is stored.

        An empty stored collection is reported as ``None`` as well so the
        caller seeds the defaults.
        """
        raw = self._read(self._durable, QUOTES_KEY)
        if raw is None:
            return None
        try:
            records = _COLLECTION_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(f"Stored collection is corrupt: {exc}", key=QUOTES_KEY) from exc
        return records or None

    def save_durable(self, records: list[QuoteRecord] | tuple[QuoteRecord, ...]) -> None:
        """Overwrite the stored collection with *records*."""
        try:
            payload = _COLLECTION_ADAPTER.dump_json(list(records)).decode("utf-8")
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot serialize collection: {exc}", key=QUOTES_KEY) from exc
        self._write(self._durable, QUOTES_KEY, payload)
        _logger.debug("Saved %d quotes to durable storage", len(records))

    def save_selected_category(self, category: str) -> None:
        """Remember the active category filter across sessions."""
        self._write(self._durable, SELECTED_CATEGORY_KEY, _CATEGORY_ADAPTER.dump_json(category).decode("utf-8"))

    def load_selected_category(self) -> str | None:
        """Return the remembered category filter, ``None`` if never set."""
        raw = self._read(self._durable, SELECTED_CATEGORY_KEY)
        if raw is None:
            return None
        try:
            return _CATEGORY_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(
                f"Stored category filter is corrupt: {exc}",
                key=SELECTED_CATEGORY_KEY,
            ) from exc

    # ------------------------------------------------------------------
    # Session scope
    # ------------------------------------------------------------------

    def save_session_last(self, record: QuoteRecord) -> None:
        """Remember *record* as the quote shown last in this session."""
        self._write(self._session, LAST_VIEWED_KEY, record.model_dump_json())

    def load_session_last(self) -> QuoteRecord | None:
        """Return the quote shown last in this session.

        An unreadable value is ignored and reported as ``None``.
        """
        raw = self._read(self._session, LAST_VIEWED_KEY)
        if raw is None:
            return None
        try:
            return QuoteRecord.model_validate_json(raw)
        except ValidationError:
            # A stale display hint is not worth failing startup for.
            _logger.debug("Ignoring unreadable last viewed quote", exc_info=True)
            return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read(storage: KeyValueStorage, key: str) -> str | None:
        try:
            return storage.get(key)
        except OSError as exc:
            raise PersistenceError(f"Cannot read {key!r}: {exc}", key=key) from exc
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"Stored {key!r} is not valid UTF-8: {exc}", key=key) from exc

    @staticmethod
    def _write(storage: KeyValueStorage, key: str, value: str) -> None:
        try:
            storage.set(key, value)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {key!r}: {exc}", key=key) from exc
