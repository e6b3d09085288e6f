"""Custom exception hierarchy for quotesync."""

from __future__ import annotations


class QuoteSyncError(Exception):
    """Base exception for all quotesync errors."""


class QuoteSyncConfigError(QuoteSyncError):
    """Invalid or missing configuration."""


class QuoteValidationError(QuoteSyncError):
    """A manually entered quote is missing its text or category.

    Raised synchronously to the user; the collection is left untouched.
    """


class ImportFormatError(QuoteSyncError):
    """Imported payload is not valid JSON or not an array of quotes.

    Nothing from the payload is applied when this is raised.
    """


class SyncUnavailableError(QuoteSyncError):
    """Remote collection unreachable (network, non-2xx, malformed body).

    Every cause is handled the same way by the sync engine: the current
    cycle is skipped and local state stays as it is.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class PersistenceError(QuoteSyncError):
    """Reading or writing the local cache failed.

    After a failed save the previously stored state is still the durable
    one; the in-memory collection keeps the change for this session only.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)
