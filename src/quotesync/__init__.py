"""quotesync - Async quote collection synchronized with a remote HTTP endpoint."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("quotesync")
except PackageNotFoundError:
    __version__ = "0+local"
from quotesync.app import QuoteApp
from quotesync.config import QuoteSyncConfig
from quotesync.exceptions import (
    ImportFormatError,
    PersistenceError,
    QuoteSyncConfigError,
    QuoteSyncError,
    QuoteValidationError,
    SyncUnavailableError,
)
from quotesync.models import (
    Notice,
    NoticeLevel,
    PushResult,
    QuoteRecord,
    ReconcileResult,
    RemoteQuote,
)
from quotesync.reconcile import SyncEngine, reconcile
from quotesync.scheduler import SyncScheduler
from quotesync.store import RecordStore

__all__ = [
    "__version__",
    "ImportFormatError",
    "Notice",
    "NoticeLevel",
    "PersistenceError",
    "PushResult",
    "QuoteApp",
    "QuoteRecord",
    "QuoteSyncConfig",
    "QuoteSyncConfigError",
    "QuoteSyncError",
    "QuoteValidationError",
    "ReconcileResult",
    "RecordStore",
    "RemoteQuote",
    "SyncEngine",
    "SyncScheduler",
    "SyncUnavailableError",
    "reconcile",
]
