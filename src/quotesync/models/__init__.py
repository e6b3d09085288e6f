"""Typed models for quotesync."""

from quotesync.models.notice import Notice, NoticeLevel
from quotesync.models.quote import QuoteRecord, RemoteQuote
from quotesync.models.sync import PushResult, ReconcileResult

__all__ = [
    "Notice",
    "NoticeLevel",
    "PushResult",
    "QuoteRecord",
    "ReconcileResult",
    "RemoteQuote",
]
