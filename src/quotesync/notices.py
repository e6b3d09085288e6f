"""Transient notices shown after background changes.

A posted notice clears itself once its TTL elapses; there is at most one
notice at a time and a new one replaces the old.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from quotesync.models.notice import Notice, NoticeLevel


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_expired(now: datetime, expires_at: datetime) -> bool:
    return now >= expires_at


class NoticeBoard:
    def __init__(
        self,
        *,
        ttl: timedelta = timedelta(seconds=3),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._notice: Notice | None = None

    def post(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> Notice:
        now = self._clock()
        notice = Notice(message=message, level=level, posted_at=now, expires_at=now + self._ttl)
        self._notice = notice
        return notice

    def current(self) -> Notice | None:
        """Return the live notice, dropping it if it has expired."""
        notice = self._notice
        if notice is None:
            return None
        if is_expired(self._clock(), notice.expires_at):
            self._notice = None
            return None
        return notice

    def clear(self) -> None:
        self._notice = None
