"""Transient user-facing notice model."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class NoticeLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"


class Notice(BaseModel):
    """A message shown to the user until ``expires_at``."""

    model_config = ConfigDict(frozen=True)

    message: str
    level: NoticeLevel = NoticeLevel.INFO
    posted_at: datetime
    expires_at: datetime
