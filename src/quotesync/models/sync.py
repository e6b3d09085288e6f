"""Result models for push and reconciliation operations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from quotesync.models.quote import QuoteRecord


class PushResult(BaseModel):
    """Outcome of pushing one locally created quote to the remote."""

    model_config = ConfigDict(frozen=True)

    record: QuoteRecord
    ok: bool
    status_code: int | None = None
    error: str | None = None


class ReconcileResult(BaseModel):
    """What one merge of a remote snapshot changed locally."""

    model_config = ConfigDict(frozen=True)

    added: list[QuoteRecord] = Field(default_factory=list)
    """Remote quotes whose text was not present locally, in fetch order."""

    updated: list[QuoteRecord] = Field(default_factory=list)
    """Local quotes whose category was overwritten by the remote value."""

    @property
    def changed(self) -> bool:
        """Whether the collection needs to be persisted and redisplayed."""
        return bool(self.added or self.updated)

    def summary(self) -> str:
        parts: list[str] = []
        if self.added:
            parts.append(f"{len(self.added)} new")
        if self.updated:
            parts.append(f"{len(self.updated)} updated")
        return ", ".join(parts) if parts else "no changes"
