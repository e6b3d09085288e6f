"""Quote record models.

:class:`QuoteRecord` is the unit stored locally. :class:`RemoteQuote`
describes one item of the remote collection, whose schema does not match
the local one (``title`` instead of ``text``, category optional).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class QuoteRecord(BaseModel):
    """A ``{text, category}`` pair.

    ``text`` is the identity used when merging with the remote collection;
    two records are the same quote iff their texts are equal (exact,
    case-sensitive). Callers trim user input before building a record.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str
    category: str

    @field_validator("text", "category")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be non-empty")
        return value

    def with_category(self, category: str) -> QuoteRecord:
        """Return a copy carrying *category*; ``text`` is unchanged."""
        return QuoteRecord(text=self.text, category=category)


class RemoteQuote(BaseModel):
    """One item of the remote collection as received over HTTP."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str | None = None
    title: str | None = None
    category: str | None = None

    @model_validator(mode="after")
    def _require_text(self) -> RemoteQuote:
        if not (self.text or "").strip() and not (self.title or "").strip():
            raise ValueError("remote quote has neither 'text' nor 'title'")
        return self

    @property
    def quote_text(self) -> str:
        if self.text is not None and self.text.strip():
            return self.text
        return self.title or ""

    def to_record(self, default_category: str) -> QuoteRecord:
        """Adapt to the local schema, defaulting a missing category."""
        category = self.category if self.category is not None and self.category.strip() else default_category
        return QuoteRecord(text=self.quote_text, category=category)
