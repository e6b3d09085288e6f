from __future__ import annotations

import pytest
from pydantic import ValidationError

from quotesync.models.quote import QuoteRecord, RemoteQuote
from quotesync.models.sync import ReconcileResult


def test_quote_record_rejects_empty_fields() -> None:
    with pytest.raises(ValidationError):
        QuoteRecord(text="", category="Life")
    with pytest.raises(ValidationError):
        QuoteRecord(text="Something", category="   ")


def test_quote_record_is_frozen_and_with_category_copies() -> None:
    record = QuoteRecord(text="A", category="X")

    with pytest.raises(ValidationError):
        record.category = "Y"  # type: ignore[misc]

    moved = record.with_category("Y")
    assert moved == QuoteRecord(text="A", category="Y")
    assert record.category == "X"


def test_quote_record_ignores_extra_keys() -> None:
    record = QuoteRecord.model_validate({"text": "A", "category": "X", "id": 7})
    assert record == QuoteRecord(text="A", category="X")


def test_remote_quote_maps_title_and_defaults_category() -> None:
    remote = RemoteQuote.model_validate({"userId": 1, "id": 1, "title": "sunt aut facere", "body": "..."})

    assert remote.to_record("Server") == QuoteRecord(text="sunt aut facere", category="Server")


def test_remote_quote_prefers_text_and_keeps_category() -> None:
    remote = RemoteQuote.model_validate({"title": "ignored", "text": "Real text", "category": "Life"})

    assert remote.to_record("Server") == QuoteRecord(text="Real text", category="Life")


def test_remote_quote_empty_category_uses_default() -> None:
    remote = RemoteQuote.model_validate({"text": "T", "category": ""})

    assert remote.to_record("Server").category == "Server"


def test_remote_quote_without_text_is_invalid() -> None:
    with pytest.raises(ValidationError):
        RemoteQuote.model_validate({"category": "Life"})
    with pytest.raises(ValidationError):
        RemoteQuote.model_validate({"title": "  "})


def test_reconcile_result_changed_and_summary() -> None:
    assert not ReconcileResult().changed
    assert ReconcileResult().summary() == "no changes"

    result = ReconcileResult(
        added=[QuoteRecord(text="B", category="Z")],
        updated=[QuoteRecord(text="A", category="Y")],
    )
    assert result.changed
    assert result.summary() == "1 new, 1 updated"
