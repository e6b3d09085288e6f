"""Bulk import/export of the quote collection as JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter, ValidationError

from quotesync.exceptions import ImportFormatError
from quotesync.models.quote import QuoteRecord

_COLLECTION_ADAPTER: TypeAdapter[list[QuoteRecord]] = TypeAdapter(list[QuoteRecord])


def parse_import(payload: str | bytes) -> list[QuoteRecord]:
    """Parse an exported collection.

    The payload must be a JSON array of ``{"text", "category"}`` objects.
    Any failure rejects the whole payload.
    """
    try:
        data: Any = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ImportFormatError(f"Import file is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ImportFormatError(f"Import file must contain a JSON array, got {type(data).__name__}")

    try:
        return _COLLECTION_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise ImportFormatError(f"Import file contains invalid quotes: {exc.error_count()} error(s)") from exc


def dump_export(records: Iterable[QuoteRecord]) -> str:
    """Serialize *records* as a pretty-printed JSON array."""
    return json.dumps(
        [record.model_dump() for record in records],
        indent=2,
        ensure_ascii=False,
    )
