"""In-memory quote collection.

This is the only component allowed to mutate the collection. The sync
engine serializes calls into it so that user additions, imports, and
reconciliation never interleave.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from quotesync._constants import ALL_CATEGORIES
from quotesync.models.quote import QuoteRecord


class RecordStore:
    """Ordered collection of :class:`QuoteRecord`.

    Insertion order is preserved and duplicates by ``text`` are allowed;
    lookups by text return the first match.
    """

    def __init__(self, records: Iterable[QuoteRecord] = ()) -> None:
        self._records: list[QuoteRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[QuoteRecord]:
        return iter(tuple(self._records))

    def append(self, record: QuoteRecord) -> None:
        """Insert *record* at the end. No deduplication."""
        self._records.append(record)

    def extend(self, records: Iterable[QuoteRecord]) -> None:
        """Insert many records at the end, in order. No deduplication."""
        self._records.extend(records)

    def all(self) -> tuple[QuoteRecord, ...]:
        """Return the full ordered collection."""
        return tuple(self._records)

    def by_category(self, category: str) -> tuple[QuoteRecord, ...]:
        """Return the records tagged *category*; ``"all"`` disables the filter."""
        if category == ALL_CATEGORIES:
            return self.all()
        return tuple(record for record in self._records if record.category == category)

    def _index_of(self, text: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.text == text:
                return index
        return None

    def find_by_text(self, text: str) -> QuoteRecord | None:
        """Return the first record whose text equals *text* exactly."""
        index = self._index_of(text)
        return None if index is None else self._records[index]

    def update_category(self, text: str, category: str) -> QuoteRecord | None:
        """Set the category of the first record matching *text*, in place.

        Returns the updated record, or ``None`` when no record matches.
        """
        index = self._index_of(text)
        if index is None:
            return None
        updated = self._records[index].with_category(category)
        self._records[index] = updated
        return updated

    def categories(self) -> list[str]:
        """Unique categories in order of first appearance."""
        seen: dict[str, None] = {}
        for record in self._records:
            seen.setdefault(record.category, None)
        return list(seen)
