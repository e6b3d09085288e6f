from __future__ import annotations

from quotesync.models.quote import QuoteRecord
from quotesync.store import RecordStore


def _q(text: str, category: str) -> QuoteRecord:
    return QuoteRecord(text=text, category=category)


def test_append_keeps_insertion_order_and_duplicates() -> None:
    store = RecordStore()
    store.append(_q("A", "X"))
    store.append(_q("B", "Y"))
    store.append(_q("A", "Z"))

    assert [r.text for r in store.all()] == ["A", "B", "A"]
    assert len(store) == 3


def test_by_category_filters_and_all_sentinel_returns_everything() -> None:
    store = RecordStore([_q("A", "Life"), _q("B", "Wisdom"), _q("C", "Life")])

    assert [r.text for r in store.by_category("Life")] == ["A", "C"]
    assert store.by_category("all") == store.all()
    assert store.by_category("Nope") == ()


def test_find_by_text_is_exact_and_returns_first_match() -> None:
    store = RecordStore([_q("Hello", "X"), _q("Hello", "Y")])

    found = store.find_by_text("Hello")
    assert found is not None
    assert found.category == "X"
    assert store.find_by_text("hello") is None
    assert store.find_by_text("Hello ") is None


def test_update_category_replaces_first_match_in_place() -> None:
    store = RecordStore([_q("A", "X"), _q("B", "Y"), _q("B", "Y")])

    updated = store.update_category("B", "Z")

    assert updated == _q("B", "Z")
    assert store.all() == (_q("A", "X"), _q("B", "Z"), _q("B", "Y"))
    assert store.update_category("missing", "Z") is None


def test_all_returns_snapshot_not_live_list() -> None:
    store = RecordStore([_q("A", "X")])
    snapshot = store.all()
    store.append(_q("B", "Y"))

    assert len(snapshot) == 1
    assert len(store.all()) == 2


def test_categories_unique_in_first_appearance_order() -> None:
    store = RecordStore([_q("A", "Life"), _q("B", "Wisdom"), _q("C", "Life"), _q("D", "Humor")])

    assert store.categories() == ["Life", "Wisdom", "Humor"]
