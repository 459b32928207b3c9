"""Tests for grammar pattern ordering (F2)."""

from unittest.mock import patch

import pytest

from nihongo.core.errors import InvalidArgument, StorageError
from nihongo.db import chapters_repository, grammar_repository


def _append(chapter_id, name):
    return grammar_repository.insert_grammar_pattern(chapter_id, name, "", "")


def _orders(chapter_id):
    return {
        p.id: p.sort_order for p in grammar_repository.list_grammar_patterns(chapter_id)
    }


class TestAppend:
    """Tests for insert_grammar_pattern sort_order assignment."""

    def test_first_pattern_gets_zero(self, chapter):
        assert _append(chapter.id, "A").sort_order == 0

    def test_next_pattern_gets_max_plus_one(self, chapter):
        patterns = [_append(chapter.id, name) for name in "ABC"]
        assert [p.sort_order for p in patterns] == [0, 1, 2]

    def test_append_after_gap_uses_max(self, chapter):
        """Deleting from the middle does not make positions reused."""
        a = _append(chapter.id, "A")
        b = _append(chapter.id, "B")
        _append(chapter.id, "C")
        grammar_repository.delete_grammar_pattern(b.id)

        assert _append(chapter.id, "D").sort_order == 3
        assert a.sort_order == 0

    def test_positions_are_per_chapter(self, chapter):
        other = chapters_repository.insert_chapter("Bab 2")
        _append(chapter.id, "A")
        _append(chapter.id, "B")

        assert _append(other.id, "X").sort_order == 0

    def test_image_urls_kept_in_order(self, chapter):
        pattern = grammar_repository.insert_grammar_pattern(
            chapter.id, "A", "", "", image_urls=["2.png", "1.png"]
        )
        assert grammar_repository.get_grammar_pattern(pattern.id).image_urls == ["2.png", "1.png"]

    def test_update_keeps_sort_order(self, chapter):
        _append(chapter.id, "A")
        b = _append(chapter.id, "B")

        updated = grammar_repository.update_grammar_pattern(b.id, "B2", "x", "y", ["p.png"])
        assert updated.sort_order == 1
        assert updated.pattern == "B2"


class TestList:
    """Tests for list ordering."""

    def test_orders_by_sort_order_then_id(self, chapter):
        a = _append(chapter.id, "A")
        b = _append(chapter.id, "B")
        c = _append(chapter.id, "C")
        # Force a tie between a and c
        grammar_repository.reorder_grammar_patterns(chapter.id, [b.id, a.id])
        grammar_repository.reorder_grammar_patterns(chapter.id, [c.id, c.id])

        listed = grammar_repository.list_grammar_patterns(chapter.id)
        # b=0, a=1, c=1 -> tie broken by id
        assert [p.id for p in listed] == [b.id, a.id, c.id]


class TestReorder:
    """Tests for reorder_grammar_patterns."""

    def test_assigns_index_positions(self, chapter):
        id1, id2, id3 = (_append(chapter.id, n).id for n in "ABC")

        grammar_repository.reorder_grammar_patterns(chapter.id, [id2, id1, id3])

        assert _orders(chapter.id) == {id2: 0, id1: 1, id3: 2}
        assert [p.id for p in grammar_repository.list_grammar_patterns(chapter.id)] == [
            id2,
            id1,
            id3,
        ]

    def test_returns_number_updated(self, chapter):
        ids = [_append(chapter.id, n).id for n in "AB"]
        assert grammar_repository.reorder_grammar_patterns(chapter.id, ids[::-1]) == 2

    def test_foreign_ids_are_not_updated(self, chapter):
        """Ids of another chapter are skipped without error."""
        other = chapters_repository.insert_chapter("Bab 2")
        foreign = _append(other.id, "X")
        _append(other.id, "Y")
        own = _append(chapter.id, "A")

        updated = grammar_repository.reorder_grammar_patterns(chapter.id, [foreign.id, own.id])

        assert updated == 1
        assert grammar_repository.get_grammar_pattern(foreign.id).sort_order == 0
        assert grammar_repository.get_grammar_pattern(own.id).sort_order == 1

    def test_empty_list_rejected(self, chapter):
        a = _append(chapter.id, "A")
        b = _append(chapter.id, "B")

        with pytest.raises(InvalidArgument):
            grammar_repository.reorder_grammar_patterns(chapter.id, [])

        assert _orders(chapter.id) == {a.id: 0, b.id: 1}

    def test_missing_chapter_rejected(self, chapter):
        with pytest.raises(InvalidArgument):
            grammar_repository.reorder_grammar_patterns(None, [1])

    def test_failure_rolls_back_whole_batch(self, chapter):
        """An error part-way leaves every sort_order unchanged."""
        a, b, c = (_append(chapter.id, n) for n in "ABC")

        # Second update binds a value sqlite3 cannot store
        def broken_enumerate(ids):
            yield 0, ids[0]
            yield 1, object()

        with patch("nihongo.db.grammar_repository.enumerate", broken_enumerate, create=True):
            with pytest.raises(StorageError):
                grammar_repository.reorder_grammar_patterns(chapter.id, [c.id, b.id, a.id])

        assert _orders(chapter.id) == {a.id: 0, b.id: 1, c.id: 2}
