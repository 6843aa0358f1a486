"""Tests for title and tag filtering."""

from __future__ import annotations

from jotter.filters import filter_notes
from jotter.models import DenormalizedNote, Tag

A = Tag(id="a", label="A")
B = Tag(id="b", label="B")

GROCERIES = DenormalizedNote(id="n1", title="Groceries", body="", tags=(A,))
BOTH = DenormalizedNote(id="n2", title="Weekly plan", body="", tags=(A, B))
PLAIN = DenormalizedNote(id="n3", title="grocery budget", body="", tags=())
VIEW = [GROCERIES, BOTH, PLAIN]


class TestTitle:
    def test_empty_query_matches_all(self):
        assert filter_notes(VIEW, "", []) == VIEW

    def test_case_insensitive(self):
        assert filter_notes(VIEW, "GRO", []) == [GROCERIES, PLAIN]

    def test_substring_anywhere(self):
        assert filter_notes(VIEW, "plan", []) == [BOTH]

    def test_no_match(self):
        assert filter_notes(VIEW, "zzz", []) == []


class TestTags:
    def test_single_tag(self):
        assert filter_notes(VIEW, "", [A]) == [GROCERIES, BOTH]

    def test_conjunctive(self):
        assert filter_notes(VIEW, "", [A, B]) == [BOTH]

    def test_matched_by_id_not_label(self):
        renamed = Tag(id="a", label="something else")
        assert filter_notes(VIEW, "", [renamed]) == [GROCERIES, BOTH]

    def test_unknown_tag_matches_nothing(self):
        assert filter_notes(VIEW, "", [Tag(id="zz", label="A")]) == []


class TestCombined:
    def test_title_and_tags(self):
        assert filter_notes(VIEW, "gro", [A]) == [GROCERIES]

    def test_idempotent(self):
        assert filter_notes(VIEW, "e", [A]) == filter_notes(VIEW, "e", [A])
