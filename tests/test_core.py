"""Tests for the Notebook command/query surface."""

from __future__ import annotations

import json
import pytest
from pathlib import Path

from jotter.config import JotterConfig, StorageConfig
from jotter.core import Notebook, cascade
from jotter.errors import ConfigError, CorruptPersistedStateError
from jotter.models import Tag
from jotter.storage import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notebook(storage: MemoryStorage) -> Notebook:
    return Notebook.from_storage(storage)


class TestNotes:
    def test_create_extracts_tag_ids(self, notebook: Notebook, storage: MemoryStorage):
        tag = notebook.create_tag("personal")
        note_id = notebook.create_note("Groceries", "- milk", [tag])
        stored = json.loads(storage.read("NOTES"))
        assert stored == [
            {"id": note_id, "title": "Groceries", "markdown": "- milk", "tagIds": [tag.id]}
        ]

    def test_update_and_delete(self, notebook: Notebook):
        work = notebook.create_tag("work")
        note_id = notebook.create_note("a", "", [])
        notebook.update_note(note_id, "b", "body", [work])
        note = notebook.get_note(note_id)
        assert (note.title, note.body, note.tags) == ("b", "body", (work,))
        notebook.delete_note(note_id)
        assert notebook.get_note(note_id) is None
        assert notebook.note_count() == 0

    def test_list_visible_unfiltered_returns_all_in_order(self, notebook: Notebook):
        ids = [notebook.create_note(t, "", []) for t in ("c", "a", "b")]
        assert [n.id for n in notebook.list_visible_notes()] == ids

    def test_filter_sees_latest_mutation(self, notebook: Notebook):
        notebook.list_visible_notes()
        notebook.create_note("Groceries", "", [])
        assert [n.title for n in notebook.list_visible_notes("gro")] == ["Groceries"]


class TestTags:
    def test_conjunctive_filter(self, notebook: Notebook):
        a = notebook.create_tag("A")
        b = notebook.create_tag("B")
        only_a = notebook.create_note("only a", "", [a])
        both = notebook.create_note("both", "", [a, b])
        assert [n.id for n in notebook.list_visible_notes("", [a, b])] == [both]
        assert [n.id for n in notebook.list_visible_notes("", [a])] == [only_a, both]

    def test_rename_visible_in_view(self, notebook: Notebook):
        tag = notebook.create_tag("wrk")
        note_id = notebook.create_note("n", "", [tag])
        notebook.rename_tag(tag.id, "work")
        assert notebook.get_note(note_id).tags == (Tag(id=tag.id, label="work"),)
        assert notebook.list_tags() == [Tag(id=tag.id, label="work")]


class TestTagDeletion:
    def test_scenario_leaves_dangling_reference(self, notebook: Notebook):
        t1 = notebook.create_tag("personal")
        assert t1.label == "personal"
        n1 = notebook.create_note("Groceries", "- milk", [t1])

        [note] = notebook.list_visible_notes("", [])
        assert (note.id, note.title, note.tags) == (n1, "Groceries", (t1,))

        notebook.delete_tag(t1.id)
        [note] = notebook.list_visible_notes("", [])
        assert note.id == n1
        assert note.tags == ()
        assert notebook.repository.get(n1).tag_ids == (t1.id,)
        assert notebook.list_tags() == []

    def test_cascade_policy_strips_ids(self, storage: MemoryStorage):
        notebook = Notebook.from_storage(storage, tag_deletion="cascade")
        t1 = notebook.create_tag("a")
        t2 = notebook.create_tag("b")
        n1 = notebook.create_note("n", "", [t1, t2])
        notebook.delete_tag(t1.id)
        assert notebook.repository.get(n1).tag_ids == (t2.id,)

    def test_custom_policy_receives_repository(self, notebook: Notebook):
        seen = []
        custom = Notebook(
            notebook.repository,
            notebook.registry,
            on_tag_deleted=lambda repo, tag_id: seen.append((repo, tag_id)),
        )
        tag = custom.create_tag("x")
        custom.delete_tag(tag.id)
        assert seen == [(notebook.repository, tag.id)]

    def test_cascade_function_directly(self, notebook: Notebook):
        tag = notebook.create_tag("x")
        n = notebook.create_note("n", "", [tag])
        cascade(notebook.repository, tag.id)
        assert notebook.repository.get(n).tag_ids == ()

    def test_unknown_policy(self, storage: MemoryStorage):
        with pytest.raises(ConfigError):
            Notebook.from_storage(storage, tag_deletion="sometimes")


class TestPersistence:
    def test_reopen_from_data_dir(self, tmp_path: Path):
        config = JotterConfig(data_dir=tmp_path / "data")
        first = Notebook.open(config)
        tag = first.create_tag("personal")
        note_id = first.create_note("Groceries", "- milk", [tag])

        second = Notebook.open(config)
        [note] = second.list_visible_notes()
        assert note.id == note_id
        assert note.tags == (tag,)

    def test_custom_keys(self, storage: MemoryStorage):
        notebook = Notebook.from_storage(storage, notes_key="N2", tags_key="T2")
        notebook.create_tag("x")
        notebook.create_note("n", "", [])
        assert storage.read("N2") is not None
        assert storage.read("T2") is not None
        assert storage.read("NOTES") is None

    def test_shared_key_rejected(self, storage: MemoryStorage):
        with pytest.raises(ConfigError):
            Notebook.from_storage(storage, notes_key="X", tags_key="X")
        assert storage.writes == {}

    def test_non_string_key_rejected(self, storage: MemoryStorage):
        with pytest.raises(ConfigError):
            Notebook.from_storage(storage, notes_key=42)

    def test_open_rejects_unusable_file_key(self, tmp_path: Path):
        config = JotterConfig(data_dir=tmp_path, storage=StorageConfig(notes_key="a/b"))
        with pytest.raises(ConfigError):
            Notebook.open(config)

    def test_corrupt_notes_surface(self):
        notebook = Notebook.from_storage(MemoryStorage({"NOTES": "[{]"}))
        with pytest.raises(CorruptPersistedStateError):
            notebook.list_visible_notes()
        with pytest.raises(CorruptPersistedStateError):
            notebook.create_note("x", "", [])
