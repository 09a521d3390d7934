"""Tests for the JSON-file record store."""

import json

import pytest

from atelier.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from atelier.infrastructure.persistence.record_store import JsonRecordStore


@pytest.fixture
def store(tmp_path):
    return JsonRecordStore(tmp_path / "things.json", "Thing")


class TestRecordStore:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "things.json"
        JsonRecordStore(path, "Thing")
        assert json.loads(path.read_text()) == []

    def test_create_assigns_next_numeric_id(self, store):
        first = store.create({"name": "a"})
        second = store.create({"name": "b"})
        assert (first["id"], second["id"]) == ("1", "2")
        assert store.next_id() == "3"

    def test_next_id_skips_non_numeric_ids(self, store):
        store.create({"id": "OP-9", "name": "x"})
        store.create({"id": "7", "name": "y"})
        assert store.create({"name": "z"})["id"] == "8"

    def test_create_keeps_given_id(self, store):
        assert store.create({"id": "abc"})["id"] == "abc"
        assert store.get("abc") == {"id": "abc"}

    def test_duplicate_id_rejected(self, store):
        store.create({"id": "1"})
        with pytest.raises(ValidationError, match="already exists"):
            store.create({"id": "1"})

    def test_get_missing_returns_none(self, store):
        assert store.get("99") is None

    def test_replace_swaps_whole_row(self, store):
        store.create({"name": "a", "color": "Azul"})
        store.replace("1", {"name": "b"})
        assert store.get("1") == {"id": "1", "name": "b"}

    def test_patch_merges_and_keeps_id(self, store):
        store.create({"name": "a", "color": "Azul"})
        merged = store.patch("1", {"color": "Preto", "id": "999"})
        assert merged == {"id": "1", "name": "a", "color": "Preto"}

    def test_delete(self, store):
        store.create({"name": "a"})
        store.delete("1")
        assert store.list_all() == []

    @pytest.mark.parametrize("op", ["replace", "patch"])
    def test_missing_row_raises(self, store, op):
        with pytest.raises(EntityNotFoundError, match="Thing #5 not found"):
            getattr(store, op)("5", {})

    def test_delete_missing_raises(self, store):
        with pytest.raises(EntityNotFoundError):
            store.delete("5")

    def test_upsert(self, store):
        created = store.upsert({"id": None, "name": "a"})
        store.upsert({"id": created["id"], "name": "b"})
        assert store.list_all() == [{"id": "1", "name": "b"}]

    def test_unreadable_file_is_a_persistence_error(self, tmp_path):
        path = tmp_path / "things.json"
        path.write_text("{not json")
        with pytest.raises(PersistenceError, match="Cannot read Thing"):
            JsonRecordStore(path, "Thing").list_all()

    def test_file_must_hold_a_list(self, tmp_path):
        path = tmp_path / "things.json"
        path.write_text('{"id": "1"}')
        with pytest.raises(PersistenceError, match="list of records"):
            JsonRecordStore(path, "Thing").list_all()
