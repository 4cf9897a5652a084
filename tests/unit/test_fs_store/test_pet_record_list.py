"""Tests for PetRecordList – load/create/delete, id allocation, write-through."""

import json

import pytest
from pydantic import ValidationError

from pet_manager.fs_store import ParseError, PetRecordList, ReadError, WriteError
from tests.test_utils import fail_writes


def _reload(path) -> PetRecordList:
    rl = PetRecordList(list_path=path)
    rl.load()
    return rl


def _snapshot(rl: PetRecordList) -> list[dict]:
    return [r.to_dict() for r in rl]


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------

class TestLoad:
    def test_missing_file_is_empty(self, db_path):
        rl = PetRecordList(list_path=db_path)
        assert rl.load() == []
        assert len(rl) == 0
        assert not db_path.exists()

    def test_missing_file_starts_ids_at_zero(self, store):
        assert store.next_id == 0

    def test_unreadable_path_raises_read_error(self, db_path):
        db_path.mkdir(parents=True)  # a directory cannot be read as a file
        rl = PetRecordList(list_path=db_path)
        with pytest.raises(ReadError) as exc_info:
            rl.load()
        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert exc_info.value.path == db_path

    def test_invalid_json_raises_parse_error(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ParseError) as exc_info:
            PetRecordList(list_path=db_path).load()
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)
        assert str(db_path) in str(exc_info.value)

    def test_invalid_utf8_raises_parse_error(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ParseError):
            PetRecordList(list_path=db_path).load()

    def test_wrong_top_level_shape_raises_parse_error(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps({"animals": []}), encoding="utf-8")
        with pytest.raises(ParseError, match="pets"):
            PetRecordList(list_path=db_path).load()

    def test_invalid_record_raises_parse_error(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps([{"id": 0, "name": "Rex"}]), encoding="utf-8")
        with pytest.raises(ParseError) as exc_info:
            PetRecordList(list_path=db_path).load()
        assert isinstance(exc_info.value.cause, ValidationError)

    def test_duplicate_ids_raise_parse_error(self, db_path):
        pet = {"id": 1, "name": "Rex", "category": "dog", "age": 3,
               "created_at": "2020-05-01T12:30:00Z"}
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps([pet, dict(pet, name="Max")]), encoding="utf-8")
        with pytest.raises(ParseError, match="duplicate pet id 1"):
            PetRecordList(list_path=db_path).load()

    def test_bad_next_id_raises_parse_error(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps({"next_id": "x", "pets": []}), encoding="utf-8")
        with pytest.raises(ParseError, match="next_id"):
            PetRecordList(list_path=db_path).load()

    def test_legacy_array_format(self, db_path):
        pets = [
            {"id": 3, "name": "Rex", "category": "dog", "age": 3,
             "created_at": "2020-05-01T12:30:00Z"},
            {"id": 5, "name": "Tom", "category": "cat", "age": 1,
             "created_at": "2020-05-02T08:00:00Z"},
        ]
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps(pets), encoding="utf-8")
        rl = _reload(db_path)
        assert [r.name for r in rl] == ["Rex", "Tom"]
        assert rl.next_id == 6

    def test_legacy_array_upgraded_on_write(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text("[]", encoding="utf-8")
        rl = _reload(db_path)
        rl.create("Rex", "dog", 3)
        data = json.loads(db_path.read_text(encoding="utf-8"))
        assert data["next_id"] == 1
        assert [p["name"] for p in data["pets"]] == ["Rex"]

    def test_stored_next_id_wins_over_max_id(self, db_path):
        db_path.parent.mkdir(parents=True)
        db_path.write_text(json.dumps({"next_id": 10, "pets": []}), encoding="utf-8")
        assert _reload(db_path).next_id == 10

    def test_lazy_load_on_first_access(self, db_path):
        seed = _reload(db_path)
        seed.create("Rex", "dog", 3)
        rl = PetRecordList(list_path=db_path)
        assert rl.get(0).name == "Rex"


# ---------------------------------------------------------------------------
# create / delete / list
# ---------------------------------------------------------------------------

class TestCrud:
    def test_create_assigns_ids_from_zero(self, store):
        assert store.create("Rex", "dog", 3).id == 0
        assert store.create("Tom", "cat", 1).id == 1

    def test_create_stamps_utc_time(self, store):
        r = store.create("Rex", "dog", 3)
        assert r.created_at.utcoffset().total_seconds() == 0

    def test_create_invalid_age_does_not_mutate(self, store, db_path):
        with pytest.raises(ValidationError):
            store.create("Rex", "dog", -1)
        assert len(store) == 0
        assert store.next_id == 0
        assert not db_path.exists()

    def test_list_preserves_insertion_order(self, store):
        for name in ("c", "a", "b"):
            store.create(name, "dog", 1)
        assert [r.name for r in store.list()] == ["c", "a", "b"]

    def test_list_returns_a_copy(self, store):
        store.create("Rex", "dog", 3)
        store.list().clear()
        assert len(store) == 1

    def test_get(self, store):
        store.create("Rex", "dog", 3)
        assert store.get(0).name == "Rex"
        assert store.get(99) is None

    def test_index_of(self, store):
        store.create("Rex", "dog", 3)
        store.create("Tom", "cat", 1)
        assert store.index_of(1) == 1
        assert store.index_of(42) is None

    def test_delete(self, store):
        store.create("Rex", "dog", 3)
        assert store.delete(0) is True
        assert len(store) == 0
        assert store.get(0) is None

    def test_delete_missing_returns_false_and_writes_nothing(self, store, db_path):
        store.create("Rex", "dog", 3)
        before = db_path.read_bytes()
        mtime = db_path.stat().st_mtime_ns
        assert store.delete(42) is False
        assert db_path.read_bytes() == before
        assert db_path.stat().st_mtime_ns == mtime

    def test_delete_missing_on_empty_store_creates_no_file(self, store, db_path):
        assert store.delete(0) is False
        assert not db_path.exists()


# ---------------------------------------------------------------------------
# Monotonic id allocation
# ---------------------------------------------------------------------------

class TestIdAllocation:
    def test_ids_strictly_increase_across_deletes(self, store):
        seen = []
        for i in range(5):
            seen.append(store.create(f"p{i}", "dog", i).id)
            if i % 2:
                store.delete(seen[-1])
        assert seen == sorted(seen)
        assert len(set(seen)) == len(seen)

    def test_deleting_newest_does_not_free_its_id(self, store):
        store.create("Rex", "dog", 3)
        newest = store.create("Tom", "cat", 1)
        store.delete(newest.id)
        assert store.create("Max", "dog", 2).id == newest.id + 1

    def test_high_water_mark_survives_reload(self, store, db_path):
        store.create("Rex", "dog", 3)
        store.create("Tom", "cat", 1)
        store.delete(1)
        assert _reload(db_path).create("Max", "dog", 2).id == 2


# ---------------------------------------------------------------------------
# Write-through: disk always matches memory
# ---------------------------------------------------------------------------

class TestWriteThrough:
    def test_create_persists_immediately(self, store, db_path):
        store.create("Rex", "dog", 3)
        assert _snapshot(_reload(db_path)) == _snapshot(store)

    def test_delete_persists_immediately(self, store, db_path):
        store.create("Rex", "dog", 3)
        store.create("Tom", "cat", 1)
        store.delete(0)
        assert _snapshot(_reload(db_path)) == _snapshot(store)

    def test_file_is_indented_json(self, store, db_path):
        store.create("Rex", "dog", 3)
        text = db_path.read_text(encoding="utf-8")
        assert text.startswith("{\n  ")
        assert text.endswith("\n")

    def test_no_tmp_file_left_behind(self, store, db_path):
        store.create("Rex", "dog", 3)
        assert sorted(p.name for p in db_path.parent.iterdir()) == ["db.json"]

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "deep" / "er" / "db.json"
        rl = _reload(path)
        rl.create("Rex", "dog", 3)
        assert path.exists()


# ---------------------------------------------------------------------------
# Rollback on write failure
# ---------------------------------------------------------------------------

class TestRollback:
    def test_failed_create_rolls_back(self, store, db_path, monkeypatch):
        store.create("Rex", "dog", 3)
        before_file = db_path.read_bytes()
        before_mem = _snapshot(store)
        before_next = store.next_id

        fail_writes(monkeypatch)
        with pytest.raises(WriteError) as exc_info:
            store.create("Tom", "cat", 1)

        assert isinstance(exc_info.value.cause, OSError)
        assert _snapshot(store) == before_mem
        assert store.next_id == before_next
        assert db_path.read_bytes() == before_file
        assert not db_path.with_name("db.json.tmp").exists()

    def test_failed_first_create_leaves_no_file(self, store, db_path, monkeypatch):
        fail_writes(monkeypatch)
        with pytest.raises(WriteError):
            store.create("Rex", "dog", 3)
        assert len(store) == 0
        assert not db_path.exists()

    def test_failed_delete_restores_position(self, store, db_path, monkeypatch):
        for name in ("a", "b", "c"):
            store.create(name, "dog", 1)
        before_file = db_path.read_bytes()

        fail_writes(monkeypatch)
        with pytest.raises(WriteError):
            store.delete(1)

        assert [r.name for r in store] == ["a", "b", "c"]
        assert db_path.read_bytes() == before_file

    def test_create_works_again_after_failure(self, store, db_path, monkeypatch):
        with monkeypatch.context() as m:
            fail_writes(m)
            with pytest.raises(WriteError):
                store.create("Rex", "dog", 3)
        assert store.create("Rex", "dog", 3).id == 0
        assert _snapshot(_reload(db_path)) == _snapshot(store)

    def test_failure_is_logged(self, store, monkeypatch, isolated_log):
        fail_writes(monkeypatch)
        with pytest.raises(WriteError):
            store.create("Rex", "dog", 3)
        assert "rolled back" in isolated_log.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------

class TestScenario:
    def test_rex_scenario(self, db_path):
        rl = PetRecordList(list_path=db_path)
        assert rl.load() == []

        assert rl.create("Rex", "dog", 3).id == 0
        assert rl.create("Rex", "dog", 3).id == 1
        rl.delete(0)
        assert [r.id for r in rl] == [1]

        reloaded = _reload(db_path)
        assert _snapshot(reloaded) == _snapshot(rl)
        assert reloaded.get(1).name == "Rex"
