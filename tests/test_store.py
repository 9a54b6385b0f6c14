"""
Tests for device-local storage and the StudentStore.
"""

import json
import logging

import pytest
from datetime import datetime

from regtracker.errors import RegistrationValidationError, StorageDecodeError
from regtracker.workflow import (
    STUDENTS_KEY,
    LocalStorage,
    StudentStore,
    decode_students,
    encode_students,
    load_students,
    new_student,
    percent_complete,
    save_students,
    sign_step,
)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "tracker.db")


@pytest.fixture
def roster():
    a = new_student("Ana Lee", "10", now=datetime(2025, 8, 1, 8, 0))
    b = new_student("Jordan Smith", now=datetime(2025, 8, 1, 8, 5))
    b = sign_step(b, 1, "ml", note="ID checked", now=datetime(2025, 8, 1, 9, 0))
    b = sign_step(b, 2, "rk", now=datetime(2025, 8, 1, 9, 30))
    return [a, b]


class TestLocalStorage:

    def test_creates_parent_directory(self, tmp_path):
        LocalStorage(tmp_path / "nested" / "dir" / "tracker.db")
        assert (tmp_path / "nested" / "dir" / "tracker.db").exists()

    def test_get_missing_key(self, storage):
        assert storage.get_item("missing") is None

    def test_set_get_overwrite_remove(self, storage):
        storage.set_item("k", "one")
        assert storage.get_item("k") == "one"
        storage.set_item("k", "two")
        assert storage.get_item("k") == "two"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_persists_across_instances(self, tmp_path):
        LocalStorage(tmp_path / "t.db").set_item("k", "v")
        assert LocalStorage(tmp_path / "t.db").get_item("k") == "v"


class TestEncoding:

    def test_round_trip(self, roster):
        assert decode_students(encode_students(roster)) == roster

    def test_round_trip_indented(self, roster):
        raw = encode_students(roster, indent=2)
        assert "\n" in raw
        assert decode_students(raw) == roster

    def test_encoded_shape(self, roster):
        data = json.loads(encode_students(roster))
        assert data[1]["steps"][0]["status"] == "completed"
        assert data[1]["steps"][0]["initials"] == "ML"
        assert data[1]["steps"][2] == {"status": "pending", "index": 3}

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"id": "x"}',
        '[{"id": "x"}]',
        '[{"id": "x", "name": "A", "created_at": "2025-08-01T08:00:00", "steps": []}]',
    ])
    def test_decode_malformed(self, raw):
        with pytest.raises(StorageDecodeError):
            decode_students(raw)

    def test_decode_rejects_signed_step_after_pending(self, roster):
        data = json.loads(encode_students(roster))
        data[0]["steps"][4] = {
            "status": "completed",
            "index": 5,
            "initials": "ML",
            "completed_at": "2025-08-01T09:00:00",
        }
        with pytest.raises(StorageDecodeError):
            decode_students(json.dumps(data))

    def test_decode_rejects_duplicate_ids(self, roster):
        with pytest.raises(StorageDecodeError, match="Duplicate student id"):
            decode_students(encode_students([roster[0], roster[0]]))

    def test_decode_empty_array(self):
        assert decode_students("[]") == []

    def test_load_missing(self, storage):
        assert load_students(storage) == []

    def test_load_malformed_returns_empty(self, storage, caplog):
        storage.set_item(STUDENTS_KEY, "{broken")
        with caplog.at_level(logging.WARNING):
            assert load_students(storage) == []
        assert "Discarding stored students" in caplog.text

    def test_save_then_load(self, storage, roster):
        save_students(storage, roster)
        assert load_students(storage) == roster


class TestStudentStore:

    def test_empty_store(self, storage):
        store = StudentStore(storage)
        assert store.students == []
        assert len(store) == 0

    def test_add_student_newest_first(self, storage):
        store = StudentStore(storage)
        first = store.add_student("Ana Lee", "10")
        second = store.add_student("Jordan Smith")
        assert [s.id for s in store.students] == [second.id, first.id]

    def test_add_student_rejects_empty_name(self, storage):
        store = StudentStore(storage)
        with pytest.raises(RegistrationValidationError):
            store.add_student("  ")
        assert len(store) == 0

    def test_mutations_persist(self, storage):
        store = StudentStore(storage)
        student = store.add_student("Ana Lee")
        store.sign_step(student.id, 1, "ml")

        reloaded = StudentStore(storage)
        assert len(reloaded) == 1
        assert reloaded.get(student.id).steps[0].initials == "ML"

    def test_get_unknown(self, storage):
        store = StudentStore(storage)
        assert store.get("nope") is None
        assert store.get(None) is None

    def test_sign_step_locked_leaves_store_unchanged(self, storage):
        store = StudentStore(storage)
        student = store.add_student("Ana Lee")
        before = storage.get_item(STUDENTS_KEY)
        with pytest.raises(RegistrationValidationError):
            store.sign_step(student.id, 3, "ML")
        assert storage.get_item(STUDENTS_KEY) == before
        assert store.get(student.id) == student

    def test_sign_unknown_student(self, storage):
        store = StudentStore(storage)
        with pytest.raises(KeyError):
            store.sign_step("nope", 1, "ML")

    def test_reset_student(self, storage):
        store = StudentStore(storage)
        student = store.add_student("Ana Lee")
        store.sign_step(student.id, 1, "ML")
        store.sign_step(student.id, 2, "ML")
        reset = store.reset_student(student.id)
        assert percent_complete(reset) == 0
        assert percent_complete(StudentStore(storage).get(student.id)) == 0

    def test_reset_unknown_student(self, storage):
        with pytest.raises(KeyError):
            StudentStore(storage).reset_student("nope")

    def test_delete_student(self, storage):
        store = StudentStore(storage)
        student = store.add_student("Ana Lee")
        assert store.delete_student(student.id) is True
        assert store.delete_student(student.id) is False
        assert len(StudentStore(storage)) == 0

    def test_clear(self, storage):
        store = StudentStore(storage)
        store.add_student("Ana Lee")
        store.clear()
        assert store.students == []
        assert storage.get_item(STUDENTS_KEY) is None

    def test_students_returns_copy(self, storage):
        store = StudentStore(storage)
        store.add_student("Ana Lee")
        store.students.clear()
        assert len(store) == 1


class TestImportExport:

    def test_export_import_replace(self, tmp_path, roster):
        source = StudentStore(LocalStorage(tmp_path / "a.db"))
        source.import_json(encode_students(roster), replace=True)
        exported = source.export_json()

        target = StudentStore(LocalStorage(tmp_path / "b.db"))
        target.add_student("Someone Else")
        assert target.import_json(exported, replace=True) == 2
        assert target.students == roster

    def test_import_merge_skips_known_ids(self, storage, roster):
        store = StudentStore(storage)
        assert store.import_json(encode_students(roster)) == 2
        assert store.import_json(encode_students(roster)) == 0
        assert len(store) == 2

    def test_import_merge_appends(self, storage, roster):
        store = StudentStore(storage)
        existing = store.add_student("Existing")
        store.import_json(encode_students(roster))
        assert store.students[0].id == existing.id
        assert len(StudentStore(storage)) == 3

    def test_import_malformed_leaves_roster(self, storage):
        store = StudentStore(storage)
        store.add_student("Ana Lee")
        before = store.students
        with pytest.raises(StorageDecodeError):
            store.import_json("[1, 2, 3]")
        assert store.students == before

    def test_import_replace_rejects_duplicate_ids(self, storage, roster):
        store = StudentStore(storage)
        store.import_json(encode_students(roster), replace=True)
        before = store.students
        with pytest.raises(StorageDecodeError):
            store.import_json(encode_students([roster[1], roster[1]]), replace=True)
        assert store.students == before
        assert StudentStore(storage).students == before
