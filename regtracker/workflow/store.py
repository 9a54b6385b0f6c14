"""
StudentStore - Device-local persistence for the student roster.

Stores data in a small SQLite key/value file (default ~/.regtracker/tracker.db),
the on-device counterpart of browser local storage:
- regTracker.students.v1: the student list as JSON
- regTracker.staffPin.v1: the staff PIN

StudentStore loads the roster on construction and saves after every mutation.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from regtracker.errors import StorageDecodeError
from regtracker.schemas import Student

from . import progression


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = Path.home() / ".regtracker"
DEFAULT_STORAGE_DB = DEFAULT_STORAGE_DIR / "tracker.db"

STUDENTS_KEY = "regTracker.students.v1"
PIN_KEY = "regTracker.staffPin.v1"

_students_adapter = TypeAdapter(list[Student])


class LocalStorage:
    """String key/value storage in a single-table SQLite file."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize local storage.

        Args:
            db_path: Path to the storage file (default: ~/.regtracker/tracker.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STORAGE_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS local_storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get_item(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM local_storage WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str):
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO local_storage (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str):
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------

def encode_students(students: list[Student], indent: Optional[int] = None) -> str:
    """Serialize a student list to JSON text."""
    return _students_adapter.dump_json(students, indent=indent).decode("utf-8")


def decode_students(raw: str) -> list[Student]:
    """
    Parse a JSON array of students.

    Raises:
        StorageDecodeError: If the text is not valid JSON, not an array,
            any record fails validation, or a student id repeats
    """
    try:
        students = _students_adapter.validate_json(raw)
    except ValidationError as e:
        raise StorageDecodeError(
            f"Malformed student data ({e.error_count()} error(s))"
        ) from e

    seen = set()
    for student in students:
        if student.id in seen:
            raise StorageDecodeError(f"Duplicate student id: {student.id}")
        seen.add(student.id)
    return students


def load_students(storage: LocalStorage) -> list[Student]:
    """Load the roster; missing or malformed data yields an empty list."""
    raw = storage.get_item(STUDENTS_KEY)
    if not raw:
        return []
    try:
        return decode_students(raw)
    except StorageDecodeError as e:
        logger.warning(f"Discarding stored students: {e}")
        return []


def save_students(storage: LocalStorage, students: list[Student]):
    storage.set_item(STUDENTS_KEY, encode_students(students))


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------

class StudentStore:
    """
    Owns the student roster for one device.

    Students are kept newest first. Every mutating method persists the
    whole roster before returning.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._students: list[Student] = load_students(storage)
        logger.info(f"Loaded {len(self._students)} students from {storage.db_path}")

    def _save(self):
        save_students(self.storage, self._students)

    def _index_of(self, student_id: str) -> int:
        for i, student in enumerate(self._students):
            if student.id == student_id:
                return i
        raise KeyError(f"Student not found: {student_id}")

    def _replace(self, student: Student) -> Student:
        self._students[self._index_of(student.id)] = student
        self._save()
        return student

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    def __len__(self) -> int:
        return len(self._students)

    def get(self, student_id: Optional[str]) -> Optional[Student]:
        if not student_id:
            return None
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_student(self, name: str, grade: Optional[str] = None) -> Student:
        student = progression.new_student(name, grade)
        self._students.insert(0, student)
        self._save()
        logger.info(f"Created student {student.id} ({student.name})")
        return student

    def delete_student(self, student_id: str) -> bool:
        """Remove a student. Returns False if the id is unknown."""
        try:
            i = self._index_of(student_id)
        except KeyError:
            return False
        del self._students[i]
        self._save()
        logger.info(f"Deleted student {student_id}")
        return True

    def sign_step(
        self,
        student_id: str,
        index: int,
        initials: str,
        note: Optional[str] = None,
    ) -> Student:
        student = self._students[self._index_of(student_id)]
        signed = progression.sign_step(student, index, initials, note)
        logger.info(f"Step {index} signed for student {student_id}")
        return self._replace(signed)

    def reset_student(self, student_id: str) -> Student:
        student = self._students[self._index_of(student_id)]
        logger.info(f"Reset all steps for student {student_id}")
        return self._replace(progression.reset_student(student))

    def clear(self):
        """Remove every student from this device."""
        self._students = []
        self.storage.remove_item(STUDENTS_KEY)
        logger.info("Cleared device data")

    # -------------------------------------------------------------------------
    # Export / Import
    # -------------------------------------------------------------------------

    def export_json(self) -> str:
        return encode_students(self._students, indent=2)

    def import_json(self, raw: str, replace: bool = False) -> int:
        """
        Import students from exported JSON.

        Args:
            raw: JSON text as produced by export_json
            replace: Replace the roster instead of merging

        Returns:
            Number of students added

        Raises:
            StorageDecodeError: If the text is malformed (roster unchanged)
        """
        imported = decode_students(raw)
        if replace:
            self._students = imported
            added = len(imported)
        else:
            known = {s.id for s in self._students}
            added = 0
            for student in imported:
                if student.id in known:
                    continue
                known.add(student.id)
                self._students.append(student)
                added += 1
        self._save()
        logger.info(f"Imported {added} students")
        return added
