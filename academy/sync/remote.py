"""Remote data store: row-level student/instructor records and two app-state blobs."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import MongoClient

from ..models.instructor import Instructor
from ..models.student import Student

logger = logging.getLogger(__name__)

ASSIGNMENTS_KEY = "daily_assignments"
ATTENDANCE_KEY = "daily_attendance"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RemoteStore(ABC):
    @abstractmethod
    def upsert_student(self, student: Student) -> None: ...

    @abstractmethod
    def delete_student(self, student_id: str) -> None: ...

    @abstractmethod
    def upsert_instructor(self, instructor: Instructor) -> None: ...

    @abstractmethod
    def delete_instructor(self, instructor_id: str) -> None: ...

    @abstractmethod
    def save_app_state(self, key: str, data: Any) -> None: ...

    @abstractmethod
    def fetch_students(self) -> List[Student]: ...

    @abstractmethod
    def fetch_instructors(self) -> List[Instructor]: ...

    @abstractmethod
    def fetch_app_state(self, key: str) -> Any | None: ...

    @property
    def online(self) -> bool:
        return True


class OfflineRemoteStore(RemoteStore):
    """Stands in when no database is configured; every write is dropped."""

    def upsert_student(self, student: Student) -> None:
        return None

    def delete_student(self, student_id: str) -> None:
        return None

    def upsert_instructor(self, instructor: Instructor) -> None:
        return None

    def delete_instructor(self, instructor_id: str) -> None:
        return None

    def save_app_state(self, key: str, data: Any) -> None:
        return None

    def fetch_students(self) -> List[Student]:
        return []

    def fetch_instructors(self) -> List[Instructor]:
        return []

    def fetch_app_state(self, key: str) -> Any | None:
        return None

    @property
    def online(self) -> bool:
        return False


class MongoRemoteStore(RemoteStore):
    """Rows are ``{_id, data, updated_at}`` documents, one collection per table."""

    def __init__(self, db) -> None:
        self.db = db

    @classmethod
    def connect(cls, url: str, name: str) -> "MongoRemoteStore":
        client = MongoClient(url, serverSelectionTimeoutMS=5000)
        return cls(client[name])

    def _upsert(self, collection: str, key: str, data: Any) -> None:
        doc: Dict[str, Any] = {"_id": key, "data": data, "updated_at": _now()}
        self.db[collection].replace_one({"_id": key}, doc, upsert=True)

    def upsert_student(self, student: Student) -> None:
        self._upsert("students", student.id, student.to_dict())

    def delete_student(self, student_id: str) -> None:
        self.db["students"].delete_one({"_id": student_id})

    def upsert_instructor(self, instructor: Instructor) -> None:
        self._upsert("instructors", instructor.id, instructor.to_dict())

    def delete_instructor(self, instructor_id: str) -> None:
        self.db["instructors"].delete_one({"_id": instructor_id})

    def save_app_state(self, key: str, data: Any) -> None:
        self._upsert("app_state", key, data)

    def fetch_students(self) -> List[Student]:
        out: List[Student] = []
        for row in self.db["students"].find({}, {"data": 1}):
            # Row id wins over whatever id the payload carries
            out.append(Student.from_dict({**(row.get("data") or {}), "id": row["_id"]}))
        return out

    def fetch_instructors(self) -> List[Instructor]:
        out: List[Instructor] = []
        for row in self.db["instructors"].find({}, {"data": 1}):
            out.append(Instructor.from_dict({**(row.get("data") or {}), "id": row["_id"]}))
        return out

    def fetch_app_state(self, key: str) -> Any | None:
        row = self.db["app_state"].find_one({"_id": key})
        if not row:
            return None
        return row.get("data")
