# PUBLIC_INTERFACE
"""
School directory: teachers and the students they registered.

Two backends share one async interface:
- MemoryDirectory: thread-safe, ephemeral; used for local runs and tests.
- RestDirectory: the hosted PostgREST (Supabase) tables over HTTP.

Queries are equality filters on the recovered identifier.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Protocol, Type, TypeVar

import httpx
from pydantic import ValidationError

from ..core.errors import DirectoryError
from ..core.logging import error
from ..core.settings import Settings
from ..models import ACTIVE, Student, Teacher

Row = TypeVar("Row", Teacher, Student)


class Directory(Protocol):
    async def get_teacher(self, teacher_id: str) -> Optional[Teacher]: ...

    async def list_students(self, teacher_id: str) -> List[Student]: ...

    async def aclose(self) -> None: ...


class MemoryDirectory:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        # key = teacher_id
        self._teachers: Dict[str, Teacher] = {}
        # key = student_id
        self._students: Dict[str, Student] = {}

    def add_teacher(self, teacher: Teacher) -> None:
        with self._lock:
            self._teachers[teacher.teacher_id] = teacher

    def add_student(self, student: Student) -> None:
        with self._lock:
            self._students[student.student_id] = student

    async def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        with self._lock:
            return self._teachers.get(teacher_id)

    async def list_students(self, teacher_id: str) -> List[Student]:
        with self._lock:
            return [s for s in self._students.values() if s.teacher_id == teacher_id and s.status == ACTIVE]

    async def aclose(self) -> None:
        return None


class RestDirectory:
    def __init__(self, base_url: str, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=20,
            transport=transport,
        )

    async def _select(self, table: str, filters: Dict[str, str]) -> List[dict]:
        params = {column: f"eq.{value}" for column, value in filters.items()}
        params["select"] = "*"
        try:
            res = await self._client.get(f"/{table}", params=params)
            res.raise_for_status()
            rows = res.json()
        except httpx.HTTPStatusError as e:
            error("Directory query failed", table=table, http_status=e.response.status_code)
            raise DirectoryError(f"Directory query on '{table}' failed", status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            error("Directory unreachable", table=table, reason=str(e))
            raise DirectoryError(f"Directory query on '{table}' failed") from e
        except ValueError as e:
            error("Directory returned a non-JSON body", table=table)
            raise DirectoryError(f"Directory query on '{table}' returned an unreadable body") from e
        if not isinstance(rows, list):
            raise DirectoryError(f"Directory query on '{table}' returned an unexpected body")
        return rows

    @staticmethod
    def _rows_to(model: Type[Row], table: str, rows: List[dict]) -> List[Row]:
        try:
            return [model(**row) for row in rows]
        except (TypeError, ValidationError) as e:
            error("Directory row does not match the expected columns", table=table, reason=type(e).__name__)
            raise DirectoryError(f"Directory rows from '{table}' are malformed") from e

    async def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        rows = await self._select("teachers", {"teacher_id": teacher_id})
        teachers = self._rows_to(Teacher, "teachers", rows[:1])
        return teachers[0] if teachers else None

    async def list_students(self, teacher_id: str) -> List[Student]:
        rows = await self._select("students", {"teacher_id": teacher_id, "status": ACTIVE})
        return self._rows_to(Student, "students", rows)

    async def aclose(self) -> None:
        await self._client.aclose()


# PUBLIC_INTERFACE
def build_directory(settings: Settings) -> Directory:
    """Return the hosted directory when SUPABASE_URL is configured, else an empty in-memory one."""
    if settings.supabase_url:
        return RestDirectory(settings.supabase_url, settings.supabase_anon_key or "")
    return MemoryDirectory()
