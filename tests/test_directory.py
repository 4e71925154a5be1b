"""
Directory backends: in-memory filters and the PostgREST client.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from school_dashboard.core.errors import DirectoryError
from school_dashboard.core.settings import Settings
from school_dashboard.main import create_app
from school_dashboard.models import Student, Teacher
from school_dashboard.repositories.directory import MemoryDirectory, RestDirectory, build_directory

PRINCIPAL_UUID = "0b7e9a52-3c1d-4f6e-9a8b-2d4c6e8f0a1b"
SCHOOL_UUID = "5d2f8c31-7a4b-4e9c-8d1f-3b6a9c2e7f40"

# Rows shaped like the hosted teachers/students tables.
TEACHER_ROW = {
    "id": "6f1c0e1e-2b3a-4c5d-8e9f-0a1b2c3d4e5f",
    "teacher_id": "TCH4F9A2B",
    "name": "Ada",
    "email": "ada@example.org",
    "principle_id": PRINCIPAL_UUID,
    "school_id": SCHOOL_UUID,
}
STUDENT_ROWS = [
    {
        "id": "9a8b7c6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d",
        "student_id": "STU1",
        "name": "Lin",
        "roll_no": "12",
        "class": "5",
        "section": "B",
        "parent_email": "lin.parent@example.org",
        "parent_phone": "555-0101",
        "status": "active",
        "principle_id": PRINCIPAL_UUID,
        "school_id": SCHOOL_UUID,
        "teacher_id": "TCH4F9A2B",
        "is_final_submitted": False,
    },
    {
        "id": "1c2d3e4f-5a6b-4c7d-8e9f-a0b1c2d3e4f5",
        "student_id": "STU2",
        "name": "Omar",
        "class": "5",
        "section": None,
        "status": "active",
        "principle_id": PRINCIPAL_UUID,
        "school_id": SCHOOL_UUID,
        "teacher_id": "TCH4F9A2B",
    },
    {
        "id": "2e3f4a5b-6c7d-4e8f-9a0b-c1d2e3f4a5b6",
        "student_id": "STU3",
        "name": "Ren",
        "class": "5",
        "status": "inactive",
        "principle_id": PRINCIPAL_UUID,
        "school_id": SCHOOL_UUID,
        "teacher_id": "TCH4F9A2B",
    },
]


def _matches(row: dict, params: httpx.QueryParams) -> bool:
    for column, value in params.multi_items():
        if column == "select":
            continue
        if f"eq.{row.get(column)}" != value:
            return False
    return True


def _postgrest(seen: list, status_code: int = 200, teacher_rows=None, raw_body=None):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"message": "boom"})
        if raw_body is not None:
            return httpx.Response(200, content=raw_body, headers={"content-type": "text/html"})
        table = request.url.path.rsplit("/", 1)[-1]
        source = (teacher_rows if teacher_rows is not None else [TEACHER_ROW]) if table == "teachers" else STUDENT_ROWS
        return httpx.Response(200, json=[r for r in source if _matches(r, request.url.params)])

    return httpx.MockTransport(handler)


def _client(directory) -> TestClient:
    settings = Settings(identity_secret_key="secret123", environment="development", supabase_url=None)
    return TestClient(create_app(settings, directory))


@pytest.mark.asyncio
async def test_memory_directory_filters_by_teacher_and_status():
    directory = MemoryDirectory()
    directory.add_teacher(Teacher(id="t-1", teacher_id="TCH4F9A2B", name="Ada"))
    directory.add_student(Student(id="s-1", student_id="STU1", teacher_id="TCH4F9A2B"))
    directory.add_student(Student(id="s-2", student_id="STU2", teacher_id="TCH4F9A2B", status="inactive"))
    directory.add_student(Student(id="s-3", student_id="STU3", teacher_id="OTHER"))
    assert (await directory.get_teacher("TCH4F9A2B")).name == "Ada"
    assert await directory.get_teacher("missing") is None
    assert [s.student_id for s in await directory.list_students("TCH4F9A2B")] == ["STU1"]


@pytest.mark.asyncio
async def test_rest_directory_reads_uuid_keyed_rows():
    seen = []
    directory = RestDirectory("https://example.supabase.co/", "anon-key", transport=_postgrest(seen))
    teacher = await directory.get_teacher("TCH4F9A2B")
    assert teacher.id == TEACHER_ROW["id"]
    assert teacher.principal_id == PRINCIPAL_UUID
    assert teacher.school_id == SCHOOL_UUID
    students = await directory.list_students("TCH4F9A2B")
    assert [s.student_id for s in students] == ["STU1", "STU2"]
    assert students[0].class_name == "5"
    assert students[0].section == "B"
    assert await directory.get_teacher("nobody") is None
    await directory.aclose()

    first = seen[0]
    assert first.url.path == "/rest/v1/teachers"
    assert first.url.params["teacher_id"] == "eq.TCH4F9A2B"
    assert first.url.params["select"] == "*"
    assert first.headers["apikey"] == "anon-key"
    assert first.headers["authorization"] == "Bearer anon-key"

    student_query = seen[1]
    assert student_query.url.path == "/rest/v1/students"
    assert student_query.url.params["teacher_id"] == "eq.TCH4F9A2B"
    assert student_query.url.params["status"] == "eq.active"


@pytest.mark.asyncio
async def test_rest_directory_wraps_upstream_errors():
    directory = RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], status_code=500))
    with pytest.raises(DirectoryError) as exc:
        await directory.get_teacher("TCH4F9A2B")
    assert exc.value.status_code == 500
    await directory.aclose()


@pytest.mark.asyncio
async def test_rest_directory_rejects_non_json_body():
    directory = RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], raw_body=b"<html>gateway</html>"))
    with pytest.raises(DirectoryError):
        await directory.list_students("TCH4F9A2B")
    await directory.aclose()


@pytest.mark.asyncio
async def test_rest_directory_rejects_rows_missing_columns():
    bad_rows = [{"id": "6f1c0e1e-2b3a-4c5d-8e9f-0a1b2c3d4e5f", "teacher_id": "TCH4F9A2B", "name": None}]
    directory = RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], teacher_rows=bad_rows))
    with pytest.raises(DirectoryError):
        await directory.get_teacher("TCH4F9A2B")
    await directory.aclose()


def test_build_directory_follows_settings():
    assert isinstance(build_directory(Settings(identity_secret_key="k", supabase_url=None)), MemoryDirectory)
    assert isinstance(
        build_directory(Settings(identity_secret_key="k", supabase_url="https://example.supabase.co", supabase_anon_key="anon")),
        RestDirectory,
    )


def test_upstream_failure_maps_to_502():
    client = _client(RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], status_code=503)))
    r = client.post("/api/teachers/login", json={"teacher_id": "TCH4F9A2B", "password": "pw"})
    assert r.status_code == 502
    assert r.json()["detail"]["code"] == "UPSTREAM_ERROR"


def test_non_json_upstream_body_maps_to_502():
    client = _client(RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], raw_body=b"<html>gateway</html>")))
    r = client.post("/api/teachers/login", json={"teacher_id": "TCH4F9A2B", "password": "pw"})
    assert r.status_code == 502
    assert r.json()["detail"]["code"] == "UPSTREAM_ERROR"


def test_malformed_upstream_row_maps_to_502():
    bad_rows = [{"teacher_id": "TCH4F9A2B"}]
    client = _client(RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([], teacher_rows=bad_rows)))
    r = client.post("/api/teachers/login", json={"teacher_id": "TCH4F9A2B", "password": "pw"})
    assert r.status_code == 502


def test_login_and_student_list_against_hosted_directory():
    client = _client(RestDirectory("https://example.supabase.co", "anon-key", transport=_postgrest([])))
    # The hosted teachers table carries no password column.
    r = client.post("/api/teachers/login", json={"teacher_id": "TCH4F9A2B", "password": "anything"})
    assert r.status_code == 200
    profile = client.get("/api/teachers/me").json()["data"]
    assert profile["principal_id"] == PRINCIPAL_UUID
    data = client.get("/api/students").json()["data"]
    assert data["total"] == 2
    assert {s["student_id"] for s in data["items"]} == {"STU1", "STU2"}
    assert data["items"][0]["class_name"] == "5"
