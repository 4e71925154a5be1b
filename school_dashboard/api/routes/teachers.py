# PUBLIC_INTERFACE
"""
Teacher session endpoints:
- POST /api/teachers/login
- POST /api/teachers/logout
- GET /api/teachers/me
"""
from __future__ import annotations

import hmac

from fastapi import APIRouter, Depends, Request, Response

from ...core.errors import ErrorCode, http_error
from ...core.logging import info, warning
from ...identity.cookie_store import IdentityStore
from ...repositories.directory import Directory
from ..deps import current_teacher_id, directory_dep, request_id_of, teacher_store_dep
from ..models import Envelope, TeacherLoginRequest, TeacherProfile

router = APIRouter(prefix="/api/teachers", tags=["teachers"])

DASHBOARD_URL = "/Teacher/Dashboard"


def _password_matches(stored: str | None, given: str) -> bool:
    # Hosted tables without a password column defer to upstream auth.
    if stored is None:
        return True
    return hmac.compare_digest(stored.encode("utf-8"), given.encode("utf-8"))


@router.post("/login", summary="Teacher login", response_model=Envelope)
async def login(
    body: TeacherLoginRequest,
    request: Request,
    response: Response,
    directory: Directory = Depends(directory_dep),
    store: IdentityStore = Depends(teacher_store_dep),
):
    """Check the teacher's credentials and set the identity cookie."""
    teacher = await directory.get_teacher(body.teacher_id)
    if teacher is None or not _password_matches(teacher.password, body.password):
        warning("Teacher login rejected", request_id=request_id_of(request), teacher_id=body.teacher_id)
        raise http_error(401, ErrorCode.UNAUTHORIZED, "Invalid teacher credentials")
    store.persist_identity(response, teacher.teacher_id)
    info("Teacher logged in", request_id=request_id_of(request), teacher_id=teacher.teacher_id)
    return Envelope(data={"redirect_to": DASHBOARD_URL})


@router.post("/logout", summary="Teacher logout", response_model=Envelope)
def logout(response: Response, store: IdentityStore = Depends(teacher_store_dep)):
    """Drop the identity cookies."""
    store.forget_identity(response)
    return Envelope(data={"redirect_to": store.login_url})


@router.get("/me", summary="Current teacher", response_model=Envelope)
async def me(
    teacher_id: str = Depends(current_teacher_id),
    directory: Directory = Depends(directory_dep),
    store: IdentityStore = Depends(teacher_store_dep),
):
    """Return the profile of the teacher named by the identity cookie."""
    teacher = await directory.get_teacher(teacher_id)
    if teacher is None:
        raise http_error(401, ErrorCode.AUTH_REQUIRED, "Teacher not found; please sign in again.", login_url=store.login_url)
    profile = TeacherProfile(
        teacher_id=teacher.teacher_id,
        name=teacher.name,
        principal_id=teacher.principal_id,
        school_id=teacher.school_id,
    )
    return Envelope(data=profile.model_dump())
