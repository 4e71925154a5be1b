# PUBLIC_INTERFACE
"""
Student endpoints scoped to the signed-in teacher.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ...repositories.directory import Directory
from ..deps import current_teacher_id, directory_dep
from ..models import Envelope, StudentList, StudentRow

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", summary="List my students", response_model=Envelope)
async def list_students(teacher_id: str = Depends(current_teacher_id), directory: Directory = Depends(directory_dep)):
    """Return students whose teacher_id equals the recovered identifier."""
    students = await directory.list_students(teacher_id)
    items = [StudentRow(student_id=s.student_id, name=s.name, class_name=s.class_name) for s in students]
    return Envelope(data=StudentList(teacher_id=teacher_id, total=len(items), items=items).model_dump())
