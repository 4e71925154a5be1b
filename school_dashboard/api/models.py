# PUBLIC_INTERFACE
"""
Shared API models: unified response envelopes and requests.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


# PUBLIC_INTERFACE
class Envelope(BaseModel):
    """Standard success response envelope."""
    status: str = Field(default="ok")
    data: Any = Field(default=None)


# PUBLIC_INTERFACE
class TeacherLoginRequest(BaseModel):
    """Teacher login form."""
    teacher_id: str = Field(..., min_length=1, description="External teacher ID, e.g. TCH4F9A2B")
    password: str = Field(..., min_length=1, description="Teacher password (never logged)")


# PUBLIC_INTERFACE
class PrincipalSessionRequest(BaseModel):
    """Principal identifier confirmed by the hosted auth provider."""
    principal_id: str = Field(..., min_length=1, description="Principal row id")


# PUBLIC_INTERFACE
class TeacherProfile(BaseModel):
    """Teacher record as exposed to the dashboard (no password)."""
    teacher_id: str
    name: str
    principal_id: Optional[str] = None
    school_id: Optional[str] = None


# PUBLIC_INTERFACE
class StudentRow(BaseModel):
    student_id: str
    name: str
    class_name: Optional[str] = None


# PUBLIC_INTERFACE
class StudentList(BaseModel):
    """Students registered by the current teacher."""
    teacher_id: str
    total: int
    items: List[StudentRow]
