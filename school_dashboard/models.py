from typing import Optional
from pydantic import BaseModel, Field

ACTIVE = "active"


class Teacher(BaseModel):
    id: str = Field(..., description="Row id in the teachers table (uuid)")
    teacher_id: str = Field(..., description="External teacher ID used to log in, e.g. TCH4F9A2B")
    name: str = Field(default="", description="Display name")
    principal_id: Optional[str] = Field(default=None, alias="principle_id", description="Owning principal row id")
    school_id: Optional[str] = Field(default=None, description="School row id")
    password: Optional[str] = Field(default=None, description="Login password (never returned by the API)")

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}


class Student(BaseModel):
    id: str = Field(..., description="Row id in the students table (uuid)")
    student_id: str = Field(..., description="External student ID")
    name: str = Field(default="")
    teacher_id: str = Field(..., description="External ID of the registering teacher")
    principal_id: Optional[str] = Field(default=None, alias="principle_id")
    school_id: Optional[str] = Field(default=None)
    class_name: Optional[str] = Field(default=None, alias="class")
    section: Optional[str] = Field(default=None)
    status: str = Field(default=ACTIVE, description="Removed students are kept with another status")

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}
