# /examcell/models/student_model.py

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .common import CamelModel, NonBlankStr


class StudentBase(CamelModel):
    """Fields common to creating and reading a student."""
    name: NonBlankStr = Field(..., description="The full name of the student.")
    email: EmailStr
    department: NonBlankStr
    year: int = Field(..., ge=1)
    profile_image: Optional[str] = Field(default=None)


class StudentCreate(StudentBase):
    id: NonBlankStr = Field(..., max_length=50, description="The official, user-provided ID number for the student.")
    # Optional login password; stored hashed. Without it the student cannot log in.
    password: Optional[str] = Field(default=None, min_length=1, max_length=72)


class StudentUpdate(CamelModel):
    """All fields are optional to allow partial updates. GPA is not updatable."""
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = Field(default=None)
    department: Optional[str] = Field(default=None)
    year: Optional[int] = Field(default=None, ge=1)
    status: Optional[str] = Field(default=None)
    profile_image: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None, min_length=1, max_length=72)


class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    id: str
    gpa: float = Field(default=0.0, description="Derived from the student's results; read-only.")
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
