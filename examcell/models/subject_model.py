# /examcell/models/subject_model.py

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel, NonBlankStr


class SubjectCreate(CamelModel):
    code: NonBlankStr = Field(..., max_length=20)
    name: NonBlankStr
    department: NonBlankStr
    credits: int = Field(..., ge=0)


class SubjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    department: Optional[str] = Field(default=None)
    credits: Optional[int] = Field(default=None, ge=0)


class Subject(CamelModel):
    code: str
    name: str
    department: str
    credits: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
