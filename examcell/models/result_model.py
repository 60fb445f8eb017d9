# /examcell/models/result_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel, NonBlankStr

PASS_MARK = 40.0


class ResultStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"


def derive_status(marks: Optional[float]) -> str:
    """Pass/fail policy for results written through the direct API."""
    if marks is None:
        return ResultStatus.FAIL.value
    return ResultStatus.PASS.value if marks >= PASS_MARK else ResultStatus.FAIL.value


class ResultCreate(CamelModel):
    student_id: NonBlankStr
    semester: NonBlankStr
    subject_code: NonBlankStr
    subject_name: NonBlankStr
    marks: float = Field(..., ge=0.0, le=100.0)
    grade: NonBlankStr = Field(..., max_length=5)


class ResultUpdate(CamelModel):
    marks: float = Field(..., ge=0.0, le=100.0)
    grade: NonBlankStr = Field(..., max_length=5)


class Result(CamelModel):
    id: int
    student_id: str
    semester: str
    subject_code: str
    subject_name: str
    marks: float
    grade: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
