# /examcell/models/auth_model.py

from enum import Enum

from pydantic import EmailStr, Field

from .common import CamelModel, NonBlankStr


class Role(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: NonBlankStr = Field(..., description="The role the caller is logging in as ('admin' or 'student').")


class CurrentUser(CamelModel):
    """The public view of a principal. Never carries the password hash."""
    id: str
    email: str
    name: str
    role: Role


class JwtResponse(CurrentUser):
    token: str
