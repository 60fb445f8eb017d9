# /examcell/core/deps.py

"""
Request-level authentication dependencies.

A missing or unreadable bearer token never fails on its own: it just leaves
the request without a principal. Only the dependencies that require one
(`get_current_principal`, `require_admin`) turn that into a 401 or 403.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..models.auth_model import Role
from ..services import auth_service
from ..services.auth_service import Principal
from ..services.database_service import DatabaseService, get_db_service
from .exceptions import ForbiddenError, UnauthenticatedError

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> Optional[Principal]:
    if credentials is None:
        return None
    return auth_service.validate_token(credentials.credentials, db)


def get_current_principal(principal: Optional[Principal] = Depends(get_optional_principal)) -> Principal:
    if principal is None:
        raise UnauthenticatedError()
    return principal


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != Role.ADMIN:
        raise ForbiddenError()
    return principal
