# /examcell/routers/auth_router.py

"""
Login and the current-principal lookup.

`/login` is the only `/api` endpoint reachable without a bearer token; it is
mounted without the application-wide authentication dependency.
"""

from fastapi import APIRouter, Depends

from ..core.deps import get_current_principal
from ..models import auth_model
from ..services import auth_service, database_service
from ..services.auth_service import Principal

router = APIRouter()


@router.post("/login", response_model=auth_model.JwtResponse, summary="Log In and Receive an Access Token")
def login(login_request: auth_model.LoginRequest, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return auth_service.authenticate(
        email=login_request.email,
        password=login_request.password,
        claimed_role=login_request.role,
        db=db,
    )


@router.get("/me", response_model=auth_model.CurrentUser, summary="Get the Authenticated Principal")
def read_current_principal(principal: Principal = Depends(get_current_principal)):
    return principal.to_current_user()
