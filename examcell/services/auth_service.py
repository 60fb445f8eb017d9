# /examcell/services/auth_service.py

"""
Authentication: resolving a principal by email, checking credentials,
issuing JWT access tokens, and turning a bearer token back into a principal.

A principal is either an administrator or a student who has a password set.
The two live in separate tables and are looked up by an ordered chain of
resolver functions; the first one that recognises the email wins, so an
administrator always shadows a student with the same address.

Every login failure, whatever its cause, is reported to the caller as the
same generic `InvalidCredentialsError`. The actual reason is only logged.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from email_validator import EmailNotValidError, validate_email

from ..core import config, security
from ..core.exceptions import InvalidCredentialsError
from ..models.auth_model import CurrentUser, JwtResponse, Role
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    role: Role
    id: str
    email: str
    name: str
    password_hash: Optional[str]

    def to_current_user(self) -> CurrentUser:
        return CurrentUser(id=self.id, email=self.email, name=self.name, role=self.role)


# --- Principal resolution ---

def _resolve_admin(email: str, db: DatabaseService) -> Optional[Principal]:
    admin = db.get_admin_by_email(email)
    if admin is None:
        return None
    return Principal(role=Role.ADMIN, id=str(admin.id), email=admin.email, name=admin.name, password_hash=admin.password)


def _resolve_student(email: str, db: DatabaseService) -> Optional[Principal]:
    student = db.get_student_by_email(email)
    # A student without a password has no credentials and cannot log in.
    if student is None or not student.password:
        return None
    return Principal(role=Role.STUDENT, id=student.id, email=student.email, name=student.name, password_hash=student.password)


PRINCIPAL_RESOLVERS: List[Callable[[str, DatabaseService], Optional[Principal]]] = [
    _resolve_admin,
    _resolve_student,
]


def resolve_principal(email: str, db: DatabaseService) -> Optional[Principal]:
    for resolver in PRINCIPAL_RESOLVERS:
        principal = resolver(email, db)
        if principal is not None:
            return principal
    return None


# --- Login ---

def authenticate(email: str, password: str, claimed_role: str, db: DatabaseService) -> JwtResponse:
    logger.info("Authentication attempt for email: %s as role: %s", email, claimed_role)

    principal = resolve_principal(email, db)
    if principal is None:
        logger.warning("Authentication failed for %s: no principal with that email.", email)
        raise InvalidCredentialsError()

    if not security.verify_password(password, principal.password_hash):
        logger.warning("Authentication failed for %s: password mismatch.", email)
        raise InvalidCredentialsError()

    if (claimed_role or "").strip().lower() != principal.role.value:
        logger.warning(
            "Authentication failed for %s: claimed role '%s' but account is '%s'.",
            email, claimed_role, principal.role.value,
        )
        raise InvalidCredentialsError()

    token = security.create_access_token(
        subject=principal.email,
        claims={"id": principal.id, "role": principal.role.value},
    )
    logger.info("User %s authenticated successfully as %s.", principal.email, principal.role.value)
    return JwtResponse(
        token=token,
        id=principal.id,
        email=principal.email,
        name=principal.name,
        role=principal.role,
    )


# --- Token validation ---

def validate_token(token: Optional[str], db: DatabaseService) -> Optional[Principal]:
    """
    Returns the principal a token was issued to, or None when the token is
    missing, malformed, tampered with, expired, or names an account that no
    longer exists or has changed role.
    """
    payload = security.decode_access_token(token)
    if payload is None:
        return None

    email = payload.get("sub")
    if not email:
        logger.warning("JWT token carries no subject claim.")
        return None

    principal = resolve_principal(email, db)
    if principal is None:
        logger.warning("JWT subject %s no longer resolves to an account.", email)
        return None
    if payload.get("role") != principal.role.value:
        logger.warning("JWT role claim for %s no longer matches the account.", email)
        return None
    return principal


# --- Startup ---

def seed_bootstrap_admin(db: DatabaseService) -> None:
    """
    Creates the configured first administrator unless one already exists.

    The address is validated and normalised the same way `LoginRequest.email`
    is, so the seeded account is reachable through `/api/auth/login`.

    Raises:
        ValueError: if BOOTSTRAP_ADMIN_EMAIL is not an address login accepts.
    """
    password = config.BOOTSTRAP_ADMIN_PASSWORD
    if not config.BOOTSTRAP_ADMIN_EMAIL or not password:
        return
    try:
        email = validate_email(config.BOOTSTRAP_ADMIN_EMAIL, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValueError(f"BOOTSTRAP_ADMIN_EMAIL is not a valid login email: {e}") from e
    if db.get_admin_by_email(email) is not None:
        logger.debug("Bootstrap administrator %s already exists.", email)
        return
    db.add_admin({
        "name": config.BOOTSTRAP_ADMIN_NAME,
        "email": email,
        "password": security.hash_password(password),
    })
    logger.info("Created bootstrap administrator account %s.", email)
