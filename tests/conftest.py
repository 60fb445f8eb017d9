# /tests/conftest.py

"""
Shared fixtures. The application is pointed at a throwaway SQLite file
before any `examcell` module is imported, so the engine, `SessionLocal` and
the upload ledger's default session factory all use the test database.
"""

import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="examcell-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("BOOTSTRAP_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

from examcell.core import security
from examcell.db.base import Base
from examcell.db.database import SessionLocal, engine
from examcell.main import app
from examcell.services.database_service import DatabaseService
from examcell.services.upload_helpers.upload_ledger import UploadLedger


@pytest.fixture(autouse=True)
def clean_database():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session():
    with SessionLocal() as s:
        yield s


@pytest.fixture
def db(session):
    """A real DatabaseService bound to a session on the test database."""
    return DatabaseService(session)


@pytest.fixture
def ledger():
    return UploadLedger(session_factory=SessionLocal)


@pytest.fixture
def mock_db_service(mocker):
    """Provides a mock of the DatabaseService for pure unit tests."""
    return mocker.MagicMock(spec=DatabaseService)


# --- Seed data helpers ---

@pytest.fixture
def seed_subjects(db):
    db.add_subject({"code": "CS101", "name": "Intro to Programming", "department": "CS", "credits": 4})
    db.add_subject({"code": "CS102", "name": "Data Structures", "department": "CS", "credits": 4})
    db.add_subject({"code": "MA101", "name": "Calculus I", "department": "Math", "credits": 3})


@pytest.fixture
def seed_students(db):
    db.add_student({
        "id": "S1", "name": "Asha Rao", "email": "asha@example.edu", "department": "CS",
        "year": 2, "gpa": 0.0, "status": "Active", "password": security.hash_password("student-pass"),
    })
    db.add_student({
        "id": "S2", "name": "Ben Okafor", "email": "ben@example.edu", "department": "CS",
        "year": 3, "gpa": 0.0, "status": "Active",
    })


@pytest.fixture
def seed_admin(db):
    return db.add_admin({
        "name": "Exam Cell Admin",
        "email": "admin@example.edu",
        "password": security.hash_password("admin-pass"),
    })


# --- HTTP client ---

@pytest.fixture
def client():
    # Not used as a context manager: the lifespan is skipped, tables come from `clean_database`.
    return TestClient(app)


@pytest.fixture
def admin_headers(seed_admin):
    token = security.create_access_token(
        subject="admin@example.edu", claims={"id": str(seed_admin.id), "role": "admin"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(seed_students):
    token = security.create_access_token(subject="asha@example.edu", claims={"id": "S1", "role": "student"})
    return {"Authorization": f"Bearer {token}"}
