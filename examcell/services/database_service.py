# /examcell/services/database_service.py

from typing import Dict, Generator, Iterable, List

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from examcell.db.database import get_db

# --- Repository Imports ---
from .database_helpers.admin_repository_sql import AdminRepositorySQL
from .database_helpers.student_subject_repository_sql import StudentSubjectRepositorySQL
from .database_helpers.result_repository_sql import ResultRepositorySQL
from .database_helpers.upload_repository_sql import UploadRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Bundles every SQL repository around one request-scoped session. The
        session's unit of work is exposed through `commit` and `rollback` for
        callers (the CSV ingestion engine) that span several writes.
        """
        self.session = db_session
        self.admin_repo = AdminRepositorySQL(db_session)
        self.student_subject_repo = StudentSubjectRepositorySQL(db_session)
        self.result_repo = ResultRepositorySQL(db_session)
        self.upload_repo = UploadRepositorySQL(db_session)

    # --- UNIT OF WORK ---
    def commit(self): self.session.commit()
    def rollback(self): self.session.rollback()

    # --- ADMIN METHODS (DELEGATED) ---
    def get_admin_by_email(self, email: str): return self.admin_repo.get_admin_by_email(email)
    def add_admin(self, record: Dict): return self.admin_repo.add_admin(record)

    # --- STUDENT METHODS (DELEGATED) ---
    def get_all_students(self) -> List: return self.student_subject_repo.get_all_students()
    def get_student_by_id(self, student_id: str): return self.student_subject_repo.get_student_by_id(student_id)
    def get_student_by_email(self, email: str): return self.student_subject_repo.get_student_by_email(email)
    def get_students_by_ids(self, student_ids: Iterable[str]) -> List: return self.student_subject_repo.get_students_by_ids(student_ids)
    def add_student(self, record: Dict): return self.student_subject_repo.add_student(record)
    def update_student(self, student_id: str, data: Dict): return self.student_subject_repo.update_student(student_id, data)
    def update_student_gpa(self, student, gpa: float): return self.student_subject_repo.update_student_gpa(student, gpa)
    def delete_student(self, student_id: str) -> bool: return self.student_subject_repo.delete_student(student_id)

    # --- SUBJECT METHODS (DELEGATED) ---
    def get_all_subjects(self) -> List: return self.student_subject_repo.get_all_subjects()
    def get_subject_by_code(self, code: str): return self.student_subject_repo.get_subject_by_code(code)
    def add_subject(self, record: Dict): return self.student_subject_repo.add_subject(record)
    def update_subject(self, code: str, data: Dict): return self.student_subject_repo.update_subject(code, data)
    def delete_subject(self, code: str) -> bool: return self.student_subject_repo.delete_subject(code)

    # --- RESULT METHODS (DELEGATED) ---
    def get_all_results(self) -> List: return self.result_repo.get_all_results()
    def get_result_by_id(self, result_id: int): return self.result_repo.get_result_by_id(result_id)
    def get_results_for_student(self, student_id: str) -> List: return self.result_repo.get_results_by_student_id(student_id)
    def get_results_by_student_id(self, student_id: str) -> List: return self.result_repo.get_results_by_student_id_ordered(student_id)
    def get_results_by_semester(self, semester: str) -> List: return self.result_repo.get_results_by_semester(semester)
    def add_result(self, record: Dict): return self.result_repo.add_result(record)
    def add_results_batch(self, records: List[Dict]) -> int: return self.result_repo.add_results_batch(records)
    def update_result(self, result, data: Dict): return self.result_repo.update_result(result, data)
    def delete_result(self, result) -> None: return self.result_repo.delete_result(result)

    # --- UPLOAD LEDGER READS (DELEGATED) ---
    # Ledger writes go through `UploadLedger`, which uses its own sessions.
    def get_recent_uploads(self, limit: int) -> List: return self.upload_repo.get_recent_uploads(limit)
    def get_upload_by_id(self, upload_id: str): return self.upload_repo.get_upload_by_id(upload_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
