# /examcell/services/database_helpers/result_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Result table.

Single-row writes commit immediately. `add_results_batch` only flushes: the
CSV ingestion engine owns the surrounding unit of work and decides whether
the whole upload is committed or rolled back.
"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from examcell.db.models.academic_models import Result


class ResultRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all_results(self) -> List[Result]:
        return self.db.query(Result).order_by(Result.id).all()

    def get_result_by_id(self, result_id: int) -> Optional[Result]:
        return self.db.get(Result, result_id)

    def get_results_by_student_id(self, student_id: str) -> List[Result]:
        return self.db.query(Result).filter(Result.student_id == student_id).all()

    def get_results_by_student_id_ordered(self, student_id: str) -> List[Result]:
        """Newest semester first, then alphabetically by subject name."""
        return (
            self.db.query(Result)
            .filter(Result.student_id == student_id)
            .order_by(Result.semester.desc(), Result.subject_name.asc())
            .all()
        )

    def get_results_by_semester(self, semester: str) -> List[Result]:
        return (
            self.db.query(Result)
            .filter(Result.semester == semester)
            .order_by(Result.student_id.asc(), Result.subject_name.asc())
            .all()
        )

    def add_result(self, record: Dict) -> Result:
        new_result = Result(**record)
        self.db.add(new_result)
        self.db.commit()
        self.db.refresh(new_result)
        return new_result

    def add_results_batch(self, records: List[Dict]) -> int:
        """Sends one batch of inserts to the database without committing."""
        self.db.add_all([Result(**record) for record in records])
        self.db.flush()
        return len(records)

    def update_result(self, result: Result, data: Dict) -> Result:
        for key, value in data.items():
            setattr(result, key, value)
        self.db.commit()
        self.db.refresh(result)
        return result

    def delete_result(self, result: Result) -> None:
        self.db.delete(result)
        self.db.commit()
