# /examcell/services/database_helpers/student_subject_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Student and Subject
tables. Every write commits immediately; the caller owns the session.
"""

from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from examcell.db.models.academic_models import Student, Subject


class StudentSubjectRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Student Methods ---

    def get_all_students(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.id).all()

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.db.get(Student, student_id)

    def get_student_by_email(self, email: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.email == email).first()

    def get_students_by_ids(self, student_ids: Iterable[str]) -> List[Student]:
        ids = list(student_ids)
        if not ids:
            return []
        return self.db.query(Student).filter(Student.id.in_(ids)).all()

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self.db.commit()
        self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            for key, value in data.items():
                setattr(db_student, key, value)
            self.db.commit()
            self.db.refresh(db_student)
        return db_student

    def update_student_gpa(self, student: Student, gpa: float) -> Student:
        student.gpa = gpa
        self.db.commit()
        self.db.refresh(student)
        return student

    def delete_student(self, student_id: str) -> bool:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            self.db.delete(db_student)
            self.db.commit()
            return True
        return False

    # --- Subject Methods ---

    def get_all_subjects(self) -> List[Subject]:
        return self.db.query(Subject).order_by(Subject.code).all()

    def get_subject_by_code(self, code: str) -> Optional[Subject]:
        return self.db.get(Subject, code)

    def add_subject(self, record: Dict) -> Subject:
        new_subject = Subject(**record)
        self.db.add(new_subject)
        self.db.commit()
        self.db.refresh(new_subject)
        return new_subject

    def update_subject(self, code: str, data: Dict) -> Optional[Subject]:
        db_subject = self.get_subject_by_code(code)
        if db_subject:
            for key, value in data.items():
                setattr(db_subject, key, value)
            self.db.commit()
            self.db.refresh(db_subject)
        return db_subject

    def delete_subject(self, code: str) -> bool:
        db_subject = self.get_subject_by_code(code)
        if db_subject:
            self.db.delete(db_subject)
            self.db.commit()
            return True
        return False
