# /examcell/services/student_service.py

"""
Business logic for student records. GPA is never accepted from a client; it
only changes through `gpa_service.recalculate_student_gpa`.
"""

import logging
from typing import List

from ..core.exceptions import BadInputError, NotFoundError
from ..core.security import hash_password
from ..db.models.academic_models import Student
from ..models import student_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def get_all_students(db: DatabaseService) -> List[Student]:
    return db.get_all_students()


def get_student(student_id: str, db: DatabaseService) -> Student:
    student = db.get_student_by_id(student_id)
    if student is None:
        logger.warning("Student not found with ID: %s", student_id)
        raise NotFoundError(f"Student not found with id: {student_id}")
    return student


def create_student(student_data: student_model.StudentCreate, db: DatabaseService) -> Student:
    logger.info("Creating new student with ID: %s", student_data.id)
    if db.get_student_by_id(student_data.id):
        raise BadInputError(f"Student with ID {student_data.id} already exists.")
    if db.get_student_by_email(student_data.email):
        raise BadInputError(f"Student with email {student_data.email} already exists.")

    record = student_data.model_dump(exclude={"password"})
    record["gpa"] = 0.0
    record["status"] = "Active"
    record["password"] = hash_password(student_data.password) if student_data.password else None

    new_student = db.add_student(record)
    logger.info("Student created successfully with ID: %s", new_student.id)
    return new_student


def update_student(student_id: str, student_update: student_model.StudentUpdate, db: DatabaseService) -> Student:
    student = get_student(student_id, db)
    update_data = student_update.model_dump(exclude_unset=True, exclude_none=True)

    changes = {}
    for key, value in update_data.items():
        if key == "password":
            changes["password"] = hash_password(value)
        elif getattr(student, key) != value:
            changes[key] = value

    if "email" in changes:
        existing = db.get_student_by_email(changes["email"])
        if existing and existing.id != student_id:
            raise BadInputError(f"Email {changes['email']} is already in use.")

    if not changes:
        logger.info("No changes detected for student ID: %s", student_id)
        return student

    updated = db.update_student(student_id, changes)
    logger.info("Student updated successfully with ID: %s", student_id)
    return updated


def delete_student(student_id: str, db: DatabaseService) -> None:
    # The student's results are intentionally left in place.
    logger.warning("Attempting to delete student with ID: %s", student_id)
    if not db.delete_student(student_id):
        raise NotFoundError(f"Student not found with id: {student_id}")
    logger.info("Student deleted successfully with ID: %s", student_id)
