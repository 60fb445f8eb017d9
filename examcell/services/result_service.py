# /examcell/services/result_service.py

"""
Business logic for results written through the direct API.

Unlike CSV ingestion, this path derives `status` from the marks (>= 40 is a
pass). Every create, update and delete is followed by a GPA recalculation
for the owning student; a failed recalculation is logged and does not undo
the result change.
"""

import logging
from typing import List

from ..core.exceptions import NotFoundError
from ..db.models.academic_models import Result
from ..models import result_model
from .database_service import DatabaseService
from . import gpa_service

logger = logging.getLogger(__name__)


def _refresh_gpa(student_id: str, db: DatabaseService, context: str) -> None:
    try:
        gpa_service.recalculate_student_gpa(student_id, db)
    except Exception as e:
        db.rollback()
        logger.error("Failed to update GPA for student %s after %s: %s", student_id, context, e)


def get_all_results(db: DatabaseService) -> List[Result]:
    return db.get_all_results()


def get_results_by_student_id(student_id: str, db: DatabaseService) -> List[Result]:
    return db.get_results_by_student_id(student_id)


def get_results_by_semester(semester: str, db: DatabaseService) -> List[Result]:
    return db.get_results_by_semester(semester)


def create_result(result_data: result_model.ResultCreate, db: DatabaseService) -> Result:
    logger.info("Creating new result for student ID: %s, subject: %s", result_data.student_id, result_data.subject_code)
    if db.get_student_by_id(result_data.student_id) is None:
        raise NotFoundError(f"Student not found with id: {result_data.student_id}")
    if db.get_subject_by_code(result_data.subject_code) is None:
        raise NotFoundError(f"Subject not found with code: {result_data.subject_code}")

    record = result_data.model_dump()
    record["status"] = result_model.derive_status(result_data.marks)
    saved = db.add_result(record)
    logger.info("Result created successfully with ID: %s", saved.id)

    _refresh_gpa(saved.student_id, db, f"creating result {saved.id}")
    return saved


def update_result(result_id: int, result_update: result_model.ResultUpdate, db: DatabaseService) -> Result:
    result = db.get_result_by_id(result_id)
    if result is None:
        raise NotFoundError(f"Result not found with id: {result_id}")

    candidate = {
        "marks": result_update.marks,
        "grade": result_update.grade,
        "status": result_model.derive_status(result_update.marks),
    }
    changes = {k: v for k, v in candidate.items() if getattr(result, k) != v}
    if not changes:
        logger.info("No changes detected for result ID: %s", result_id)
        return result

    updated = db.update_result(result, changes)
    logger.info("Result updated successfully with ID: %s", result_id)

    _refresh_gpa(updated.student_id, db, f"updating result {result_id}")
    return updated


def delete_result(result_id: int, db: DatabaseService) -> None:
    logger.warning("Attempting to delete result with ID: %s", result_id)
    result = db.get_result_by_id(result_id)
    if result is None:
        raise NotFoundError(f"Result not found with id: {result_id}")

    student_id = result.student_id
    db.delete_result(result)
    logger.info("Result deleted successfully with ID: %s", result_id)

    _refresh_gpa(student_id, db, f"deleting result {result_id}")
