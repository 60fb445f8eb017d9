# /examcell/services/subject_service.py

import logging
from typing import List

from ..core.exceptions import BadInputError, NotFoundError
from ..db.models.academic_models import Subject
from ..models import subject_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def get_all_subjects(db: DatabaseService) -> List[Subject]:
    return db.get_all_subjects()


def get_subject(code: str, db: DatabaseService) -> Subject:
    subject = db.get_subject_by_code(code)
    if subject is None:
        raise NotFoundError(f"Subject not found with code: {code}")
    return subject


def create_subject(subject_data: subject_model.SubjectCreate, db: DatabaseService) -> Subject:
    logger.info("Creating new subject with code: %s", subject_data.code)
    if db.get_subject_by_code(subject_data.code):
        raise BadInputError(f"Subject with code {subject_data.code} already exists.")
    return db.add_subject(subject_data.model_dump())


def update_subject(code: str, subject_update: subject_model.SubjectUpdate, db: DatabaseService) -> Subject:
    subject = get_subject(code, db)
    update_data = subject_update.model_dump(exclude_unset=True, exclude_none=True)
    changes = {k: v for k, v in update_data.items() if getattr(subject, k) != v}
    if not changes:
        logger.info("No changes detected for subject code: %s", code)
        return subject
    return db.update_subject(code, changes)


def delete_subject(code: str, db: DatabaseService) -> None:
    logger.warning("Attempting to delete subject with code: %s", code)
    if not db.delete_subject(code):
        raise NotFoundError(f"Subject not found with code: {code}")
