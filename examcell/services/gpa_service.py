# /examcell/services/gpa_service.py

"""
The GPA recalculator. A student's GPA is always derived from their current
results: the unweighted mean of the grade points of every result, rounded
half-up to two decimals, or 0.0 when the student has no results. Subject
credits are deliberately not used as weights.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..core.exceptions import NotFoundError
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

GRADE_POINTS = {
    "A+": 4.0, "A": 4.0, "A-": 3.7,
    "B+": 3.3, "B": 3.0, "B-": 2.7,
    "C+": 2.3, "C": 2.0, "C-": 1.7,
    "D+": 1.3, "D": 1.0,
    "F": 0.0,
}


def grade_point(grade: str) -> float:
    """Unknown grades count as 0.0, the same as an F."""
    return GRADE_POINTS.get(grade, 0.0)


def round_gpa(value) -> float:
    # Read floats through their shortest repr: 3.925 must round as 3.925.
    if not isinstance(value, Decimal):
        value = Decimal(repr(value))
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_gpa(grades: Iterable[str]) -> float:
    points = [Decimal(repr(grade_point(g))) for g in grades]
    if not points:
        return 0.0
    return round_gpa(sum(points) / len(points))


def recalculate_student_gpa(student_id: str, db: DatabaseService) -> float:
    """
    Recomputes and persists one student's GPA. The student row is only
    written when the value actually changes, so a second call on an unchanged
    result set is a no-op.

    Raises:
        NotFoundError: if the student does not exist.
    """
    student = db.get_student_by_id(student_id)
    if student is None:
        raise NotFoundError(f"Student not found with id: {student_id} during GPA update.")

    results = db.get_results_for_student(student_id)
    new_gpa = compute_gpa(r.grade for r in results)

    if student.gpa != new_gpa:
        db.update_student_gpa(student, new_gpa)
        logger.debug("Updated GPA for student %s to %.2f", student_id, new_gpa)
    else:
        logger.debug("GPA for student %s remains unchanged at %.2f", student_id, new_gpa)
    return new_gpa
