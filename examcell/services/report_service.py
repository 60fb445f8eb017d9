# /examcell/services/report_service.py

"""
Renders the printable HTML report of one semester's results.

Templates live in `examcell/templates` and are rendered with autoescaping,
so every value coming from the database is HTML-escaped.
"""

import logging
from datetime import datetime
from typing import Dict, List

from jinja2 import Environment, PackageLoader, select_autoescape

from .database_service import DatabaseService

logger = logging.getLogger(__name__)

UNKNOWN_STUDENT_NAME = "Unknown"

templates = Environment(
    loader=PackageLoader("examcell", "templates"),
    autoescape=select_autoescape(["html"]),
)


def _student_names(student_ids: List[str], semester: str, db: DatabaseService) -> Dict[str, str]:
    names = {s.id: s.name for s in db.get_students_by_ids(student_ids)}
    for student_id in student_ids:
        if student_id not in names:
            logger.warning("No student found for studentId: %s in semester: %s", student_id, semester)
    return names


def generate_semester_report(semester: str, db: DatabaseService) -> str:
    logger.info("Generating HTML report for semester: %s", semester)

    results = db.get_results_by_semester(semester)
    if not results:
        logger.warning("No results found for semester %s to generate report.", semester)
        return templates.get_template("no_results.html").render(title="No Results Found", semester=semester)

    student_ids = list(dict.fromkeys(r.student_id for r in results))
    names = _student_names(student_ids, semester, db)

    rows = [
        {
            "student_id": r.student_id,
            "student_name": names.get(r.student_id, UNKNOWN_STUDENT_NAME),
            "subject_name": r.subject_name,
            "subject_code": r.subject_code,
            "marks": r.marks,
            "grade": r.grade,
            "status": r.status,
        }
        for r in results
    ]

    html = templates.get_template("semester_report.html").render(
        title=f"Semester Results - {semester}",
        semester=semester,
        generated_on=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        rows=rows,
    )
    logger.info("Successfully generated HTML report for semester: %s", semester)
    return html
