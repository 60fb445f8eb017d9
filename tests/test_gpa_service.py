# /tests/test_gpa_service.py

import pytest
from unittest.mock import MagicMock

from examcell.core.exceptions import NotFoundError
from examcell.services import gpa_service

# --- Test Data Fixtures ---

@pytest.fixture
def stored_student():
    """A student row as the repository would return it."""
    student = MagicMock()
    student.id = "S1"
    student.gpa = 0.0
    return student


def _results(*grades):
    return [MagicMock(grade=g) for g in grades]

# --- Pure calculation ---

def test_compute_gpa_is_unweighted_mean():
    """A, B and F average to 2.33 regardless of subject credits."""
    assert gpa_service.compute_gpa(["A", "B", "F"]) == 2.33

def test_compute_gpa_without_results_is_zero():
    assert gpa_service.compute_gpa([]) == 0.0

def test_unknown_grade_counts_as_zero():
    assert gpa_service.grade_point("Z") == 0.0
    assert gpa_service.compute_gpa(["A", "Z"]) == 2.0

@pytest.mark.parametrize("grades, expected", [
    (["A+", "A-"], 3.85),
    (["B+", "C-", "D+"], 2.1),
    (["A", "A", "B-"], 3.57),
    (["A", "A", "A", "A-"], 3.93),
    (["A+", "A+", "A+", "B-"], 3.68),
    (["A+", "A+", "A+", "C-"], 3.43),
])
def test_compute_gpa_rounds_half_up_to_two_places(grades, expected):
    assert gpa_service.compute_gpa(grades) == expected

def test_round_gpa_rounds_half_up():
    assert gpa_service.round_gpa(2.125) == 2.13
    assert gpa_service.round_gpa(3.925) == 3.93
    assert gpa_service.round_gpa(1.005) == 1.01
    assert gpa_service.round_gpa(3.0) == 3.0

# --- Recalculation against the store ---

def test_recalculate_writes_new_gpa(mock_db_service, stored_student):
    mock_db_service.get_student_by_id.return_value = stored_student
    mock_db_service.get_results_for_student.return_value = _results("A", "B", "F")

    gpa = gpa_service.recalculate_student_gpa("S1", mock_db_service)

    assert gpa == 2.33
    mock_db_service.update_student_gpa.assert_called_once_with(stored_student, 2.33)

def test_recalculate_skips_write_when_unchanged(mock_db_service, stored_student):
    stored_student.gpa = 2.33
    mock_db_service.get_student_by_id.return_value = stored_student
    mock_db_service.get_results_for_student.return_value = _results("A", "B", "F")

    gpa_service.recalculate_student_gpa("S1", mock_db_service)

    mock_db_service.update_student_gpa.assert_not_called()

def test_recalculate_unknown_student_raises_not_found(mock_db_service):
    mock_db_service.get_student_by_id.return_value = None
    with pytest.raises(NotFoundError):
        gpa_service.recalculate_student_gpa("ghost", mock_db_service)
    mock_db_service.update_student_gpa.assert_not_called()

def test_recalculate_twice_writes_once(db, seed_students, seed_subjects):
    """Against the real store: a second call on unchanged results is a no-op."""
    db.add_results_batch([
        {"student_id": "S1", "semester": "Fall 2024", "subject_code": "CS101", "subject_name": "Intro to Programming",
         "marks": 85.0, "grade": "A", "status": "Pass"},
        {"student_id": "S1", "semester": "Fall 2024", "subject_code": "CS102", "subject_name": "Data Structures",
         "marks": 70.0, "grade": "B", "status": "Pass"},
        {"student_id": "S1", "semester": "Fall 2024", "subject_code": "MA101", "subject_name": "Calculus I",
         "marks": 20.0, "grade": "F", "status": "Fail"},
    ])
    db.commit()

    writes = []
    original = db.update_student_gpa

    def spy(student, gpa):
        writes.append(gpa)
        return original(student, gpa)

    db.update_student_gpa = spy

    assert gpa_service.recalculate_student_gpa("S1", db) == 2.33
    assert gpa_service.recalculate_student_gpa("S1", db) == 2.33
    assert writes == [2.33]
    assert db.get_student_by_id("S1").gpa == 2.33
