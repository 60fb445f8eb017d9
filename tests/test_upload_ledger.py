# /tests/test_upload_ledger.py

import pytest

from examcell.services import upload_service


def test_open_entry_starts_processing(db, ledger):
    upload_id = ledger.open_entry("results.csv", "semester-results")

    upload = db.get_upload_by_id(upload_id)
    assert upload.status == "Processing"
    assert upload.records == 0
    assert len(upload_id) == 36

def test_entry_moves_to_terminal_status_once(db, ledger):
    upload_id = ledger.open_entry("results.csv", "semester-results")
    ledger.mark_completed(upload_id, 12)

    db.session.expire_all()
    upload = db.get_upload_by_id(upload_id)
    assert upload.status == "Completed"
    assert upload.records == 12

    with pytest.raises(ValueError):
        ledger.mark_failed(upload_id, 0)

def test_failed_entry_survives_request_rollback(db, ledger, seed_subjects):
    """Ledger writes commit on their own session, so a rollback on the request session leaves them alone."""
    upload_id = ledger.open_entry("results.csv", "semester-results")
    db.add_results_batch([{
        "student_id": "S1", "semester": "Fall 2024", "subject_code": "CS101",
        "subject_name": "Intro to Programming", "marks": 80.0, "grade": "A", "status": "Pass",
    }])
    db.rollback()
    ledger.mark_failed(upload_id, 1)

    db.session.expire_all()
    assert db.get_upload_by_id(upload_id).status == "Failed"
    assert db.get_all_results() == []

def test_unknown_entry_cannot_be_closed(ledger):
    with pytest.raises(LookupError):
        ledger.mark_completed("does-not-exist", 1)

def test_recent_uploads_newest_first_and_limited(db, ledger):
    ids = [ledger.open_entry(f"file{i}.csv", "semester-results") for i in range(4)]

    recent = upload_service.get_recent_uploads(limit=2, db=db)

    assert [u.id for u in recent] == [ids[3], ids[2]]

@pytest.mark.parametrize("limit", [0, -3])
def test_non_positive_limit_falls_back_to_default(db, ledger, limit):
    for i in range(7):
        ledger.open_entry(f"file{i}.csv", "semester-results")
    assert len(upload_service.get_recent_uploads(limit=limit, db=db)) == upload_service.DEFAULT_RECENT_UPLOADS
