# /examcell/services/upload_service.py

"""
Facade for bulk result uploads and the upload ledger.

Routers talk to this module only. It checks the request-level inputs, hands
the file stream to the ingestion engine in `upload_helpers` and turns the
engine's outcome into the API response model.
"""

import logging
from typing import List, Optional

from fastapi import UploadFile

from ..core.exceptions import BadInputError
from ..db.models.upload_models import Upload
from ..models.upload_model import UploadResponse
from .database_service import DatabaseService
from .upload_helpers import csv_ingestion
from .upload_helpers.upload_ledger import UploadLedger

logger = logging.getLogger(__name__)

DEFAULT_RECENT_UPLOADS = 5
SUCCESS_MESSAGE = "CSV processed successfully."


def upload_results_csv(
    file: UploadFile,
    semester: str,
    upload_type: str,
    db: DatabaseService,
    ledger: Optional[UploadLedger] = None,
) -> UploadResponse:
    semester = (semester or "").strip()
    upload_type = (upload_type or "").strip()
    if not semester:
        raise BadInputError("Semester is required.")
    if not upload_type:
        raise BadInputError("Upload type is required.")

    outcome = csv_ingestion.ingest_results_csv(
        stream=file.file,
        filename=file.filename,
        content_type=file.content_type,
        semester=semester,
        upload_type=upload_type,
        db=db,
        ledger=ledger,
    )
    if outcome.gpa_failures:
        logger.warning(
            "Upload %s completed but GPA recalculation failed for %d student(s): %s",
            outcome.upload_id, len(outcome.gpa_failures), ", ".join(outcome.gpa_failures),
        )
    return UploadResponse(success=True, records_processed=outcome.records_processed, message=SUCCESS_MESSAGE)


def get_recent_uploads(limit: int, db: DatabaseService) -> List[Upload]:
    """Newest-first ledger entries. A non-positive limit falls back to the default."""
    if limit is None or limit <= 0:
        limit = DEFAULT_RECENT_UPLOADS
    return db.get_recent_uploads(limit)


def get_upload_ledger() -> UploadLedger:
    """FastAPI dependency for the ledger used by upload endpoints."""
    return UploadLedger()
