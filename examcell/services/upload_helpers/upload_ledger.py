# /examcell/services/upload_helpers/upload_ledger.py

"""
The upload ledger: an append-mostly audit trail of CSV ingestion attempts.

Every ledger write opens its own short-lived session and commits at once.
That keeps the ledger outside the unit of work that holds an upload's result
rows, so a `Failed` entry survives the rollback of those rows, and a
`Processing` entry is visible to readers while ingestion is still running.
"""

import logging
from typing import Callable

from sqlalchemy.orm import Session

from examcell.db.database import SessionLocal
from examcell.models.upload_model import UploadStatus
from ..database_helpers.upload_repository_sql import UploadRepositorySQL

logger = logging.getLogger(__name__)


class UploadLedger:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def open_entry(self, name: str, upload_type: str) -> str:
        """Records a new attempt with status Processing and zero records; returns its id."""
        with self._session_factory() as session:
            upload = UploadRepositorySQL(session).add_upload({
                "name": name,
                "type": upload_type,
                "records": 0,
                "status": UploadStatus.PROCESSING.value,
            })
            logger.debug("Opened upload ledger entry %s for '%s'", upload.id, name)
            return upload.id

    def mark_completed(self, upload_id: str, records: int) -> None:
        self._close_entry(upload_id, UploadStatus.COMPLETED, records)

    def mark_failed(self, upload_id: str, records: int) -> None:
        self._close_entry(upload_id, UploadStatus.FAILED, records)

    def _close_entry(self, upload_id: str, status: UploadStatus, records: int) -> None:
        """Moves an entry from Processing to its terminal status, exactly once."""
        with self._session_factory() as session:
            repo = UploadRepositorySQL(session)
            upload = repo.get_upload_by_id(upload_id)
            if upload is None:
                raise LookupError(f"Upload ledger entry {upload_id} does not exist.")
            if upload.status != UploadStatus.PROCESSING.value:
                raise ValueError(
                    f"Upload ledger entry {upload_id} is already {upload.status}; cannot move it to {status.value}."
                )
            repo.update_upload(upload_id, status=status.value, records=records)
            logger.debug("Upload ledger entry %s -> %s (%d records)", upload_id, status.value, records)
