# /examcell/db/models/upload_models.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Upload(Base):
    """
    SQLAlchemy model for one entry of the upload ledger: an audit record of a
    single CSV ingestion attempt and its outcome.

    Timestamps are stamped by Python rather than the database so that
    entries created within the same second still sort newest-first.
    """
    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    # The original filename of the uploaded file.
    name = Column(String, nullable=False)
    # Free-form label supplied by the client, e.g. "semester-results".
    type = Column(String, nullable=False)
    records = Column(Integer, nullable=False, default=0)
    # "Processing", "Completed" or "Failed".
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
