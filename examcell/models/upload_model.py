# /examcell/models/upload_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from .common import CamelModel


class UploadStatus(str, Enum):
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"


class UploadRecord(CamelModel):
    """One upload-ledger entry as returned by GET /api/uploads."""
    id: str
    name: str
    type: str
    records: int
    status: UploadStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadResponse(CamelModel):
    success: bool
    # None when processing never started or did not finish.
    records_processed: Optional[int] = None
    message: str
