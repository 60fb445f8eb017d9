# /examcell/routers/uploads_router.py

from typing import List

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..models import upload_model
from ..services import database_service, upload_service
from ..services.upload_helpers.upload_ledger import UploadLedger

router = APIRouter()


@router.post("/results/csv", response_model=upload_model.UploadResponse, summary="Bulk Upload Results from a CSV File")
def upload_results_csv(
    file: UploadFile = File(...),
    semester: str = Form(...),
    upload_type: str = Form(..., alias="type"),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
    ledger: UploadLedger = Depends(upload_service.get_upload_ledger),
):
    # Plain `def`: ingestion is blocking and runs in FastAPI's threadpool.
    return upload_service.upload_results_csv(
        file=file,
        semester=semester,
        upload_type=upload_type,
        db=db,
        ledger=ledger,
    )


@router.get("", response_model=List[upload_model.UploadRecord], summary="Get Recent Uploads")
def get_recent_uploads(
    limit: int = Query(upload_service.DEFAULT_RECENT_UPLOADS),
    db: database_service.DatabaseService = Depends(database_service.get_db_service),
):
    return upload_service.get_recent_uploads(limit=limit, db=db)
