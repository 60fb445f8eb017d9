# /examcell/routers/reports_router.py

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..core.deps import require_admin
from ..services import database_service, report_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/semester/{semester}", response_class=HTMLResponse, summary="Printable HTML Report of a Semester's Results")
def get_semester_report(semester: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return HTMLResponse(content=report_service.generate_semester_report(semester=semester, db=db))
