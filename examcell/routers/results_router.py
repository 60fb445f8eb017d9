# /examcell/routers/results_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..models import result_model
from ..services import database_service, result_service

router = APIRouter()

# --- RESULT COLLECTION ENDPOINTS (/api/results) ---

@router.get("", response_model=List[result_model.Result], summary="Get All Results")
def get_all_results(db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return result_service.get_all_results(db=db)

@router.post("", response_model=result_model.Result, status_code=status.HTTP_201_CREATED, summary="Record a Single Result")
def create_result(result_create: result_model.ResultCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return result_service.create_result(result_data=result_create, db=db)

@router.get("/student/{student_id}", response_model=List[result_model.Result], summary="Get a Student's Results")
def get_results_by_student(student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return result_service.get_results_by_student_id(student_id=student_id, db=db)

@router.get("/semester/{semester}", response_model=List[result_model.Result], summary="Get a Semester's Results")
def get_results_by_semester(semester: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return result_service.get_results_by_semester(semester=semester, db=db)

# --- INDIVIDUAL RESULT ENDPOINTS (/api/results/{result_id}) ---

@router.put("/{result_id}", response_model=result_model.Result, summary="Update a Result's Marks and Grade")
def update_result(result_id: int, result_update: result_model.ResultUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return result_service.update_result(result_id=result_id, result_update=result_update, db=db)

@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Result")
def delete_result(result_id: int, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    result_service.delete_result(result_id=result_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
