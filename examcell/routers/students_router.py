# /examcell/routers/students_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..models import student_model
from ..services import database_service, student_service

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Get All Students")
def get_all_students(db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return student_service.get_all_students(db=db)

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a New Student")
def create_student(student_create: student_model.StudentCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return student_service.create_student(student_data=student_create, db=db)

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return student_service.get_student(student_id=student_id, db=db)

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student(student_id: str, student_update: student_model.StudentUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return student_service.update_student(student_id=student_id, student_update=student_update, db=db)

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    student_service.delete_student(student_id=student_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
