# /examcell/routers/subjects_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..models import subject_model
from ..services import database_service, subject_service

router = APIRouter()


@router.get("", response_model=List[subject_model.Subject], summary="Get All Subjects")
def get_all_subjects(db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return subject_service.get_all_subjects(db=db)

@router.post("", response_model=subject_model.Subject, status_code=status.HTTP_201_CREATED, summary="Create a New Subject")
def create_subject(subject_create: subject_model.SubjectCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return subject_service.create_subject(subject_data=subject_create, db=db)

@router.get("/{code}", response_model=subject_model.Subject, summary="Get a Single Subject")
def get_subject(code: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return subject_service.get_subject(code=code, db=db)

@router.put("/{code}", response_model=subject_model.Subject, summary="Update a Subject")
def update_subject(code: str, subject_update: subject_model.SubjectUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return subject_service.update_subject(code=code, subject_update=subject_update, db=db)

@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Subject")
def delete_subject(code: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    subject_service.delete_subject(code=code, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
