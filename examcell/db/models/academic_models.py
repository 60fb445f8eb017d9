# /examcell/db/models/academic_models.py

"""
This module defines the SQLAlchemy ORM models for the core academic records:
`Student`, `Subject` and `Result`.

`Result.student_id` and `Result.subject_code` are plain indexed columns rather
than foreign keys. Deleting a student or a subject leaves its results in
place, and `Result.subject_name` keeps a snapshot of the subject's name at
the time the row was written.
"""

from sqlalchemy import Column, String, Integer, Float, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class Student(Base):
    """
    SQLAlchemy model representing a single student.

    `gpa` is derived from the student's results by the GPA recalculator and
    is never written directly by a client-facing path.
    """
    id = Column(String(50), primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    gpa = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="Active")
    profile_image = Column(String, nullable=True)
    # bcrypt hash; NULL means this student cannot log in.
    password = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Subject(Base):
    """SQLAlchemy model for a subject, identified by its code."""
    code = Column(String(20), primary_key=True, index=True)
    name = Column(String, nullable=False)
    department = Column(String, nullable=False)
    # Modelled but not used by the GPA formula.
    credits = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Result(Base):
    """
    SQLAlchemy model for one student's mark in one subject for one semester.
    """
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    student_id = Column(String(50), index=True, nullable=False)
    semester = Column(String, index=True, nullable=False)
    subject_code = Column(String(20), nullable=False)
    subject_name = Column(String, nullable=False)
    marks = Column(Float, nullable=False)
    grade = Column(String(5), nullable=False)
    status = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
