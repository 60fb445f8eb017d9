# /examcell/db/models/user_models.py

"""
SQLAlchemy model for administrator accounts. Students are the other kind of
principal; their credentials live on the `Student` row itself.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class Admin(Base):
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Always a bcrypt hash, never the plain password.
    password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
