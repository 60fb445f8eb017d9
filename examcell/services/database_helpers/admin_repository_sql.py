# /examcell/services/database_helpers/admin_repository_sql.py

from typing import Dict, Optional
from sqlalchemy.orm import Session

from examcell.db.models.user_models import Admin


class AdminRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.email == email).first()

    def add_admin(self, record: Dict) -> Admin:
        """Creates a new Admin. `record['password']` must already be hashed."""
        new_admin = Admin(**record)
        self.db.add(new_admin)
        self.db.commit()
        self.db.refresh(new_admin)
        return new_admin
