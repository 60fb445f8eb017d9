# /examcell/services/database_helpers/upload_repository_sql.py

from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from examcell.db.models.upload_models import Upload


class UploadRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_upload(self, record: Dict) -> Upload:
        new_upload = Upload(**record)
        self.db.add(new_upload)
        self.db.commit()
        self.db.refresh(new_upload)
        return new_upload

    def get_upload_by_id(self, upload_id: str) -> Optional[Upload]:
        return self.db.get(Upload, upload_id)

    def update_upload(self, upload_id: str, status: str, records: int) -> Optional[Upload]:
        upload = self.get_upload_by_id(upload_id)
        if upload:
            upload.status = status
            upload.records = records
            self.db.commit()
            self.db.refresh(upload)
        return upload

    def get_recent_uploads(self, limit: int) -> List[Upload]:
        return (
            self.db.query(Upload)
            .order_by(Upload.created_at.desc())
            .limit(limit)
            .all()
        )
