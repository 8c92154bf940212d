# backend/app/services/store.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models.survey import Survey
from app.schemas.survey import SurveyIn, SurveyRecord

logger = logging.getLogger(__name__)


class SurveyStore:
    """surveys テーブルへの窓口。セッションは呼び出し側が所有する。"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, payload: SurveyIn) -> int:
        obj = Survey(**payload.model_dump())
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.debug("inserted survey %s (%s)", obj.id, obj.site_name)
        return obj.id

    def list_all(self) -> list[SurveyRecord]:
        # 新しい順
        rows = self.db.query(Survey).order_by(Survey.created_at.desc(), Survey.id.desc()).all()
        return [SurveyRecord.model_validate(r) for r in rows]

    def get(self, survey_id: int) -> Optional[SurveyRecord]:
        s = self.db.get(Survey, survey_id)
        return SurveyRecord.model_validate(s) if s else None

    def delete(self, survey_id: int) -> bool:
        s = self.db.get(Survey, survey_id)
        if not s:
            return False
        self.db.delete(s)
        self.db.commit()
        return True

    def clear(self) -> int:
        n = self.db.query(Survey).delete()
        self.db.commit()
        logger.info("cleared %d surveys", n)
        return n
