"""
Persistence for scored attempts
"""
from typing import List
from uuid import UUID
import logging

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from practice_api.models import TestAttempt

logger = logging.getLogger(__name__)


class AttemptRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, **fields) -> TestAttempt:
        attempt = TestAttempt(**fields)
        try:
            self.db.add(attempt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(attempt)
        return attempt

    def list_for_test(self, test_id: UUID) -> List[TestAttempt]:
        return (
            self.db.query(TestAttempt)
            .filter(TestAttempt.generated_test_id == test_id)
            .order_by(desc(TestAttempt.completed_at))
            .all()
        )
