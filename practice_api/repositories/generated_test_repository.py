"""
Persistence for generated test snapshots
"""
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from practice_api.models import GeneratedTest, GeneratedTestQuestion
from practice_api.schemas.practice_test import GeneratedTestSnapshot
from practice_api.utils.cache import CacheService

logger = logging.getLogger(__name__)


class GeneratedTestRepository:
    """
    Generated tests are written exactly once and read many times, so
    reads go through the snapshot cache when one is configured.
    """

    def __init__(self, db: Session, cache: Optional[CacheService] = None):
        self.db = db
        self.cache = cache

    def create(
        self, configuration_id: UUID, user_id: UUID, question_ids: List[UUID]
    ) -> GeneratedTestSnapshot:
        """
        Write the test and all its question slots in one transaction

        Sequence numbers follow the order of question_ids, starting at 1.
        """
        test = GeneratedTest(configuration_id=configuration_id, user_id=user_id)
        test.questions = [
            GeneratedTestQuestion(question_id=question_id, sequence_number=index)
            for index, question_id in enumerate(question_ids, start=1)
        ]

        try:
            self.db.add(test)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to persist generated test for configuration {configuration_id}")
            raise
        self.db.refresh(test)

        snapshot = GeneratedTestSnapshot.from_model(test)
        self._remember(snapshot)
        return snapshot

    def get(self, test_id: UUID) -> Optional[GeneratedTestSnapshot]:
        if self.cache is not None:
            cached = self.cache.get(CacheService.snapshot_key(test_id))
            if cached:
                return GeneratedTestSnapshot(**cached)

        test = (
            self.db.query(GeneratedTest)
            .options(selectinload(GeneratedTest.questions))
            .filter(GeneratedTest.id == test_id)
            .first()
        )
        if test is None:
            return None

        snapshot = GeneratedTestSnapshot.from_model(test)
        self._remember(snapshot)
        return snapshot

    def list_for_user(self, user_id: UUID) -> List[GeneratedTestSnapshot]:
        tests = (
            self.db.query(GeneratedTest)
            .options(selectinload(GeneratedTest.questions))
            .filter(GeneratedTest.user_id == user_id)
            .order_by(desc(GeneratedTest.created_at))
            .all()
        )
        return [GeneratedTestSnapshot.from_model(test) for test in tests]

    def _remember(self, snapshot: GeneratedTestSnapshot) -> None:
        if self.cache is not None:
            self.cache.set(
                CacheService.snapshot_key(snapshot.id),
                snapshot.model_dump(mode="json"),
            )
