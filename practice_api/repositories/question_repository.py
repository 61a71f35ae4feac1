"""
Read access to the question bank
"""
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from practice_api.models import Question, Subtopic, Topic


def _valid_at(model, moment: datetime):
    """SQL filter for rows whose validity window contains moment"""
    return (
        or_(model.valid_from.is_(None), model.valid_from <= moment),
        or_(model.valid_to.is_(None), model.valid_to > moment),
    )


class QuestionRepository:
    """Questions are owned by content admins; nothing here writes"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_filters(
        self,
        subtopic_ids: Iterable[UUID],
        difficulty_levels: Iterable[int],
        as_of: Optional[datetime] = None,
    ) -> List[Question]:
        subtopic_ids = list(subtopic_ids)
        difficulty_levels = list(difficulty_levels)
        if not subtopic_ids or not difficulty_levels:
            return []

        query = self.db.query(Question).filter(
            Question.subtopic_id.in_(subtopic_ids),
            Question.difficulty_level.in_(difficulty_levels),
        )
        if as_of is not None:
            # the question, its subtopic and its topic must all be current
            query = (
                query.join(Subtopic, Question.subtopic_id == Subtopic.id)
                .join(Topic, Subtopic.topic_id == Topic.id)
                .filter(
                    *_valid_at(Question, as_of),
                    *_valid_at(Subtopic, as_of),
                    *_valid_at(Topic, as_of),
                )
            )

        # Stable order so a seeded sampler is reproducible
        return query.order_by(Question.id).all()

    def find_by_ids(self, ids: Iterable[UUID]) -> List[Question]:
        """Order is not guaranteed; missing ids are simply absent"""
        ids = list(ids)
        if not ids:
            return []
        return self.db.query(Question).filter(Question.id.in_(ids)).all()

    def subtopic_ids_for_topics(
        self, topic_ids: Iterable[UUID], as_of: Optional[datetime] = None
    ) -> List[UUID]:
        topic_ids = list(topic_ids)
        if not topic_ids:
            return []

        query = self.db.query(Subtopic.id).filter(Subtopic.topic_id.in_(topic_ids))
        if as_of is not None:
            query = query.join(Topic, Subtopic.topic_id == Topic.id).filter(
                *_valid_at(Subtopic, as_of), *_valid_at(Topic, as_of)
            )
        return [row.id for row in query.all()]
