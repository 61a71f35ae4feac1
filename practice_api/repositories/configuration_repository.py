"""
Persistence for test configurations
"""
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from practice_api.models import TestConfiguration

logger = logging.getLogger(__name__)


class ConfigurationRepository:

    def __init__(self, db: Session):
        self.db = db

    def get(self, config_id: UUID) -> Optional[TestConfiguration]:
        return (
            self.db.query(TestConfiguration)
            .filter(TestConfiguration.id == config_id)
            .first()
        )

    def list_for_owner(self, owner_id: UUID) -> List[TestConfiguration]:
        return (
            self.db.query(TestConfiguration)
            .filter(TestConfiguration.owner_id == owner_id)
            .order_by(desc(TestConfiguration.created_at))
            .all()
        )

    def create(self, **fields) -> TestConfiguration:
        """Insert a configuration; ids in JSON columns are stored as strings"""
        for key in ("topic_ids", "subtopic_ids"):
            fields[key] = [str(value) for value in fields.get(key, [])]

        configuration = TestConfiguration(**fields)
        try:
            self.db.add(configuration)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(configuration)

        logger.info(f"Configuration created: {configuration.id}")
        return configuration
