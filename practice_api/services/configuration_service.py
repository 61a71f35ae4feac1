"""
Configuration store for practice test templates
"""
import logging
from typing import Optional
from uuid import UUID

from practice_api.exceptions import ConfigurationValidationError, NotFoundError
from practice_api.models import TestConfiguration, TestType
from practice_api.repositories import ConfigurationRepository
from practice_api.schemas.practice_test import ConfigurationFilters, ConfigurationRevision

logger = logging.getLogger(__name__)


class ConfigurationService:
    """
    Creates and looks up test configurations

    Configurations are append-only: a revision is stored as a new row that
    points at the version it replaces, so generated tests always refer to
    the exact parameters they were built from.
    """

    MIN_QUESTIONS = 1
    MAX_QUESTIONS = 100
    MIN_TIME_LIMIT = 5  # minutes
    MAX_TIME_LIMIT = 180
    MIN_DIFFICULTY = 0
    MAX_DIFFICULTY = 5
    MAX_NAME_LENGTH = 100

    def __init__(self, configurations: ConfigurationRepository):
        self.configurations = configurations

    def create(
        self,
        owner_id: UUID,
        filters: ConfigurationFilters,
        question_count: int,
        time_limit_minutes: int,
        test_type: TestType = TestType.MIXED,
        name: str = "Practice test",
        created_by_id: Optional[UUID] = None,
        previous_version_id: Optional[UUID] = None,
    ) -> TestConfiguration:
        self._validate(name, filters, question_count, time_limit_minutes)

        configuration = self.configurations.create(
            owner_id=owner_id,
            created_by_id=created_by_id or owner_id,
            name=name,
            topic_ids=filters.topic_ids,
            subtopic_ids=filters.subtopic_ids,
            difficulty_levels=sorted(set(filters.difficulty_levels)),
            question_count=question_count,
            time_limit_minutes=time_limit_minutes,
            test_type=TestType(test_type).value,
            previous_version_id=previous_version_id,
        )
        logger.info(
            f"Configuration {configuration.id} for owner {owner_id}: "
            f"{question_count} questions, {time_limit_minutes} min"
        )
        return configuration

    def get(self, config_id: UUID) -> TestConfiguration:
        configuration = self.configurations.get(config_id)
        if configuration is None:
            raise NotFoundError("Configuration", config_id)
        return configuration

    def list_for_owner(self, owner_id: UUID):
        return self.configurations.list_for_owner(owner_id)

    def revise(
        self, config_id: UUID, changes: ConfigurationRevision, acting_user_id: UUID
    ) -> TestConfiguration:
        """Store an edited copy of a configuration; the source is untouched"""
        source = self.get(config_id)
        updates = changes.model_dump(exclude_unset=True, exclude_none=True)

        filters = ConfigurationFilters(
            topic_ids=updates.get("topic_ids", source.topic_ids),
            subtopic_ids=updates.get("subtopic_ids", source.subtopic_ids),
            difficulty_levels=updates.get("difficulty_levels", source.difficulty_levels),
        )

        return self.create(
            owner_id=source.owner_id,
            filters=filters,
            question_count=updates.get("question_count", source.question_count),
            time_limit_minutes=updates.get("time_limit", source.time_limit_minutes),
            test_type=updates.get("test_type", source.test_type),
            name=updates.get("name", source.name),
            created_by_id=acting_user_id,
            previous_version_id=source.id,
        )

    def _validate(
        self,
        name: str,
        filters: ConfigurationFilters,
        question_count: int,
        time_limit_minutes: int,
    ) -> None:
        if not name or len(name) > self.MAX_NAME_LENGTH:
            raise ConfigurationValidationError(
                f"Name must be between 1 and {self.MAX_NAME_LENGTH} characters"
            )

        if not self.MIN_QUESTIONS <= question_count <= self.MAX_QUESTIONS:
            raise ConfigurationValidationError(
                f"Question count must be between {self.MIN_QUESTIONS} and {self.MAX_QUESTIONS}"
            )

        if not self.MIN_TIME_LIMIT <= time_limit_minutes <= self.MAX_TIME_LIMIT:
            raise ConfigurationValidationError(
                f"Time limit must be between {self.MIN_TIME_LIMIT} and {self.MAX_TIME_LIMIT} minutes"
            )

        if not filters.topic_ids and not filters.subtopic_ids:
            raise ConfigurationValidationError("At least one topic or subtopic is required")

        if not filters.difficulty_levels:
            raise ConfigurationValidationError("At least one difficulty level is required")

        out_of_range = [
            level for level in filters.difficulty_levels
            if not self.MIN_DIFFICULTY <= level <= self.MAX_DIFFICULTY
        ]
        if out_of_range:
            raise ConfigurationValidationError(
                f"Difficulty levels must be between {self.MIN_DIFFICULTY} and "
                f"{self.MAX_DIFFICULTY}, got {out_of_range}"
            )
