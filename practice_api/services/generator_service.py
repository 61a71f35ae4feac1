"""
Practice test generation from stored configurations
"""
import logging
import random
from datetime import datetime
from typing import List, Optional, Set
from uuid import UUID

from practice_api.exceptions import InsufficientPoolError, NotFoundError
from practice_api.models import Question, TestConfiguration
from practice_api.repositories import (
    ConfigurationRepository,
    GeneratedTestRepository,
    QuestionRepository,
)
from practice_api.schemas.practice_test import GeneratedTestSnapshot
from practice_api.utils.clock import utcnow

logger = logging.getLogger(__name__)


class TestGenerator:
    """
    Resolves a configuration into a frozen, ordered question selection

    Steps:
    - Expand configured topics into their subtopics
    - Pool = questions in those subtopics at the configured difficulty
      levels, valid right now
    - Refuse if the pool is smaller than the requested count
    - Sample uniformly without replacement; selection order is the
      order the learner sees
    - Persist test and slots in one transaction
    """

    __test__ = False  # not a pytest class

    def __init__(
        self,
        configurations: ConfigurationRepository,
        questions: QuestionRepository,
        tests: GeneratedTestRepository,
        rng: Optional[random.Random] = None,
    ):
        self.configurations = configurations
        self.questions = questions
        self.tests = tests
        self.rng = rng or random.Random()

    def generate(self, config_id: UUID, requesting_user_id: UUID) -> GeneratedTestSnapshot:
        configuration = self.configurations.get(config_id)
        if configuration is None:
            raise NotFoundError("Configuration", config_id)

        now = utcnow()
        pool = self.resolve_pool(configuration, now)
        requested = configuration.question_count

        if len(pool) < requested:
            logger.info(
                f"Insufficient pool for configuration {config_id}: "
                f"{len(pool)} available, {requested} requested"
            )
            raise InsufficientPoolError(available=len(pool), requested=requested)

        # random.Random.sample: uniform, no replacement, selection order kept
        selected = self.rng.sample(pool, requested)

        snapshot = self.tests.create(
            configuration_id=configuration.id,
            user_id=requesting_user_id,
            question_ids=[question.id for question in selected],
        )
        logger.info(
            f"Generated test {snapshot.id} from configuration {config_id} "
            f"({requested} of {len(pool)} eligible questions)"
        )
        return snapshot

    def resolve_pool(self, configuration: TestConfiguration, as_of: datetime) -> List[Question]:
        """All questions currently matching the configuration's filters"""
        subtopic_ids: Set[UUID] = {UUID(str(value)) for value in configuration.subtopic_ids}

        topic_ids = [UUID(str(value)) for value in configuration.topic_ids]
        subtopic_ids.update(self.questions.subtopic_ids_for_topics(topic_ids, as_of=as_of))

        return self.questions.find_by_filters(
            subtopic_ids=sorted(subtopic_ids),
            difficulty_levels=configuration.difficulty_levels,
            as_of=as_of,
        )
