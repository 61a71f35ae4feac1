"""
Dependency wiring: one set of repositories and services per request
"""
import random

from fastapi import Depends
from sqlalchemy.orm import Session

from practice_api.config import settings
from practice_api.database import get_db
from practice_api.repositories import (
    AttemptRepository,
    ConfigurationRepository,
    GeneratedTestRepository,
    QuestionRepository,
)
from practice_api.services.configuration_service import ConfigurationService
from practice_api.services.generator_service import TestGenerator
from practice_api.services.scoring_service import AttemptScorer
from practice_api.utils.cache import cache_service


def get_rng() -> random.Random:
    """Fresh generator per request; seeded when GENERATOR_SEED is set"""
    return random.Random(settings.GENERATOR_SEED)


def get_question_repository(db: Session = Depends(get_db)) -> QuestionRepository:
    return QuestionRepository(db)


def get_configuration_repository(db: Session = Depends(get_db)) -> ConfigurationRepository:
    return ConfigurationRepository(db)


def get_generated_test_repository(db: Session = Depends(get_db)) -> GeneratedTestRepository:
    return GeneratedTestRepository(db, cache=cache_service)


def get_attempt_repository(db: Session = Depends(get_db)) -> AttemptRepository:
    return AttemptRepository(db)


def get_configuration_service(
    configurations: ConfigurationRepository = Depends(get_configuration_repository),
) -> ConfigurationService:
    return ConfigurationService(configurations)


def get_test_generator(
    configurations: ConfigurationRepository = Depends(get_configuration_repository),
    questions: QuestionRepository = Depends(get_question_repository),
    tests: GeneratedTestRepository = Depends(get_generated_test_repository),
    rng: random.Random = Depends(get_rng),
) -> TestGenerator:
    return TestGenerator(configurations, questions, tests, rng=rng)


def get_attempt_scorer(
    tests: GeneratedTestRepository = Depends(get_generated_test_repository),
    questions: QuestionRepository = Depends(get_question_repository),
    attempts: AttemptRepository = Depends(get_attempt_repository),
) -> AttemptScorer:
    return AttemptScorer(tests, questions, attempts)
