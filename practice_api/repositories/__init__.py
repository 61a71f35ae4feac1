"""
Session-bound repositories injected into the practice test services
"""
from practice_api.repositories.question_repository import QuestionRepository
from practice_api.repositories.configuration_repository import ConfigurationRepository
from practice_api.repositories.generated_test_repository import GeneratedTestRepository
from practice_api.repositories.attempt_repository import AttemptRepository

__all__ = [
    "QuestionRepository",
    "ConfigurationRepository",
    "GeneratedTestRepository",
    "AttemptRepository",
]
