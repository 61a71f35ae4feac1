"""
Database models package
"""
from practice_api.models.exam import Exam, Subject
from practice_api.models.topic import Topic, Subtopic
from practice_api.models.question import Question
from practice_api.models.test_configuration import TestConfiguration, TestType
from practice_api.models.generated_test import GeneratedTest, GeneratedTestQuestion
from practice_api.models.test_attempt import TestAttempt

__all__ = [
    "Exam",
    "Subject",
    "Topic",
    "Subtopic",
    "Question",
    "TestConfiguration",
    "TestType",
    "GeneratedTest",
    "GeneratedTestQuestion",
    "TestAttempt",
]
