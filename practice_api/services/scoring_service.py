"""
Scoring of practice test submissions
"""
import logging
from typing import Dict, List, Tuple
from uuid import UUID

from practice_api.exceptions import NotFoundError
from practice_api.models import TestAttempt
from practice_api.repositories import AttemptRepository, GeneratedTestRepository, QuestionRepository
from practice_api.schemas.practice_test import GeneratedTestSnapshot, QuestionResult
from practice_api.utils.clock import utcnow

logger = logging.getLogger(__name__)


def _canonical_key(key: str) -> str:
    """Answer keys are question ids; any UUID spelling maps to the lowercase form"""
    try:
        return str(UUID(key))
    except ValueError:
        return key


class AttemptScorer:
    """
    Scores a submission against the frozen snapshot of a generated test

    Strategy:
    - Exact, case-sensitive match against the question's correct answer
    - One point per match, no partial credit, no penalty
    - Unanswered or deleted questions count as misses
    - score = correct / total, between 0 and 1

    Every submission is stored as its own attempt; a test can be
    attempted any number of times.
    """

    def __init__(
        self,
        tests: GeneratedTestRepository,
        questions: QuestionRepository,
        attempts: AttemptRepository,
    ):
        self.tests = tests
        self.questions = questions
        self.attempts = attempts

    def score(
        self,
        test_id: UUID,
        user_id: UUID,
        answers: Dict[str, str],
        time_spent_seconds: int,
    ) -> Tuple[TestAttempt, List[QuestionResult]]:
        snapshot = self.tests.get(test_id)
        if snapshot is None:
            raise NotFoundError("Test", test_id)

        breakdown = self.evaluate(snapshot, answers)
        correct_count = sum(1 for item in breakdown if item.is_correct)
        total = len(breakdown)
        score = correct_count / total if total else 0.0

        attempt = self.attempts.create(
            generated_test_id=snapshot.id,
            user_id=user_id,
            answers=dict(answers),
            correct_count=correct_count,
            total_questions=total,
            score=score,
            time_spent_seconds=time_spent_seconds,
            completed_at=utcnow(),
        )

        logger.info(
            f"Attempt {attempt.id} on test {test_id} by {user_id}: "
            f"{correct_count}/{total} ({score:.2f})"
        )
        return attempt, breakdown

    def evaluate(
        self, snapshot: GeneratedTestSnapshot, answers: Dict[str, str]
    ) -> List[QuestionResult]:
        """Per-question results; pure function of snapshot, bank and answers"""
        found = {question.id: question for question in self.questions.find_by_ids(snapshot.question_ids)}
        answers = {_canonical_key(key): value for key, value in answers.items()}

        breakdown = []
        for sequence_number, question_id in enumerate(snapshot.question_ids, start=1):
            question = found.get(question_id)
            submitted = answers.get(str(question_id))

            if question is None:
                logger.warning(f"Question {question_id} in test {snapshot.id} no longer exists")
                breakdown.append(QuestionResult(
                    sequence_number=sequence_number,
                    question_id=question_id,
                    submitted_answer=submitted,
                    is_correct=False,
                    missing=True,
                ))
                continue

            breakdown.append(QuestionResult(
                sequence_number=sequence_number,
                question_id=question_id,
                submitted_answer=submitted,
                correct_answer=question.correct_answer,
                is_correct=submitted is not None and submitted == question.correct_answer,
            ))

        return breakdown

    def list_attempts(self, test_id: UUID) -> List[TestAttempt]:
        if self.tests.get(test_id) is None:
            raise NotFoundError("Test", test_id)
        return self.attempts.list_for_test(test_id)
