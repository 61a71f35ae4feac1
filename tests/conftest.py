"""
Shared fixtures: in-memory database, API client, content hierarchy, tokens
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["CACHE_ENABLED"] = "false"

import uuid  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from practice_api import models  # noqa: E402
from practice_api.auth import UserRole, issue_token  # noqa: E402
from practice_api.database import Base, get_db  # noqa: E402
from practice_api.main import app  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """API client sharing the test session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def student_id():
    return uuid.uuid4()


@pytest.fixture
def other_student_id():
    return uuid.uuid4()


@pytest.fixture
def tutor_id():
    return uuid.uuid4()


def headers_for(user_id, role):
    return {"Authorization": f"Bearer {issue_token(user_id, role)}"}


@pytest.fixture
def make_headers():
    return headers_for


@pytest.fixture
def auth_headers(student_id):
    return headers_for(student_id, UserRole.STUDENT)


@pytest.fixture
def tutor_headers(tutor_id):
    return headers_for(tutor_id, UserRole.TUTOR)


@pytest.fixture
def content(db_session):
    """Exam > subject > topic > two subtopics, plus a second topic"""
    exam = models.Exam(name="Grade 5 Entrance")
    subject = models.Subject(exam=exam, name="Mathematics")
    algebra = models.Topic(subject=subject, name="Algebra")
    geometry = models.Topic(subject=subject, name="Geometry")
    equations = models.Subtopic(topic=algebra, name="Linear equations")
    expressions = models.Subtopic(topic=algebra, name="Expressions")
    angles = models.Subtopic(topic=geometry, name="Angles")

    db_session.add_all([exam, subject, algebra, geometry, equations, expressions, angles])
    db_session.commit()

    return SimpleNamespace(
        exam=exam,
        subject=subject,
        algebra=algebra,
        geometry=geometry,
        equations=equations,
        expressions=expressions,
        angles=angles,
    )


@pytest.fixture
def make_question(db_session, content):
    """Factory adding a question to the bank"""

    def factory(subtopic=None, difficulty=1, correct_answer="B", valid_from=None, valid_to=None):
        subtopic = subtopic or content.equations
        question = models.Question(
            question_text=f"Question {uuid.uuid4().hex[:6]}",
            options=["A", "B", "C", "D"],
            correct_answer=correct_answer,
            subject_id=content.subject.id,
            topic_id=subtopic.topic_id,
            subtopic_id=subtopic.id,
            difficulty_level=difficulty,
            valid_from=valid_from,
            valid_to=valid_to,
        )
        db_session.add(question)
        db_session.commit()
        return question

    return factory
