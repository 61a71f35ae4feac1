"""
Question model - the shared question bank
"""
from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, ForeignKey, Uuid, func
from practice_api.database import Base, JSONType
import uuid


class Question(Base):
    """
    Questions table - read-only from the generator's and scorer's side
    """
    __tablename__ = "questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    question_text = Column(Text, nullable=False)
    options = Column(JSONType, nullable=False)  # ["12", "14", "16", "18"]
    correct_answer = Column(String(191), nullable=False)
    subject_id = Column(Uuid(as_uuid=True), ForeignKey("subjects.id"), nullable=False)
    topic_id = Column(Uuid(as_uuid=True), ForeignKey("topics.id"), nullable=False)
    subtopic_id = Column(Uuid(as_uuid=True), ForeignKey("subtopics.id"), nullable=False, index=True)
    difficulty_level = Column(Integer, nullable=False, index=True)  # 0..5
    valid_from = Column(TIMESTAMP)
    valid_to = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<Question(id={self.id}, subtopic_id={self.subtopic_id}, difficulty={self.difficulty_level})>"
