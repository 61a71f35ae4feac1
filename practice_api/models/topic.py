"""
Topic and Subtopic models - versioned with a validity window
"""
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from practice_api.database import Base
import uuid


class Topic(Base):
    """
    Topics table - belongs to a subject
    """
    __tablename__ = "topics"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subject_id = Column(Uuid(as_uuid=True), ForeignKey("subjects.id"), nullable=False, index=True)
    name = Column(String(191), nullable=False)
    description = Column(Text)
    valid_from = Column(TIMESTAMP)
    valid_to = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, server_default=func.now())

    subject = relationship("Subject", back_populates="topics")
    subtopics = relationship("Subtopic", back_populates="topic")

    def __repr__(self):
        return f"<Topic(id={self.id}, name={self.name})>"


class Subtopic(Base):
    """
    Subtopics table - the level questions are attached to
    """
    __tablename__ = "subtopics"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    topic_id = Column(Uuid(as_uuid=True), ForeignKey("topics.id"), nullable=False, index=True)
    name = Column(String(191), nullable=False)
    description = Column(Text)
    valid_from = Column(TIMESTAMP)
    valid_to = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, server_default=func.now())

    topic = relationship("Topic", back_populates="subtopics")

    def __repr__(self):
        return f"<Subtopic(id={self.id}, name={self.name})>"
