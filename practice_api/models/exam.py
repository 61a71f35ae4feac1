"""
Exam and Subject models - top of the content hierarchy
"""
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from practice_api.database import Base
import uuid


class Exam(Base):
    """
    Exams table - e.g. a national entrance exam that groups subjects
    """
    __tablename__ = "exams"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(191), unique=True, nullable=False)
    description = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    subjects = relationship("Subject", back_populates="exam")

    def __repr__(self):
        return f"<Exam(id={self.id}, name={self.name})>"


class Subject(Base):
    """
    Subjects table - belongs to an exam, owns topics
    """
    __tablename__ = "subjects"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    exam_id = Column(Uuid(as_uuid=True), ForeignKey("exams.id"), nullable=False, index=True)
    name = Column(String(191), nullable=False)
    description = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    exam = relationship("Exam", back_populates="subjects")
    topics = relationship("Topic", back_populates="subject")

    def __repr__(self):
        return f"<Subject(id={self.id}, name={self.name})>"
