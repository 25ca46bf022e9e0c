import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base


def _now():
    return datetime.now(timezone.utc)


class Question(Base):
    __tablename__ = "coding_questions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    language = Column(Text, nullable=False)
    topic = Column(Text, nullable=False)
    difficulty = Column(String(20), nullable=False)  # Easy/Medium/Hard
    status = Column(String(20), nullable=False, default="To Do")  # To Do/In Progress/Completed
    solution_code = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    last_solved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    solutions = relationship("Solution", back_populates="question", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("difficulty IN ('Easy', 'Medium', 'Hard')", name="ck_question_difficulty"),
        CheckConstraint("status IN ('To Do', 'In Progress', 'Completed')", name="ck_question_status"),
    )
