"""
Question bank tables.

Implements:
- QuestionRecord: question text, CEFR level, type and topic area
- AnswerRecord: answer options owned by a question (cascade delete-orphan)
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType


class Base(DeclarativeBase):
    pass


class QuestionRecord(Base):
    """Persisted bank question."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[QuestionType] = mapped_column(
        SAEnum(QuestionType, name="question_type"),
        nullable=False,
        default=QuestionType.MULTIPLE_CHOICE,
    )
    cefr_level: Mapped[ProficiencyLevel] = mapped_column(
        SAEnum(ProficiencyLevel, name="cefr_level"), nullable=False, index=True
    )
    topic_area: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    answers: Mapped[List["AnswerRecord"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="AnswerRecord.id",
    )

    def __repr__(self) -> str:
        return f"<QuestionRecord(id={self.id}, level={self.cefr_level}, type={self.question_type})>"


class AnswerRecord(Base):
    """Answer option belonging to exactly one question."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    question: Mapped[QuestionRecord] = relationship(back_populates="answers")

    def __repr__(self) -> str:
        return f"<AnswerRecord(id={self.id}, question_id={self.question_id}, correct={self.is_correct})>"
