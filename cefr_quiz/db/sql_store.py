"""
SQLAlchemy-backed IQuestionStore.

Rows are mapped to the core Question/Answer dataclasses on the way out so
callers never hold a session-bound ORM object.
"""
from __future__ import annotations

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import Answer, Question
from cefr_quiz.db.database import session_scope
from cefr_quiz.db.models import AnswerRecord, QuestionRecord


def _to_answer(record: AnswerRecord) -> Answer:
    return Answer(
        id=record.id,
        text=record.answer_text,
        is_correct=record.is_correct,
        question_id=record.question_id,
    )


def _to_question(record: QuestionRecord) -> Question:
    return Question(
        id=record.id,
        text=record.question_text,
        level=record.cefr_level,
        question_type=record.question_type,
        topic=record.topic_area,
        answers=[_to_answer(a) for a in record.answers],
    )


class SqlQuestionStore:
    """Question store over the ``questions`` / ``answers`` tables."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory

    def _questions(self, session: Session, *conditions) -> list[Question]:
        query = (
            select(QuestionRecord)
            .options(selectinload(QuestionRecord.answers))
            .where(*conditions)
            .order_by(QuestionRecord.id)
        )
        return [_to_question(r) for r in session.execute(query).scalars().all()]

    def find_by_id(self, question_id: int) -> Question | None:
        with session_scope(self.session_factory) as session:
            rows = self._questions(session, QuestionRecord.id == question_id)
            return rows[0] if rows else None

    def find_by_level(self, level: ProficiencyLevel) -> list[Question]:
        with session_scope(self.session_factory) as session:
            return self._questions(session, QuestionRecord.cefr_level == level)

    def find_by_level_and_type(
        self, level: ProficiencyLevel, question_type: QuestionType
    ) -> list[Question]:
        with session_scope(self.session_factory) as session:
            return self._questions(
                session,
                QuestionRecord.cefr_level == level,
                QuestionRecord.question_type == question_type,
            )

    def find_answer(self, answer_id: int, question_id: int) -> Answer | None:
        with session_scope(self.session_factory) as session:
            record = session.execute(
                select(AnswerRecord).where(
                    AnswerRecord.id == answer_id,
                    AnswerRecord.question_id == question_id,
                )
            ).scalar_one_or_none()
            return _to_answer(record) if record else None

    def find_answers(self, question_id: int) -> list[Answer]:
        with session_scope(self.session_factory) as session:
            records = session.execute(
                select(AnswerRecord)
                .where(AnswerRecord.question_id == question_id)
                .order_by(AnswerRecord.id)
            ).scalars().all()
            return [_to_answer(r) for r in records]

    def count_by_level(self, level: ProficiencyLevel) -> int:
        with session_scope(self.session_factory) as session:
            return session.execute(
                select(func.count(QuestionRecord.id)).where(QuestionRecord.cefr_level == level)
            ).scalar_one()

    def save(self, question: Question) -> Question:
        with session_scope(self.session_factory) as session:
            record = session.get(QuestionRecord, question.id) if question.id is not None else None
            if record is None:
                record = QuestionRecord()
                session.add(record)

            record.question_text = question.text
            record.cefr_level = question.level
            record.question_type = question.question_type
            record.topic_area = question.topic

            existing = {a.id: a for a in record.answers}
            kept: list[AnswerRecord] = []
            for answer in question.answers:
                answer_record = existing.get(answer.id) if answer.id is not None else None
                if answer_record is None:
                    answer_record = AnswerRecord()
                answer_record.answer_text = answer.text
                answer_record.is_correct = answer.is_correct
                kept.append(answer_record)
            record.answers = kept

            session.flush()
            question.id = record.id
            for answer, answer_record in zip(question.answers, kept):
                answer.id = answer_record.id
                answer.question_id = record.id

        logger.debug(f"Saved question {question.id} ({len(question.answers)} answers)")
        return question

    def delete(self, question_id: int) -> None:
        with session_scope(self.session_factory) as session:
            record = session.get(QuestionRecord, question_id)
            if record is not None:
                session.delete(record)

    def exists(self, question_id: int) -> bool:
        with session_scope(self.session_factory) as session:
            return session.get(QuestionRecord, question_id) is not None
