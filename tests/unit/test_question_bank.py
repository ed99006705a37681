"""
Unit tests for QuestionBank sampling and maintenance.

Uses the in-memory store and a seeded generator so no database is needed.
"""

import random
import threading

import pytest

from cefr_quiz.core.exceptions import NotFoundError, QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import Answer, Question
from cefr_quiz.db.store import InMemoryQuestionStore
from cefr_quiz.quiz import QuestionBank

C2 = ProficiencyLevel.C2
FIB = QuestionType.FILL_IN_BLANK
MC = QuestionType.MULTIPLE_CHOICE


def _ids(questions):
    return [q.id for q in questions]


class TestSample:
    def test_filters_by_level_and_type(self, bank):
        questions = bank.sample(ProficiencyLevel.B1, MC, count=10)
        assert len(questions) == 2
        assert all(q.level == ProficiencyLevel.B1 and q.question_type == MC for q in questions)

    def test_no_type_means_any_type(self, bank):
        questions = bank.sample(ProficiencyLevel.B1, None, count=10)
        assert {q.question_type for q in questions} == {MC, FIB}
        assert len(questions) == 3

    def test_returns_exactly_count_distinct_when_pool_is_larger(self, bank):
        questions = bank.sample(C2, FIB, count=3)
        assert len(questions) == 3
        assert len(set(_ids(questions))) == 3

    def test_excluded_ids_are_never_returned(self, bank, store):
        pool_ids = _ids(store.find_by_level_and_type(C2, FIB))
        excluded = set(pool_ids[:2])
        for _ in range(20):
            questions = bank.sample(C2, FIB, count=2, excluded_ids=excluded)
            assert not excluded & set(_ids(questions))

    def test_count_larger_than_remaining_pool_returns_whole_pool(self, bank, store):
        pool_ids = _ids(store.find_by_level_and_type(C2, FIB))
        assert len(pool_ids) == 5
        excluded = pool_ids[:2]

        questions = bank.sample(C2, FIB, count=10, excluded_ids=excluded)

        assert sorted(_ids(questions)) == sorted(pool_ids[2:])

    def test_pool_emptied_by_exclusion_raises_not_found(self, bank, store):
        pool_ids = _ids(store.find_by_level_and_type(ProficiencyLevel.A1, MC))
        with pytest.raises(NotFoundError):
            bank.sample(ProficiencyLevel.A1, MC, count=1, excluded_ids=pool_ids)

    def test_empty_level_raises_not_found(self):
        bank = QuestionBank(InMemoryQuestionStore())
        with pytest.raises(NotFoundError):
            bank.sample(ProficiencyLevel.B2, count=5)

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_rejected(self, bank, count):
        with pytest.raises(QuizValidationError):
            bank.sample(ProficiencyLevel.B1, count=count)

    def test_level_is_required(self, bank):
        with pytest.raises(QuizValidationError):
            bank.sample(None, count=1)

    def test_duplicate_rows_from_store_are_collapsed(self, question_factory):
        question = question_factory(ProficiencyLevel.A2)
        question.id = 7

        class DuplicatingStore(InMemoryQuestionStore):
            def find_by_level(self, level):
                return [question, question, question]

        questions = QuestionBank(DuplicatingStore()).sample(ProficiencyLevel.A2, count=5)
        assert _ids(questions) == [7]

    def test_repeated_calls_can_differ(self, bank):
        seen = {tuple(sorted(_ids(bank.sample(C2, FIB, count=2)))) for _ in range(50)}
        assert len(seen) > 1

    def test_injected_generator_makes_sampling_reproducible(self, store):
        first = QuestionBank(store, rng=random.Random(99)).sample(C2, FIB, count=3)
        second = QuestionBank(store, rng=random.Random(99)).sample(C2, FIB, count=3)
        assert _ids(first) == _ids(second)

    def test_per_call_seed_is_reproducible(self, bank):
        first = bank.sample(C2, FIB, count=2, seed="learner-1:attempt-2")
        second = bank.sample(C2, FIB, count=2, seed="learner-1:attempt-2")
        assert _ids(first) == _ids(second)

    def test_random_question_returns_one_matching_question(self, bank):
        question = bank.random_question(ProficiencyLevel.A2, FIB)
        assert question.level == ProficiencyLevel.A2
        assert question.question_type == FIB


class TestLookups:
    def test_get_question(self, bank, store):
        question = store.find_by_level(ProficiencyLevel.B2)[0]
        assert bank.get_question(question.id) is question

    def test_get_missing_question_raises(self, bank):
        with pytest.raises(NotFoundError):
            bank.get_question(9999)

    def test_answers_for(self, bank, store):
        question = store.find_by_level(ProficiencyLevel.B2)[0]
        answers = bank.answers_for(question.id)
        assert len(answers) == 3
        assert all(a.question_id == question.id for a in answers)

    def test_answers_for_missing_question_raises(self, bank):
        with pytest.raises(NotFoundError):
            bank.answers_for(9999)

    def test_questions_by_level(self, bank):
        assert len(bank.questions_by_level(ProficiencyLevel.A1)) == 3


class TestCoverage:
    def test_count_by_level(self, bank):
        assert bank.count_by_level(ProficiencyLevel.B1) == 3
        assert bank.count_by_level(C2) == 7

    def test_counts_by_level_covers_all_six_levels(self, bank):
        counts = bank.counts_by_level()
        assert list(counts) == list(ProficiencyLevel)

    def test_coverage_met(self, bank):
        assert bank.coverage_check(3) is True

    def test_coverage_not_met(self, bank):
        assert bank.coverage_check(4) is False

    def test_coverage_fails_when_one_level_is_empty(self, question_factory):
        store = InMemoryQuestionStore(
            [question_factory(level) for level in ProficiencyLevel if level != ProficiencyLevel.C1]
        )
        assert QuestionBank(store).coverage_check(1) is False

    @pytest.mark.parametrize("minimum", [0, -3])
    def test_non_positive_minimum_rejected(self, bank, minimum):
        with pytest.raises(QuizValidationError):
            bank.coverage_check(minimum)


class TestMaintenance:
    def test_save_assigns_ids_and_reparents_answers(self, bank, question_factory):
        question = question_factory(ProficiencyLevel.B1, text="Choose the past tense of 'go'")
        saved = bank.save(question)

        assert saved.id is not None
        assert all(a.id is not None and a.question_id == saved.id for a in saved.answers)
        assert bank.get_question(saved.id).text == "Choose the past tense of 'go'"

    def test_save_rejects_question_without_correct_answer(self, bank, question_factory):
        question = question_factory(ProficiencyLevel.B1, correct_index=None)
        with pytest.raises(QuizValidationError):
            bank.save(question)
        assert question.id is None

    def test_save_without_answers_is_allowed(self, bank):
        saved = bank.save(Question(text="Describe your weekend", level=ProficiencyLevel.A2))
        assert bank.answers_for(saved.id) == []

    def test_save_moves_foreign_answer_to_this_question(self, bank, store):
        other = store.find_by_level(ProficiencyLevel.A1)[0]
        question = Question(text="Pick the article", level=ProficiencyLevel.A1)
        answer = Answer(text="an", is_correct=True, question_id=other.id)
        question.answers.append(answer)

        saved = bank.save(question)

        assert answer.question_id == saved.id

    def test_rejected_save_leaves_answers_untouched(self, bank, store):
        other = store.find_by_level(ProficiencyLevel.A1)[0]
        question = Question(text="Pick the article", level=ProficiencyLevel.A1, id=other.id + 1000)
        answer = Answer(text="an", question_id=other.id)
        question.answers.append(answer)

        with pytest.raises(QuizValidationError):
            bank.save(question)

        assert answer.question_id == other.id

    def test_remove_answer_clears_back_reference(self, question_factory):
        question = question_factory(ProficiencyLevel.B2)
        question.id = 42
        dropped = question.answers[1]

        question.remove_answer(dropped)
        question.remove_answer(None)

        assert dropped not in question.answers
        assert dropped.question_id is None
        assert len(question.answers) == 2

    def test_shared_generator_uses_the_given_lock(self, store):
        rng = random.Random(3)
        lock = threading.Lock()
        first = QuestionBank(store, rng=rng, rng_lock=lock)
        second = QuestionBank(store, rng=rng, rng_lock=lock)

        assert first._rng_lock is second._rng_lock is lock
        assert QuestionBank(store)._rng_lock is not QuestionBank(store)._rng_lock

    def test_delete(self, bank, store):
        question = store.find_by_level(ProficiencyLevel.C1)[0]
        bank.delete(question.id)
        assert not store.exists(question.id)
        assert bank.count_by_level(ProficiencyLevel.C1) == 2

    def test_delete_missing_raises(self, bank):
        with pytest.raises(NotFoundError):
            bank.delete(9999)
