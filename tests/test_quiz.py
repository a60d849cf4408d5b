"""Tests for the multiple-choice quiz engine."""
from __future__ import annotations

import random

import pytest

from app.modules.study.events import Notification, NotificationKind
from app.modules.study.quiz import QuizSession, next_question
from app.modules.vocab.models import VocabularyRecord


def _wrong_option(quiz: QuizSession) -> str:
    return next(o for o in quiz.current_options if o != quiz.current.definition)


@pytest.fixture
def events() -> list[Notification]:
    return []


@pytest.fixture
def completions() -> list[int]:
    return []


@pytest.fixture
def quiz(colors, events, completions) -> QuizSession:
    return QuizSession.start(
        colors,
        rng=random.Random(3),
        notify=events.append,
        on_complete=lambda: completions.append(1),
    )


class TestNextQuestion:
    @pytest.mark.parametrize("seed", range(20))
    def test_option_validity(self, colors, seed):
        rng = random.Random(seed)
        for position, record in enumerate(colors):
            options = next_question(colors, position, rng=rng)
            assert len(options) == 4
            assert options.count(record.definition) == 1
            assert len(set(options)) == 4
            others = {r.definition for r in colors if r.id != record.id}
            assert set(options) - {record.definition} <= others

    def test_fewer_records_give_fewer_options(self, animals):
        assert sorted(next_question(animals[:2], 0, rng=random.Random(1))) == [
            "cat",
            "dog",
        ]
        assert next_question(animals[:1], 0, rng=random.Random(1)) == ["cat"]

    def test_duplicate_definitions_are_not_repeated(self):
        order = [
            VocabularyRecord(id="a", term="coche", definition="car"),
            VocabularyRecord(id="b", term="auto", definition="car"),
            VocabularyRecord(id="c", term="carro", definition="car"),
            VocabularyRecord(id="d", term="tren", definition="train"),
        ]
        options = next_question(order, 0, rng=random.Random(5))
        assert sorted(options) == ["car", "train"]

    def test_option_count_is_configurable(self, colors):
        options = next_question(colors, 0, rng=random.Random(2), option_count=6)
        assert len(options) == 6


class TestSelect:
    def test_first_selection_only(self, quiz, events):
        wrong = _wrong_option(quiz)
        assert quiz.select(wrong) is False
        assert quiz.select(quiz.current.definition) is None
        assert quiz.selected == wrong
        assert [e.kind for e in events] == [NotificationKind.INCORRECT_ANSWER]

    def test_correct_selection_notifies(self, quiz, events):
        assert quiz.select(quiz.current.definition) is True
        assert quiz.is_correct is True
        assert events[-1].kind is NotificationKind.CORRECT_ANSWER
        assert events[-1].message == "Correct answer!"

    def test_unknown_option_is_ignored(self, quiz):
        assert quiz.select("not an option") is None
        assert quiz.selected is None


class TestAdvance:
    def test_advance_without_selection_is_noop(self, quiz):
        options = list(quiz.current_options)
        quiz.advance()
        assert quiz.position == 0
        assert quiz.correct_count == 0
        assert quiz.current_options == options

    def test_wrong_answer_must_be_retried(self, quiz):
        for _ in range(3):
            quiz.select(_wrong_option(quiz))
            quiz.advance()
            assert quiz.position == 0
            assert quiz.correct_count == 0
            assert quiz.selected is None

        quiz.select(quiz.current.definition)
        quiz.advance()
        assert quiz.position == 1
        assert quiz.correct_count == 1
        assert quiz.selected is None

    def test_options_regenerated_for_each_question(self, quiz):
        quiz.select(quiz.current.definition)
        quiz.advance()
        assert quiz.current.definition in quiz.current_options

    def test_k_correct_advances(self, quiz, colors, completions):
        for k in range(1, len(colors)):
            quiz.select(quiz.current.definition)
            quiz.advance()
            assert quiz.correct_count == k
            assert quiz.position == k
        assert completions == []

        quiz.select(quiz.current.definition)
        quiz.advance()
        assert quiz.correct_count == len(colors)
        assert quiz.position == len(colors) - 1
        assert quiz.completed
        assert completions == [1]

        quiz.advance()
        assert completions == [1]
        assert quiz.correct_count == len(colors)

    def test_empty_quiz(self):
        quiz = QuizSession.start([], rng=random.Random(0))
        assert quiz.is_empty
        assert quiz.current_options == []
        assert quiz.select("anything") is None
        quiz.advance()
        assert quiz.correct_count == 0

    def test_single_record_quiz(self, animals, completions):
        quiz = QuizSession.start(
            animals[:1], rng=random.Random(0), on_complete=lambda: completions.append(1)
        )
        assert quiz.current_options == ["cat"]
        quiz.select("cat")
        quiz.advance()
        assert completions == [1]
