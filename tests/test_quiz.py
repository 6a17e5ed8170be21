import random

import pytest

from core.errors import QuizError
from core.quiz import QuizEngine
from questionnaires.questions import CATEGORIES, QUESTIONS
from tests.samples import ANA_PICKS


def answer_all(engine: QuizEngine, picks):
    for qid, key in picks:
        engine.select(qid, key)


class TestQuestionBank:
    def test_every_category_has_questions(self) -> None:
        categories = {q.category for q in QUESTIONS}
        assert categories == set(CATEGORIES)

    def test_option_category_defaults_to_question(self) -> None:
        data = QUESTIONS[0].to_dict()
        assert all(opt["category"] == QUESTIONS[0].category for opt in data["options"])

    def test_category_scores_top_out_at_ten(self) -> None:
        best = {c: 0 for c in CATEGORIES}
        for q in QUESTIONS:
            best[q.category] += max(opt.weight for opt in q.options)
        assert set(best.values()) == {10}


class TestScoring:
    def test_scores_are_sums_of_chosen_weights(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            engine = QuizEngine()
            expected = {c: 0 for c in CATEGORIES}
            for q in QUESTIONS:
                opt = rng.choice(q.options)
                engine.select(q.id, opt.key)
                expected[opt.category or q.category] += opt.weight
            assert engine.complete().model_dump() == expected

    def test_example_profile(self) -> None:
        engine = QuizEngine()
        answer_all(engine, ANA_PICKS)
        scores = engine.complete()
        assert (scores.analytical, scores.creative, scores.social,
                scores.leadership, scores.practical) == (8, 3, 5, 2, 6)

    def test_reanswering_replaces_previous_pick(self) -> None:
        engine = QuizEngine()
        engine.select(1, "A")
        engine.select(1, "D")
        assert engine.scores().analytical == 1

    def test_incomplete_quiz_cannot_finish(self) -> None:
        engine = QuizEngine()
        engine.select(1, "A")
        with pytest.raises(QuizError):
            engine.complete()

    def test_unknown_question_and_option_rejected(self) -> None:
        engine = QuizEngine()
        with pytest.raises(QuizError):
            engine.select(99, "A")
        with pytest.raises(QuizError):
            engine.select(1, "Z")


class TestNavigation:
    def test_answering_current_question_advances(self) -> None:
        engine = QuizEngine()
        assert engine.current.id == 1
        engine.select(1, "B")
        assert engine.current.id == 2

    def test_back_returns_to_previous_question(self) -> None:
        engine = QuizEngine()
        engine.select(1, "B")
        engine.select(2, "B")
        assert engine.back().id == 2
        assert engine.back().id == 1
        assert engine.back().id == 1

    def test_progress_reports_counts(self) -> None:
        engine = QuizEngine()
        answer_all(engine, ANA_PICKS)
        progress = engine.progress()
        assert progress["answered"] == progress["total"] == len(QUESTIONS)
        assert progress["complete"] is True
        assert progress["current_question"] is None

    def test_reanswered_quiz_is_still_incomplete_until_all_answered(self) -> None:
        engine = QuizEngine()
        answer_all(engine, ANA_PICKS[:-1])
        engine.select(1, "D")
        assert engine.is_complete is False
        engine.select(10, "A")
        assert engine.is_complete is True
