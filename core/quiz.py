"""
Quiz engine: records one option per question and sums option weights into
per-category scores.
"""
from typing import Dict, List, Optional

from core.errors import QuizError
from models.schemas import PsychometricScores
from questionnaires.questions import CATEGORIES, QUESTIONS, Question


class QuizEngine:
    def __init__(self, questions: Optional[List[Question]] = None):
        self.questions = questions if questions is not None else QUESTIONS
        self._by_id = {q.id: q for q in self.questions}
        self.selections: Dict[int, str] = {}
        self.index = 0

    @property
    def current(self) -> Optional[Question]:
        if self.index < len(self.questions):
            return self.questions[self.index]
        return None

    @property
    def is_complete(self) -> bool:
        return all(q.id in self.selections for q in self.questions)

    def select(self, question_id: int, option_key: str) -> None:
        """Pick an option. Re-answering a question replaces the earlier pick."""
        question = self._by_id.get(question_id)
        if question is None:
            raise QuizError(f"Unknown question: {question_id}")
        if question.option(option_key) is None:
            raise QuizError(f"Invalid option {option_key!r} for question {question_id}")

        self.selections[question_id] = option_key
        position = self.questions.index(question)
        if position == self.index:
            self.index = min(self.index + 1, len(self.questions))

    def back(self) -> Optional[Question]:
        if self.index > 0:
            self.index -= 1
        return self.current

    def scores(self) -> PsychometricScores:
        """Sum of chosen weights per category. No per-category normalisation."""
        totals = {category: 0 for category in CATEGORIES}
        for qid, key in self.selections.items():
            category, weight = self._by_id[qid].scoring_pair(key)
            totals[category] += weight
        return PsychometricScores(**totals)

    def complete(self) -> PsychometricScores:
        if not self.is_complete:
            missing = [q.id for q in self.questions if q.id not in self.selections]
            raise QuizError(f"Missing answers for questions: {', '.join(map(str, missing))}")
        return self.scores()

    def progress(self) -> dict:
        return {
            "answered": len(self.selections),
            "total": len(self.questions),
            "complete": self.is_complete,
            "current_question": self.current.to_dict() if self.current else None,
        }
