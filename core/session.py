"""
Wizard state for one user session.

Phases run START -> QUIZ -> REFLECTION -> ANALYZING -> RESULTS <-> SCENARIO_GAME,
with REFLECTION -> QUIZ as the only phase back-edge and reset() returning to START
from anywhere. Achievements live for the whole session and survive reset.
"""
import logging
import uuid
from enum import Enum
from typing import Dict, List, Mapping, Optional

from ai import analysis_engine
from core.errors import AnalysisError, PhaseError
from core.feedback import ResultsFeedback
from core.quiz import QuizEngine
from core.reflection import build_reflection
from core.scenario import ScenarioGame, add_achievement
from models.schemas import AIAnalysis, CareerMatch, PsychometricScores, ReflectionData
from questionnaires.questions import Question

log = logging.getLogger(__name__)


class QuizStep(str, Enum):
    START = "START"
    QUIZ = "QUIZ"
    REFLECTION = "REFLECTION"
    ANALYZING = "ANALYZING"
    RESULTS = "RESULTS"
    SCENARIO_GAME = "SCENARIO_GAME"


STATUS_LABELS = {
    QuizStep.QUIZ: "Defining Potential",
    QuizStep.REFLECTION: "Writing Narrative",
    QuizStep.ANALYZING: "Deep Market Search",
    QuizStep.RESULTS: "Future Architect",
    QuizStep.SCENARIO_GAME: "Training Soft Skills",
}
DEFAULT_STATUS = "Ready to Begin"

ANALYZING_MESSAGE = "Synthesizing your narrative with psychometric data..."
ANALYSIS_FAILED_NOTICE = "Something went wrong with the AI analysis. Please try again."


class Session:
    def __init__(self, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.step = QuizStep.START
        self.quiz = QuizEngine()
        self.scores: Optional[PsychometricScores] = None
        self.reflection: Optional[ReflectionData] = None
        self.analysis: Optional[AIAnalysis] = None
        self.notice: Optional[str] = None
        self.loading_message: Optional[str] = None
        self.feedback = ResultsFeedback()
        self.game: Optional[ScenarioGame] = None
        self.achievements: List[str] = []
        self.location = ""

        # Bumped on reset so an analysis reply for an abandoned run is dropped
        self._generation = 0

    # ── Helpers ─────────────────────────────────────────────────────

    def _require(self, *steps: QuizStep) -> None:
        if self.step not in steps:
            allowed = ", ".join(s.value for s in steps)
            raise PhaseError(f"Not allowed in phase {self.step.value} (expected {allowed})")

    @property
    def status(self) -> str:
        return STATUS_LABELS.get(self.step, DEFAULT_STATUS)

    # ── Quiz ────────────────────────────────────────────────────────

    def start_quiz(self) -> None:
        self._require(QuizStep.START)
        self.notice = None
        self.step = QuizStep.QUIZ

    def answer(self, question_id: int, option_key: str) -> None:
        self._require(QuizStep.QUIZ)
        self.quiz.select(question_id, option_key)

    def complete_quiz(self) -> PsychometricScores:
        self._require(QuizStep.QUIZ)
        self.scores = self.quiz.complete()
        self.step = QuizStep.REFLECTION
        return self.scores

    def previous_question(self) -> Optional[Question]:
        self._require(QuizStep.QUIZ)
        return self.quiz.back()

    def back_to_quiz(self) -> None:
        self._require(QuizStep.REFLECTION)
        # Scores are recomputed when the quiz is completed again
        self.scores = None
        self.step = QuizStep.QUIZ

    # ── Reflection / analysis ───────────────────────────────────────

    def submit_reflection(self, form: Mapping[str, str]) -> ReflectionData:
        self._require(QuizStep.REFLECTION)
        self.reflection = build_reflection(form)
        self.step = QuizStep.ANALYZING
        self.loading_message = ANALYZING_MESSAGE
        return self.reflection

    async def run_analysis(self) -> Optional[AIAnalysis]:
        """
        Await the AI analysis. On failure the session is reset to START
        with a notice and the quiz and reflection are discarded.
        """
        self._require(QuizStep.ANALYZING)
        generation = self._generation
        try:
            analysis = await analysis_engine.run_analysis(self.scores, self.reflection)
        except AnalysisError as e:
            log.error(f"[Session] {self.id} analysis failed: {e}")
            return self._analysis_failed(generation)
        except Exception:
            log.exception(f"[Session] {self.id} analysis crashed")
            return self._analysis_failed(generation)

        if generation != self._generation:
            log.info(f"[Session] {self.id} dropping analysis for an abandoned run")
            return None

        self.analysis = analysis
        self.loading_message = None
        self.feedback = ResultsFeedback()
        self.step = QuizStep.RESULTS
        return analysis

    def _analysis_failed(self, generation: int) -> None:
        if generation != self._generation:
            return None
        self.reset()
        self.notice = ANALYSIS_FAILED_NOTICE
        return None

    # ── Scenario game ───────────────────────────────────────────────

    def find_career(self, title: str, extra: Optional[List[CareerMatch]] = None) -> Optional[CareerMatch]:
        candidates = list(self.analysis.top_careers) if self.analysis else []
        candidates += extra or []
        for career in candidates:
            if career.title == title:
                return career
        return None

    def record_achievement(self, name: str) -> bool:
        return add_achievement(self.achievements, name)

    def play_scenario(self, career: CareerMatch) -> ScenarioGame:
        self._require(QuizStep.RESULTS)
        self.game = ScenarioGame(career, on_achievement=self.record_achievement)
        self.step = QuizStep.SCENARIO_GAME
        return self.game

    def exit_scenario(self) -> None:
        self._require(QuizStep.SCENARIO_GAME)
        if self.game:
            self.game.exit()
        self.step = QuizStep.RESULTS

    # ── Reset ───────────────────────────────────────────────────────

    def reset(self) -> None:
        if self.game:
            self.game.exit()
        self._generation += 1
        self.step = QuizStep.START
        self.quiz = QuizEngine()
        self.scores = None
        self.reflection = None
        self.analysis = None
        self.notice = None
        self.loading_message = None
        self.game = None
        self.feedback = ResultsFeedback()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "step": self.step.value,
            "status": self.status,
            "notice": self.notice,
            "loading_message": self.loading_message,
            "quiz": self.quiz.progress() if self.step == QuizStep.QUIZ else None,
            "scores": self.scores.model_dump() if self.scores else None,
            "reflection": self.reflection.model_dump() if self.reflection else None,
            "analysis": self.analysis.model_dump(by_alias=True) if self.analysis else None,
            "achievements": list(self.achievements),
            "location": self.location,
        }


class SessionStore:
    """In-memory registry of live sessions."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def create(self) -> Session:
        session = Session()
        self._sessions[session.id] = session
        log.info(f"[Session] created {session.id}")
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
