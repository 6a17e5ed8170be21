"""
Scenario mini-game state.

Turn-indexed loop: load a dilemma for the current turn, let the player pick
a choice, score it, then advance or exit. At most one AI request is in
flight per game; a reply that lands after the player exited or moved on is
dropped. Failures park the game in an "error" state that can be retried.
"""
import logging
from typing import Callable, List, Optional

from ai import scenario_engine
from core.errors import BusyError, PhaseError, ScenarioError
from models.schemas import CareerMatch, ScenarioFeedback, ScenarioStep

log = logging.getLogger(__name__)

LOADING = "loading"
CHOOSING = "choosing"
FEEDBACK = "feedback"
ERROR = "error"
EXITED = "exited"


def add_achievement(achievements: List[str], name: Optional[str]) -> bool:
    """Append an achievement unless it is blank or already unlocked."""
    if not name or name in achievements:
        return False
    achievements.append(name)
    return True


class ScenarioGame:
    def __init__(
        self,
        career: CareerMatch,
        on_achievement: Optional[Callable[[str], object]] = None,
    ):
        self.career = career
        self.on_achievement = on_achievement
        self.turn = 1
        self.status = LOADING
        self.step: Optional[ScenarioStep] = None
        self.feedback: Optional[ScenarioFeedback] = None
        self.history: List[dict] = []
        self.error: Optional[str] = None

        self._in_flight = False
        self._token = 0
        self._failed_choice: Optional[int] = None

    # ── Request gating ──────────────────────────────────────────────

    def _begin(self) -> int:
        if self._in_flight:
            raise BusyError("A scenario request is already in progress.")
        if self.status == EXITED:
            raise PhaseError("The simulation has ended.")
        self._in_flight = True
        self._token += 1
        self.status = LOADING
        self.error = None
        return self._token

    def _is_stale(self, token: int) -> bool:
        return token != self._token or self.status == EXITED

    def _fail(self, token: int, error: Exception, choice_index: Optional[int]) -> None:
        self._in_flight = False
        if self._is_stale(token):
            return
        log.error(f"[Scenario] {self.career.title} turn {self.turn}: {error}")
        self.status = ERROR
        self.error = str(error)
        self._failed_choice = choice_index

    # ── Turn flow ───────────────────────────────────────────────────

    async def load_step(self) -> None:
        token = self._begin()
        try:
            step = await scenario_engine.generate_step(self.career, self.turn)
        except ScenarioError as e:
            self._fail(token, e, None)
            return
        except Exception as e:
            log.exception(f"[Scenario] {self.career.title} turn {self.turn} crashed")
            self._fail(token, e, None)
            return

        self._in_flight = False
        if self._is_stale(token):
            log.info(f"[Scenario] discarding stale step for turn {self.turn}")
            return
        self.step = step
        self.feedback = None
        self.status = CHOOSING

    async def choose(self, choice_index: int) -> None:
        if self.status != CHOOSING or self.step is None:
            raise PhaseError("There is no open dilemma to answer.")
        if not 0 <= choice_index < len(self.step.choices):
            raise ScenarioError(f"Invalid choice: {choice_index}")
        await self._evaluate(choice_index)

    async def _evaluate(self, choice_index: int) -> None:
        step = self.step
        choice = step.choices[choice_index]
        token = self._begin()
        try:
            feedback = await scenario_engine.evaluate_choice(self.career, step, choice)
        except ScenarioError as e:
            self._fail(token, e, choice_index)
            return
        except Exception as e:
            log.exception(f"[Scenario] {self.career.title} turn {self.turn} crashed")
            self._fail(token, e, choice_index)
            return

        self._in_flight = False
        if self._is_stale(token):
            log.info(f"[Scenario] discarding stale feedback for turn {self.turn}")
            return
        self.feedback = feedback
        self.history.append({"turn": self.turn, "choice": choice.text, "feedback": feedback})
        self.status = FEEDBACK

        if feedback.earned_achievement and self.on_achievement:
            self.on_achievement(feedback.earned_achievement)

    async def next_turn(self) -> None:
        if self.status != FEEDBACK:
            raise PhaseError("Finish the current dilemma before moving on.")
        self.turn += 1
        self.feedback = None
        await self.load_step()

    async def retry(self) -> None:
        if self.status != ERROR:
            raise PhaseError("Nothing to retry.")
        if self._failed_choice is None:
            await self.load_step()
        else:
            await self._evaluate(self._failed_choice)

    def exit(self) -> None:
        self.status = EXITED
        # Bumping the token drops any reply still in flight
        self._token += 1
        self._in_flight = False

    @property
    def loading(self) -> bool:
        return self._in_flight

    def to_dict(self) -> dict:
        return {
            "career": self.career.model_dump(by_alias=True),
            "turn": self.turn,
            "status": self.status,
            "loading": self.loading,
            "error": self.error,
            "step": self.step.model_dump(by_alias=True) if self.step else None,
            "feedback": self.feedback.model_dump(by_alias=True) if self.feedback else None,
            "history": [
                {
                    "turn": h["turn"],
                    "choice": h["choice"],
                    "feedback": h["feedback"].model_dump(by_alias=True),
                }
                for h in self.history
            ],
        }
