import asyncio

import pytest

from core.errors import BusyError, PhaseError, ScenarioError
from core.scenario import CHOOSING, ERROR, EXITED, FEEDBACK, ScenarioGame, add_achievement
from models.schemas import CareerMatch, ScenarioStep
from tests.samples import SAMPLE_FEEDBACK, SAMPLE_STEP

CAREER = CareerMatch(title="Biomedical Engineer", description="Design devices.")


def new_game(achievements=None):
    achievements = achievements if achievements is not None else []
    return ScenarioGame(CAREER, on_achievement=lambda name: add_achievement(achievements, name))


class TestTurnLoop:
    def test_first_turn_loads_dilemma(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())

        assert game.turn == 1
        assert game.status == CHOOSING
        assert len(game.step.choices) == 3
        assert "Turn number: 1" in fake_llm.calls[0]["user"]

    def test_choice_is_scored_and_recorded(self, fake_llm) -> None:
        achievements = []
        fake_llm.queue(SAMPLE_STEP, SAMPLE_FEEDBACK)
        game = new_game(achievements)
        asyncio.run(game.load_step())
        asyncio.run(game.choose(0))

        assert game.status == FEEDBACK
        assert game.feedback.skill_analysis.empathy == 92
        assert game.history[0]["choice"] == SAMPLE_STEP["choices"][0]["text"]
        assert achievements == ["Empathetic Lead"]

    def test_next_turn_increments_counter(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP, SAMPLE_FEEDBACK, SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())
        asyncio.run(game.choose(1))
        asyncio.run(game.next_turn())

        assert game.turn == 2
        assert game.status == CHOOSING
        assert game.feedback is None
        assert "Turn number: 2" in fake_llm.calls[2]["user"]

    def test_repeated_achievement_is_not_duplicated(self, fake_llm) -> None:
        achievements = []
        fake_llm.queue(SAMPLE_STEP, SAMPLE_FEEDBACK, SAMPLE_STEP, SAMPLE_FEEDBACK)
        game = new_game(achievements)

        async def play_two_turns():
            await game.load_step()
            await game.choose(0)
            await game.next_turn()
            await game.choose(2)

        asyncio.run(play_two_turns())
        assert achievements == ["Empathetic Lead"]
        assert len(game.history) == 2

    def test_no_achievement_when_model_returns_none(self, fake_llm) -> None:
        achievements = []
        feedback = dict(SAMPLE_FEEDBACK, earnedAchievement=None)
        fake_llm.queue(SAMPLE_STEP, feedback)
        game = new_game(achievements)
        asyncio.run(game.load_step())
        asyncio.run(game.choose(0))
        assert achievements == []

    def test_invalid_choice_rejected(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())
        with pytest.raises(ScenarioError):
            asyncio.run(game.choose(5))

    def test_cannot_advance_before_feedback(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())
        with pytest.raises(PhaseError):
            asyncio.run(game.next_turn())


class TestFailures:
    def test_step_failure_enters_error_state_and_retries(self, fake_llm) -> None:
        fake_llm.queue({"error": "timeout"}, SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())

        assert game.status == ERROR
        assert game.error == "timeout"
        assert game.loading is False

        asyncio.run(game.retry())
        assert game.status == CHOOSING

    def test_feedback_failure_retries_same_choice(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP, {"scenario": "wrong shape"}, SAMPLE_FEEDBACK)
        game = new_game()
        asyncio.run(game.load_step())
        asyncio.run(game.choose(2))
        assert game.status == ERROR

        asyncio.run(game.retry())
        assert game.status == FEEDBACK
        assert game.history[0]["choice"] == SAMPLE_STEP["choices"][2]["text"]

    def test_unexpected_step_exception_enters_error_state(self, monkeypatch) -> None:
        outcomes = [RuntimeError("client exploded"), ScenarioStep.model_validate(SAMPLE_STEP)]

        async def flaky_step(career, turn):
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        monkeypatch.setattr("ai.scenario_engine.generate_step", flaky_step)
        game = new_game()
        asyncio.run(game.load_step())

        assert game.status == ERROR
        assert game.error == "client exploded"
        assert game.loading is False

        asyncio.run(game.retry())
        assert game.status == CHOOSING

    def test_unexpected_feedback_exception_enters_error_state(self, fake_llm, monkeypatch) -> None:
        fake_llm.queue(SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())

        async def broken_evaluate(career, step, choice):
            raise KeyError("skillAnalysis")

        monkeypatch.setattr("ai.scenario_engine.evaluate_choice", broken_evaluate)
        asyncio.run(game.choose(1))

        assert game.status == ERROR
        assert game.loading is False
        with pytest.raises(PhaseError):
            asyncio.run(game.choose(0))

    def test_retry_without_error_is_rejected(self, fake_llm) -> None:
        fake_llm.queue(SAMPLE_STEP)
        game = new_game()
        asyncio.run(game.load_step())
        with pytest.raises(PhaseError):
            asyncio.run(game.retry())


class TestCancellation:
    def test_reply_after_exit_is_discarded(self, fake_llm) -> None:
        game = new_game()

        def exit_then_reply():
            game.exit()
            return SAMPLE_STEP

        fake_llm.queue(exit_then_reply)
        asyncio.run(game.load_step())

        assert game.status == EXITED
        assert game.step is None

    def test_second_request_while_loading_is_busy(self, monkeypatch) -> None:
        game = new_game()
        release = None

        async def slow_step(career, turn):
            await release.wait()
            return ScenarioStep.model_validate(SAMPLE_STEP)

        monkeypatch.setattr("ai.scenario_engine.generate_step", slow_step)

        async def overlap():
            nonlocal release
            release = asyncio.Event()
            first = asyncio.create_task(game.load_step())
            await asyncio.sleep(0)
            with pytest.raises(BusyError):
                await game.load_step()
            release.set()
            await first

        asyncio.run(overlap())
        assert game.status == CHOOSING

    def test_exited_game_refuses_requests(self, fake_llm) -> None:
        game = new_game()
        game.exit()
        with pytest.raises(PhaseError):
            asyncio.run(game.load_step())
