"""
Scenario generator for the soft-skills mini-game.

Two calls per turn: one architects a workplace dilemma for the chosen
career, the other scores the option the player picked (communication,
empathy, leadership out of 100) and may award an achievement.
"""
import logging

from pydantic import ValidationError

from ai.llm_client import analyse
from core.errors import ScenarioError
from models.schemas import CareerMatch, ScenarioChoice, ScenarioFeedback, ScenarioStep

log = logging.getLogger(__name__)

CHOICE_COUNT = 3
ACHIEVEMENT_THRESHOLD = 80


STEP_SYSTEM_PROMPT = """You design immersive, high-stakes workplace dilemmas that let young people practise soft skills in a career they are exploring.

RULES:
1. Focus on deep interpersonal dynamics or professional ethics, not technical trivia.
2. Write the scenario in the second person ("you"), 3-5 sentences.
3. Provide EXACTLY {choice_count} evocative choices that reveal character. None of them is obviously right.
4. Each choice has a short "impact" hint describing what is at stake.
5. Later turns should raise the stakes.

Respond with EXACTLY this JSON structure:
{{
  "scenario": "The dilemma",
  "choices": [
    {{"text": "What you do", "impact": "What is at stake"}}
  ]
}}"""


FEEDBACK_SYSTEM_PROMPT = """You are a supportive workplace mentor scoring how a young person handled a professional dilemma.

RULES:
1. Describe the realistic consequence of the choice in 2-3 sentences.
2. Score Communication, Empathy and Leadership from 0 to 100.
3. Give one concrete, encouraging piece of advice.
4. If any score is {threshold} or higher, award an achievement with a short title such as "Master Negotiator" or "Empathetic Lead". Otherwise use null.

Respond with EXACTLY this JSON structure:
{{
  "consequence": "What happened next",
  "skillAnalysis": {{"communication": 0, "empathy": 0, "leadership": 0}},
  "advice": "One piece of advice",
  "earnedAchievement": null
}}"""


async def generate_step(career: CareerMatch, turn: int) -> ScenarioStep:
    """Ask the model for the dilemma of the given turn."""
    system = STEP_SYSTEM_PROMPT.format(choice_count=CHOICE_COUNT)
    user_prompt = f"""Architect a workplace dilemma specifically for a {career.title}.
Context: the user is exploring this career path. {career.description}
Turn number: {turn}."""

    result = await analyse(system_prompt=system, user_prompt=user_prompt, temperature=0.8)
    if "error" in result:
        raise ScenarioError(result["error"])

    try:
        step = ScenarioStep.model_validate(result)
    except ValidationError as e:
        log.error(f"[Scenario] step did not match schema: {e.error_count()} error(s)")
        raise ScenarioError("Scenario reply had an unexpected shape") from e

    step.choices = step.choices[:CHOICE_COUNT]
    return step


async def evaluate_choice(
    career: CareerMatch,
    step: ScenarioStep,
    choice: ScenarioChoice,
) -> ScenarioFeedback:
    """Ask the model to score the chosen option."""
    system = FEEDBACK_SYSTEM_PROMPT.format(threshold=ACHIEVEMENT_THRESHOLD)
    user_prompt = f"""Dilemma: "{step.scenario}"
Choice made: "{choice.text}"
Impact context: "{choice.impact}"
Analyse how this action reflects Communication, Empathy and Leadership as a {career.title}."""

    result = await analyse(system_prompt=system, user_prompt=user_prompt)
    if "error" in result:
        raise ScenarioError(result["error"])

    try:
        return ScenarioFeedback.model_validate(result)
    except ValidationError as e:
        log.error(f"[Scenario] feedback did not match schema: {e.error_count()} error(s)")
        raise ScenarioError("Feedback reply had an unexpected shape") from e
