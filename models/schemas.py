"""
Typed payloads exchanged with the AI service and the frontend.

The AI answers in camelCase JSON (topCareers, salaryRange, ...), so every
model accepts camelCase aliases as well as the Python field names, and
serialises back to camelCase for the frontend.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Quiz / reflection ───────────────────────────────────────────────

class PsychometricScores(CamelModel):
    """Per-category totals accumulated by the quiz. Read-only once built."""
    model_config = ConfigDict(frozen=True)

    analytical: int = 0
    creative: int = 0
    social: int = 0
    leadership: int = 0
    practical: int = 0


class ReflectionData(CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str
    struggles: str = ""
    testimonies: str = ""
    fears: str = ""
    goals: str = ""


# ── AI analysis ─────────────────────────────────────────────────────

class CareerMatch(CamelModel):
    title: str
    description: str = ""
    salary_range: str = ""
    growth_potential: str = ""
    reasoning: str = ""
    image_search_term: str = ""


class VideoResource(CamelModel):
    title: str
    url: str
    description: str = ""


class GroundingSource(CamelModel):
    title: str
    uri: str


class AIAnalysis(CamelModel):
    persona: str
    summary: str
    top_careers: List[CareerMatch] = Field(min_length=1)
    motivational_videos: List[VideoResource] = Field(default_factory=list)
    search_sources: List[GroundingSource] = Field(default_factory=list)
    empathetic_note: str = ""


# ── Scenario mini-game ──────────────────────────────────────────────

class ScenarioChoice(CamelModel):
    text: str
    impact: str = ""


class ScenarioStep(CamelModel):
    scenario: str
    choices: List[ScenarioChoice] = Field(min_length=1)


class SkillAnalysis(CamelModel):
    communication: float
    empathy: float
    leadership: float

    @field_validator("communication", "empathy", "leadership")
    @classmethod
    def _clamp_percent(cls, value: float) -> float:
        return max(0.0, min(100.0, value))


class ScenarioFeedback(CamelModel):
    consequence: str
    skill_analysis: SkillAnalysis
    advice: str
    earned_achievement: Optional[str] = None

    @field_validator("earned_achievement")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()
