"""
Analysis gateway: sends the quiz scores and the personal reflection to the
model in a single call and gets back the complete career analysis (persona,
ranked career matches, motivational videos, sources) as structured JSON.

There is no fallback analysis. Any failure raises AnalysisError and the
session sends the user back to the start.
"""
import logging

from pydantic import ValidationError

from ai.labels import CATEGORY_LABELS
from ai.llm_client import analyse
from core.errors import AnalysisError
from models.schemas import AIAnalysis, PsychometricScores, ReflectionData

log = logging.getLogger(__name__)

MAX_CATEGORY_SCORE = 10

# ── System prompt ───────────────────────────────────────────────────

SYSTEM_PROMPT = """You are an empathetic career guidance counsellor for young people. You combine a short psychometric quiz with the student's own story (their struggles, testimonies, fears and goals) to suggest careers that genuinely fit them.

RULES:
1. Ground every career suggestion in BOTH the quiz profile and the personal narrative. Reference what the student wrote in plain, warm language.
2. Never mention raw scores, category names as jargon, or statistics. Talk to the student as "you".
3. Suggest exactly 3 careers, best fit first. Salary ranges must be realistic and written like "$55k - $90k".
4. Suggest 2-3 motivational videos with real, publicly accessible URLs.
5. List the web sources that informed your salary and growth figures.
6. The empathetic note speaks directly to the struggles or fears the student shared. If they shared none, encourage them.

You MUST respond with EXACTLY this JSON structure:
{
  "persona": "A short archetype label, e.g. 'The Empathetic Builder'",
  "summary": "2-3 sentences describing the student's profile.",
  "topCareers": [
    {
      "title": "Career title",
      "description": "What the job involves day to day.",
      "salaryRange": "$55k - $90k",
      "growthPotential": "High",
      "reasoning": "Why this fits the student, referencing their story.",
      "imageSearchTerm": "two or three words for a stock photo search"
    }
  ],
  "motivationalVideos": [
    {"title": "Video title", "url": "https://...", "description": "Why it is worth watching."}
  ],
  "searchSources": [
    {"title": "Source title", "uri": "https://..."}
  ],
  "empatheticNote": "A short personal note."
}

FIELD RULES:
- "growthPotential" is one of "High", "Medium" or "Low".
- "searchSources" may be an empty list if you relied on general knowledge."""


# ── Prompt building ─────────────────────────────────────────────────

def format_scores(scores: PsychometricScores) -> str:
    """Format category scores with labels, one per line."""
    return "\n".join(
        f"  {label}: {getattr(scores, category)}/{MAX_CATEGORY_SCORE}"
        for category, label in CATEGORY_LABELS.items()
    )


def build_analysis_prompt(scores: PsychometricScores, reflection: ReflectionData) -> str:
    """Build the user prompt with the quiz profile and the reflection verbatim."""

    def _field(value: str) -> str:
        return f"\"{value}\"" if value else "(not shared)"

    return f"""## STUDENT
Name: {reflection.name}

## QUIZ PROFILE
{format_scores(scores)}

## PERSONAL NARRATIVE
Current struggles: {_field(reflection.struggles)}
Testimonies: {_field(reflection.testimonies)}
Fears: {_field(reflection.fears)}
Career goals: {_field(reflection.goals)}

Produce your analysis as JSON."""


# ── Main entry point ────────────────────────────────────────────────

async def run_analysis(scores: PsychometricScores, reflection: ReflectionData) -> AIAnalysis:
    """
    Run the career analysis for one student.

    Raises:
        AnalysisError: the model call failed or the reply did not match
            the AIAnalysis shape.
    """
    user_prompt = build_analysis_prompt(scores, reflection)

    result = await analyse(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=user_prompt,
    )

    if "error" in result:
        raise AnalysisError(result["error"])

    try:
        analysis = AIAnalysis.model_validate(result)
    except ValidationError as e:
        log.error(f"[Analysis] response did not match schema: {e.error_count()} error(s)")
        raise AnalysisError("AI analysis returned an unexpected shape") from e

    log.info(f"[Analysis] persona={analysis.persona!r} careers={len(analysis.top_careers)}")
    return analysis
