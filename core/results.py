from typing import List

from ai.labels import CATEGORY_LABELS
from models.schemas import AIAnalysis, PsychometricScores
from storage.saved_careers import SavedCareers

CHART_FULL_MARK = 10


def chart_data(scores: PsychometricScores) -> List[dict]:
    """One radar-chart point per category."""
    return [
        {"subject": label, "value": getattr(scores, category), "fullMark": CHART_FULL_MARK}
        for category, label in CATEGORY_LABELS.items()
    ]


def build_results(analysis: AIAnalysis, scores: PsychometricScores, saved: SavedCareers) -> dict:
    saved_titles = set(saved.titles())
    careers = []
    for career in analysis.top_careers:
        entry = career.model_dump(by_alias=True)
        entry["isSaved"] = career.title in saved_titles
        careers.append(entry)

    payload = analysis.model_dump(by_alias=True)
    payload["topCareers"] = careers
    return {
        "analysis": payload,
        "scores": scores.model_dump(),
        "chart": chart_data(scores),
    }
