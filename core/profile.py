"""
Profile panel: a read-only roll-up of the session's scores, achievements
and the saved careers list.
"""
from typing import Optional

from core.session import Session
from storage.saved_careers import SavedCareers

GUEST_NAME = "Guest"
DEFAULT_GOALS = "Finding my path..."


def is_visible(session: Session, saved: SavedCareers) -> bool:
    return session.reflection is not None or len(saved) > 0


def build_profile(session: Session, saved: SavedCareers) -> Optional[dict]:
    """Panel contents, or None while there is nothing to show."""
    if not is_visible(session, saved):
        return None

    reflection = session.reflection
    return {
        "name": reflection.name if reflection else GUEST_NAME,
        "goals": (reflection.goals if reflection else "") or DEFAULT_GOALS,
        "status": session.status,
        "scores": session.scores.model_dump() if session.scores else None,
        "achievements": list(session.achievements),
        "saved_careers": [c.model_dump(by_alias=True) for c in saved.all()],
    }
