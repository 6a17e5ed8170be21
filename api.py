"""
FastAPI application for Pathfinder, the AI career guidance quiz.
One session per browser tab; saved careers persist in a local JSON store.
"""
import json
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from core import settings
from core.errors import BusyError, PathfinderError, PhaseError
from core.job_alerts import JobAlertScan, default_preferences
from core.profile import build_profile
from core.results import build_results
from core.session import QuizStep, Session, SessionStore
from link.geolocation import reverse_geocode
from models.schemas import CareerMatch
from questionnaires.questions import QUESTIONS
from storage.local_store import LocalStore
from storage.saved_careers import SavedCareers

logging.basicConfig(level=settings.LOG_LEVEL)
log = logging.getLogger("pathfinder")

app = FastAPI(title="Pathfinder Career Guidance API", version="2.5.0")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Update with your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_sessions = SessionStore()
_saved_careers: Optional[SavedCareers] = None


def get_sessions() -> SessionStore:
    return _sessions


def get_saved_careers() -> SavedCareers:
    global _saved_careers
    if _saved_careers is None:
        _saved_careers = SavedCareers(LocalStore(settings.STORE_PATH))
    return _saved_careers


def get_session(session_id: str, sessions: SessionStore = Depends(get_sessions)) -> Session:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


# ============================================================================
# ERROR HANDLING
# ============================================================================

@app.exception_handler(PathfinderError)
async def handle_domain_error(request: Request, exc: PathfinderError):
    status_code = 409 if isinstance(exc, (PhaseError, BusyError)) else 400
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def handle_uncaught(request: Request, exc: Exception):
    log.exception("Unhandled error")
    return JSONResponse(status_code=500, content={"detail": f"Internal error: {exc}"})


# ============================================================================
# REQUEST MODELS
# ============================================================================

class AnswerRequest(BaseModel):
    question_id: int
    option: str


class ReflectionRequest(BaseModel):
    name: str = ""
    struggles: str = ""
    testimonies: str = ""
    fears: str = ""
    goals: str = ""


class FeedbackRequest(BaseModel):
    accuracy: Optional[int] = None
    helpfulness: Optional[int] = None
    comments: str = ""


class LocationRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CareerRequest(BaseModel):
    title: str


class JobAlertRequest(BaseModel):
    title: str
    keywords: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    frequency: Optional[str] = None


class ChoiceRequest(BaseModel):
    choice: int


def _career_or_404(session: Session, saved: SavedCareers, title: str) -> CareerMatch:
    career = session.find_career(title, extra=saved.all())
    if career is None:
        raise HTTPException(status_code=404, detail=f"Unknown career: {title}")
    return career


def _require_game(session: Session):
    if session.step != QuizStep.SCENARIO_GAME or session.game is None:
        raise PhaseError("No scenario simulation is running.")
    return session.game


# ============================================================================
# HEALTH CHECK
# ============================================================================

@app.get("/")
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "pathfinder-backend",
        "timestamp": datetime.now().isoformat()
    }


# ============================================================================
# QUIZ
# ============================================================================

@app.get("/quiz/questions")
async def get_questions():
    return {"questions": [q.to_dict() for q in QUESTIONS]}


@app.post("/sessions", status_code=201)
async def create_session(sessions: SessionStore = Depends(get_sessions)):
    return sessions.create().to_dict()


@app.get("/sessions/{session_id}")
async def get_session_state(session: Session = Depends(get_session)):
    return session.to_dict()


@app.post("/sessions/{session_id}/start")
async def start_quiz(session: Session = Depends(get_session)):
    session.start_quiz()
    return session.to_dict()


@app.post("/sessions/{session_id}/answers")
async def answer_question(request: AnswerRequest, session: Session = Depends(get_session)):
    session.answer(request.question_id, request.option)
    return session.quiz.progress()


@app.post("/sessions/{session_id}/quiz/previous")
async def previous_question(session: Session = Depends(get_session)):
    session.previous_question()
    return session.quiz.progress()


@app.post("/sessions/{session_id}/quiz/back")
async def back_to_quiz(session: Session = Depends(get_session)):
    session.back_to_quiz()
    return session.to_dict()


@app.post("/sessions/{session_id}/quiz/complete")
async def complete_quiz(session: Session = Depends(get_session)):
    scores = session.complete_quiz()
    return {"step": session.step.value, "scores": scores.model_dump()}


# ============================================================================
# REFLECTION + ANALYSIS
# ============================================================================

@app.post("/sessions/{session_id}/reflection")
async def submit_reflection(request: ReflectionRequest, session: Session = Depends(get_session)):
    """
    Submit the personal reflection and wait for the AI analysis.
    On failure the session is back at START with a notice.
    """
    session.submit_reflection(request.model_dump())
    await session.run_analysis()
    return session.to_dict()


# ============================================================================
# RESULTS
# ============================================================================

@app.get("/sessions/{session_id}/results")
async def get_results(
    session: Session = Depends(get_session),
    saved: SavedCareers = Depends(get_saved_careers),
):
    if session.analysis is None or session.scores is None:
        raise PhaseError("No analysis available yet.")
    results = build_results(session.analysis, session.scores, saved)
    results["feedback"] = session.feedback.to_dict()
    return results


@app.post("/sessions/{session_id}/feedback")
async def submit_feedback(request: FeedbackRequest, session: Session = Depends(get_session)):
    if session.analysis is None:
        raise PhaseError("No analysis to review yet.")
    session.feedback.submit(request.accuracy, request.helpfulness, request.comments)
    return session.feedback.to_dict()


@app.post("/sessions/{session_id}/location")
async def detect_location(request: LocationRequest, session: Session = Depends(get_session)):
    session.location = await reverse_geocode(request.latitude, request.longitude)
    return {"location": session.location}


@app.post("/sessions/{session_id}/job-alerts")
async def job_alerts(
    request: JobAlertRequest,
    session: Session = Depends(get_session),
    saved: SavedCareers = Depends(get_saved_careers),
):
    """Play the simulated alert scan as newline-delimited JSON events."""
    career = _career_or_404(session, saved, request.title)
    preferences = default_preferences(career, session.location)
    for field in ("keywords", "location", "salary", "frequency"):
        value = getattr(request, field)
        if value:
            setattr(preferences, field, value)

    scan = JobAlertScan(career, preferences)

    async def events():
        async for event in scan.run():
            yield json.dumps(event) + "\n"

    return StreamingResponse(events(), media_type="application/x-ndjson")


# ============================================================================
# SAVED CAREERS + PROFILE
# ============================================================================

@app.get("/saved-careers")
async def list_saved_careers(saved: SavedCareers = Depends(get_saved_careers)):
    return {"saved_careers": [c.model_dump(by_alias=True) for c in saved.all()]}


@app.post("/saved-careers/toggle")
async def toggle_saved_career(career: CareerMatch, saved: SavedCareers = Depends(get_saved_careers)):
    is_saved = saved.toggle(career)
    return {"title": career.title, "saved": is_saved, "count": len(saved)}


@app.delete("/saved-careers/{title}")
async def remove_saved_career(title: str, saved: SavedCareers = Depends(get_saved_careers)):
    if not saved.remove(title):
        raise HTTPException(status_code=404, detail=f"Career not saved: {title}")
    return {"title": title, "saved": False, "count": len(saved)}


@app.get("/sessions/{session_id}/profile")
async def get_profile(
    session: Session = Depends(get_session),
    saved: SavedCareers = Depends(get_saved_careers),
):
    profile = build_profile(session, saved)
    return {"visible": profile is not None, "profile": profile}


# ============================================================================
# SCENARIO MINI-GAME
# ============================================================================

@app.post("/sessions/{session_id}/scenario")
async def start_scenario(
    request: CareerRequest,
    session: Session = Depends(get_session),
    saved: SavedCareers = Depends(get_saved_careers),
):
    career = _career_or_404(session, saved, request.title)
    game = session.play_scenario(career)
    await game.load_step()
    return game.to_dict()


@app.get("/sessions/{session_id}/scenario")
async def get_scenario(session: Session = Depends(get_session)):
    return _require_game(session).to_dict()


@app.post("/sessions/{session_id}/scenario/choice")
async def choose_scenario_option(request: ChoiceRequest, session: Session = Depends(get_session)):
    game = _require_game(session)
    await game.choose(request.choice)
    result = game.to_dict()
    result["achievements"] = list(session.achievements)
    return result


@app.post("/sessions/{session_id}/scenario/next")
async def next_scenario_turn(session: Session = Depends(get_session)):
    game = _require_game(session)
    await game.next_turn()
    return game.to_dict()


@app.post("/sessions/{session_id}/scenario/retry")
async def retry_scenario(session: Session = Depends(get_session)):
    game = _require_game(session)
    await game.retry()
    return game.to_dict()


@app.post("/sessions/{session_id}/scenario/exit")
async def exit_scenario(session: Session = Depends(get_session)):
    session.exit_scenario()
    return session.to_dict()


# ============================================================================
# RESET
# ============================================================================

@app.post("/sessions/{session_id}/reset")
async def reset_session(session: Session = Depends(get_session)):
    session.reset()
    return session.to_dict()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api:app", host="0.0.0.0", port=8000, reload=True)
