from core.profile import DEFAULT_GOALS, GUEST_NAME, build_profile
from core.session import Session
from models.schemas import CareerMatch, PsychometricScores, ReflectionData


class TestProfilePanel:
    def test_hidden_without_reflection_or_saved_careers(self, saved) -> None:
        assert build_profile(Session(), saved) is None

    def test_guest_view_when_only_saved_careers(self, saved) -> None:
        saved.toggle(CareerMatch(title="Nurse"))
        profile = build_profile(Session(), saved)
        assert profile["name"] == GUEST_NAME
        assert profile["goals"] == DEFAULT_GOALS
        assert profile["status"] == "Ready to Begin"
        assert [c["title"] for c in profile["saved_careers"]] == ["Nurse"]

    def test_reflects_session_state(self, saved) -> None:
        session = Session()
        session.scores = PsychometricScores(analytical=8)
        session.reflection = ReflectionData(name="Ana", goals="Design prosthetics")
        session.record_achievement("Master Negotiator")

        profile = build_profile(session, saved)

        assert profile["name"] == "Ana"
        assert profile["goals"] == "Design prosthetics"
        assert profile["scores"]["analytical"] == 8
        assert profile["achievements"] == ["Master Negotiator"]
        assert profile["saved_careers"] == []
