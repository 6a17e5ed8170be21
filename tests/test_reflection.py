import pytest

from core.errors import ReflectionError
from core.reflection import build_reflection, can_submit


class TestReflection:
    @pytest.mark.parametrize("name", ["", "   ", "\n\t"])
    def test_blank_name_blocks_submission(self, name) -> None:
        assert can_submit({"name": name}) is False
        with pytest.raises(ReflectionError):
            build_reflection({"name": name, "goals": "Build robots"})

    def test_only_name_is_required(self) -> None:
        reflection = build_reflection({"name": "Ana"})
        assert reflection.name == "Ana"
        assert reflection.struggles == reflection.fears == reflection.goals == ""

    def test_fields_are_trimmed(self) -> None:
        reflection = build_reflection({"name": "  Ana ", "goals": " Nurse\n"})
        assert reflection.name == "Ana"
        assert reflection.goals == "Nurse"

    def test_reflection_is_immutable(self) -> None:
        reflection = build_reflection({"name": "Ana"})
        with pytest.raises(Exception):
            reflection.name = "Bo"
