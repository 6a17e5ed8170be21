from typing import Mapping

from core.errors import ReflectionError
from models.schemas import ReflectionData

REFLECTION_FIELDS = ("name", "struggles", "testimonies", "fears", "goals")


def can_submit(form: Mapping[str, str]) -> bool:
    return bool((form.get("name") or "").strip())


def build_reflection(form: Mapping[str, str]) -> ReflectionData:
    """
    Turn the raw reflection form into an immutable ReflectionData.
    Only the name is required; everything else is optional free text.
    """
    if not can_submit(form):
        raise ReflectionError("Please tell us your name before continuing.")

    values = {field: (form.get(field) or "").strip() for field in REFLECTION_FIELDS}
    return ReflectionData(**values)
