"""
Saved careers: a toggle set of CareerMatch keyed by title, persisted to the
local store under a fixed key on every change.
"""
import json
import logging
from typing import List

from pydantic import ValidationError

from models.schemas import CareerMatch
from storage.local_store import LocalStore

log = logging.getLogger(__name__)

SAVED_CAREERS_KEY = "pathfinder_saved_careers"


class SavedCareers:
    def __init__(self, store: LocalStore):
        self.store = store
        self._careers: List[CareerMatch] = self._load()

    def _load(self) -> List[CareerMatch]:
        raw = self.store.get_item(SAVED_CAREERS_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
            return [CareerMatch.model_validate(item) for item in items]
        except (ValueError, TypeError, ValidationError):
            # Unreadable data is dropped, the next change overwrites it
            log.error("[Store] Failed to load saved careers")
            return []

    def _persist(self) -> None:
        payload = [c.model_dump(by_alias=True) for c in self._careers]
        self.store.set_item(SAVED_CAREERS_KEY, json.dumps(payload))

    def all(self) -> List[CareerMatch]:
        return list(self._careers)

    def titles(self) -> List[str]:
        return [c.title for c in self._careers]

    def is_saved(self, title: str) -> bool:
        return any(c.title == title for c in self._careers)

    def toggle(self, career: CareerMatch) -> bool:
        """Remove the career if a career with its title is saved, add it otherwise.

        Returns True when the career is saved after the call.
        """
        if self.is_saved(career.title):
            self._careers = [c for c in self._careers if c.title != career.title]
            saved = False
        else:
            self._careers.append(career)
            saved = True
        self._persist()
        return saved

    def remove(self, title: str) -> bool:
        before = len(self._careers)
        self._careers = [c for c in self._careers if c.title != title]
        if len(self._careers) == before:
            return False
        self._persist()
        return True

    def __len__(self) -> int:
        return len(self._careers)
