import logging
from typing import Optional

from core.errors import FeedbackError

log = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ResultsFeedback:
    """
    Star ratings for the results page. Submitted at most once and kept
    locally; it only flips the submitted flag.
    """

    def __init__(self):
        self.accuracy: Optional[int] = None
        self.helpfulness: Optional[int] = None
        self.comments = ""
        self.submitted = False

    @staticmethod
    def _check_rating(label: str, value: Optional[int]) -> int:
        if value is None or not MIN_RATING <= value <= MAX_RATING:
            raise FeedbackError(f"{label} rating must be between {MIN_RATING} and {MAX_RATING}.")
        return value

    def submit(self, accuracy: Optional[int], helpfulness: Optional[int], comments: str = "") -> None:
        if self.submitted:
            raise FeedbackError("Feedback has already been submitted.")
        self.accuracy = self._check_rating("Accuracy", accuracy)
        self.helpfulness = self._check_rating("Helpfulness", helpfulness)
        self.comments = comments.strip()
        self.submitted = True
        log.info(f"[Feedback] accuracy={self.accuracy} helpfulness={self.helpfulness}")

    def to_dict(self) -> dict:
        return {
            "submitted": self.submitted,
            "accuracy": self.accuracy,
            "helpfulness": self.helpfulness,
            "comments": self.comments,
        }
