"""
Simulated job-alert sign-up.

Nothing is subscribed anywhere: the "scan" plays a fixed sequence of status
messages on a timer and then reports a static confirmation.
"""
import asyncio
import re
from dataclasses import asdict, dataclass
from typing import AsyncIterator, Optional

from core import settings
from models.schemas import CareerMatch

SCAN_MESSAGES = [
    "Connecting to global talent pools...",
    "Filtering for your narrative context...",
    "Matching salary benchmarks...",
    "Verifying growth potential...",
]

DEFAULT_LOCATION = "Remote"
DEFAULT_SALARY = "$50k"
DEFAULT_FREQUENCY = "Daily"


@dataclass
class AlertPreferences:
    keywords: str
    location: str
    salary: str
    frequency: str = DEFAULT_FREQUENCY


def salary_floor(salary_range: str) -> str:
    """'$55k - $90k' -> '$55k'. Falls back to DEFAULT_SALARY."""
    lower = salary_range.split("-")[0]
    cleaned = re.sub(r"[^0-9kK$]", "", lower).strip()
    return cleaned or DEFAULT_SALARY


def default_preferences(career: CareerMatch, location: Optional[str] = None) -> AlertPreferences:
    return AlertPreferences(
        keywords=career.title,
        location=location or DEFAULT_LOCATION,
        salary=salary_floor(career.salary_range),
    )


class JobAlertScan:
    def __init__(self, career: CareerMatch, preferences: AlertPreferences):
        self.career = career
        self.preferences = preferences
        self.scan_step = 0
        self.scanning = False
        self.submitted = False

    def confirmation(self) -> dict:
        return {
            "submitted": self.submitted,
            "message": f"Your {self.preferences.frequency.lower()} feed for "
                       f"{self.preferences.keywords} is active.",
            "preferences": asdict(self.preferences),
        }

    async def run(self, interval: Optional[float] = None) -> AsyncIterator[dict]:
        """Yield one event per staged message, then the confirmation."""
        if interval is None:
            interval = settings.JOB_SCAN_INTERVAL

        self.scanning = True
        self.scan_step = 0
        while self.scan_step < len(SCAN_MESSAGES):
            yield {
                "stage": self.scan_step + 1,
                "of": len(SCAN_MESSAGES),
                "message": SCAN_MESSAGES[self.scan_step],
            }
            await asyncio.sleep(interval)
            self.scan_step += 1

        self.scanning = False
        self.submitted = True
        yield self.confirmation()
