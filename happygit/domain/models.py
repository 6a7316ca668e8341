"""Domain models representing core business entities."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DateAdjustment(str, Enum):
    """Calendar boundaries a since-date can be snapped to."""
    FIRST_DAY_OF_YEAR = "first-day-of-year"
    FIRST_DAY_OF_MONTH = "first-day-of-month"
    LAST_DAY_OF_MONTH = "last-day-of-month"
    LAST_DAY_OF_YEAR = "last-day-of-year"
    FIRST_DAY_OF_NEXT_MONTH = "first-day-of-next-month"
    FIRST_DAY_OF_NEXT_YEAR = "first-day-of-next-year"


@dataclass(frozen=True)
class CommitPage:
    """One page of commit records plus the link to the following page.

    Commit records are kept exactly as decoded from the API response.
    """
    records: List[dict] = field(default_factory=list)
    next_url: Optional[str] = None

    @property
    def is_last(self) -> bool:
        """True when no further page is advertised."""
        return self.next_url is None


@dataclass(frozen=True)
class HappinessResult:
    """Average happiness of the scored commits in one repository.

    ``average`` is None when no commit in the window carried a score.
    """
    average: Optional[float]
    count: int
    since: str

    @classmethod
    def from_scores(cls, scores: List[int], since: str) -> 'HappinessResult':
        """Build a result from the collected scores of one repository."""
        count = len(scores)
        average = float(sum(scores)) / count if count else None
        return cls(average=average, count=count, since=since)

    def as_dict(self) -> dict:
        """Plain mapping used for printing."""
        return {"average": self.average, "count": self.count, "since": self.since}
