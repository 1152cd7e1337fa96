"""
Flat export records.

The flattener turns the nested journal graph into these denormalized,
display-ready records. Encoders only ever see records, never domain
objects, so label resolution and aggregation happen exactly once.
"""

from dataclasses import dataclass, field
from datetime import datetime

from ..journal.models import JournalDate


def local_date_string(value: JournalDate) -> str:
    """
    Format a journal date as yyyy-MM-dd in the machine's local calendar.

    Aware datetimes are converted to local time first; naive datetimes and
    plain dates are taken to already be local.
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class FlatSetRecord:
    """One set with labels resolved in their original order."""
    title: str
    repetitions: int
    distance_per_rep: int
    interval_sec: int
    equipment: list[str] = field(default_factory=list)
    technique: list[str] = field(default_factory=list)
    laps: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class FlatSessionRecord:
    """A training session ready for CSV/JSON encoding."""
    date: JournalDate
    total_meters: int
    total_duration_sec: int
    borg: int
    location: str
    feeling: str
    notes: str
    equipment_summary: list[str] = field(default_factory=list)
    technique_summary: list[str] = field(default_factory=list)
    sets: list[FlatSetRecord] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return self.total_duration_sec // 60

    @property
    def date_string(self) -> str:
        return local_date_string(self.date)

    @property
    def equipment_summary_string(self) -> str:
        return "; ".join(self.equipment_summary)

    @property
    def technique_summary_string(self) -> str:
        return "; ".join(self.technique_summary)


@dataclass(frozen=True)
class FlatResultRecord:
    """
    A race result with its stroke label.

    ``rank`` is 0 when the swimmer did not record a placing.
    """
    stroke: str
    distance: int
    time_sec: int
    rank: int
    is_personal_best: bool


@dataclass(frozen=True)
class FlatCompetitionRecord:
    """A competition with its course label and flattened results."""
    date: JournalDate
    name: str
    venue: str
    course: str
    results: list[FlatResultRecord] = field(default_factory=list)

    @property
    def date_string(self) -> str:
        return local_date_string(self.date)
