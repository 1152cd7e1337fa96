"""
Serialized journal snapshots.

The export pipeline works on in-memory domain objects. When the journal
arrives from outside (an HTTP request body, a JSON dump on disk) it is
validated with these Pydantic models first and then converted to the
domain dataclasses.

Field names are accepted in snake_case or camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import (
    Competition,
    CourseType,
    Intensity,
    JournalDate,
    Location,
    RaceResult,
    SetLap,
    Stroke,
    TrainingSession,
    WorkoutSet,
)


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LapSnapshot(_SnapshotModel):
    index: int = Field(ge=0)
    split_sec: int = Field(ge=0)


class SetSnapshot(_SnapshotModel):
    title: str
    repetitions: int = Field(ge=0)
    distance_per_rep: int = Field(ge=0)
    interval_sec: int = Field(default=0, ge=0)
    equipment: list[str] = Field(default_factory=list)
    technique: list[str] = Field(default_factory=list)
    comment: Optional[str] = None
    laps: list[LapSnapshot] = Field(default_factory=list)

    def to_domain(self) -> WorkoutSet:
        return WorkoutSet(
            title=self.title,
            repetitions=self.repetitions,
            distance_per_rep=self.distance_per_rep,
            interval_sec=self.interval_sec,
            equipment=list(self.equipment),
            technique=list(self.technique),
            comment=self.comment,
            laps=[SetLap(index=lap.index, split_sec=lap.split_sec) for lap in self.laps],
        )


class SessionSnapshot(_SnapshotModel):
    date: JournalDate
    total_meters: int = Field(ge=0)
    total_duration_sec: int = Field(ge=0)
    borg: int = 5
    location: Location = Location.POOL
    intensity: Optional[Intensity] = None
    feeling: Optional[str] = None
    notes: Optional[str] = None
    sets: list[SetSnapshot] = Field(default_factory=list)

    def to_domain(self) -> TrainingSession:
        return TrainingSession(
            date=self.date,
            total_meters=self.total_meters,
            total_duration_sec=self.total_duration_sec,
            borg=self.borg,
            location=self.location,
            intensity=self.intensity,
            feeling=self.feeling,
            notes=self.notes,
            sets=[workout_set.to_domain() for workout_set in self.sets],
        )


class ResultSnapshot(_SnapshotModel):
    stroke: Stroke
    distance: int = Field(gt=0)
    time_sec: int = Field(ge=0)
    hundredths: Optional[int] = Field(default=None, ge=0, le=99)
    heat: Optional[int] = None
    lane: Optional[int] = None
    rank: Optional[int] = None
    is_personal_best: bool = False

    def to_domain(self) -> RaceResult:
        return RaceResult(
            stroke=self.stroke,
            distance=self.distance,
            time_sec=self.time_sec,
            hundredths=self.hundredths,
            heat=self.heat,
            lane=self.lane,
            rank=self.rank,
            is_personal_best=self.is_personal_best,
        )


class CompetitionSnapshot(_SnapshotModel):
    date: JournalDate
    name: str
    venue: str = ""
    course: CourseType = CourseType.SHORT_COURSE_25M
    results: list[ResultSnapshot] = Field(default_factory=list)

    def to_domain(self) -> Competition:
        return Competition(
            date=self.date,
            name=self.name,
            venue=self.venue,
            course=self.course,
            results=[result.to_domain() for result in self.results],
        )


class JournalSnapshot(_SnapshotModel):
    """Everything one user has logged."""
    sessions: list[SessionSnapshot] = Field(default_factory=list)
    competitions: list[CompetitionSnapshot] = Field(default_factory=list)

    def to_domain(self) -> tuple[list[TrainingSession], list[Competition]]:
        return (
            [session.to_domain() for session in self.sessions],
            [competition.to_domain() for competition in self.competitions],
        )
