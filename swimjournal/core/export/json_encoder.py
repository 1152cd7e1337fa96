"""
JSON rendering of flattened journal data.

The document shape is ``{"trainings": [...], "competitions": [...]}``.
Two differences to the CSV tables are kept on purpose for compatibility
with existing exports: trainings carry the duration in seconds rather than
minutes, and results carry no rank.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..journal.models import Competition, TrainingSession
from .flatten import flatten_competitions, flatten_sessions


class _ExportModel(BaseModel):
    """Base for export DTOs: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SetDTO(_ExportModel):
    title: str
    reps: int
    distance_per_rep: int
    interval_sec: int
    equipment: list[str]
    technique: list[str]
    laps: list[int]


class TrainingDTO(_ExportModel):
    date: str
    total_meters: int
    total_duration_sec: int
    borg: int
    location: str
    feeling: str
    notes: str
    equipment: list[str]
    technique: list[str]
    sets: list[SetDTO]


class ResultDTO(_ExportModel):
    stroke: str
    distance: int
    time_sec: int
    is_pb: bool = Field(alias="isPB")


class CompetitionDTO(_ExportModel):
    date: str
    name: str
    venue: str
    course: str
    results: list[ResultDTO]


class ExportDocument(_ExportModel):
    """Root of the JSON export."""
    trainings: list[TrainingDTO] = Field(default_factory=list)
    competitions: list[CompetitionDTO] = Field(default_factory=list)


def build_document(
    sessions: Iterable[TrainingSession],
    competitions: Iterable[Competition],
) -> ExportDocument:
    """Flatten the journal and map it onto the export DTOs."""
    trainings = [
        TrainingDTO(
            date=session.date_string,
            total_meters=session.total_meters,
            total_duration_sec=session.total_duration_sec,
            borg=session.borg,
            location=session.location,
            feeling=session.feeling,
            notes=session.notes,
            equipment=session.equipment_summary,
            technique=session.technique_summary,
            sets=[
                SetDTO(
                    title=workout_set.title,
                    reps=workout_set.repetitions,
                    distance_per_rep=workout_set.distance_per_rep,
                    interval_sec=workout_set.interval_sec,
                    equipment=workout_set.equipment,
                    technique=workout_set.technique,
                    laps=workout_set.laps,
                )
                for workout_set in session.sets
            ],
        )
        for session in flatten_sessions(sessions)
    ]

    competition_dtos = [
        CompetitionDTO(
            date=competition.date_string,
            name=competition.name,
            venue=competition.venue,
            course=competition.course,
            results=[
                ResultDTO(
                    stroke=result.stroke,
                    distance=result.distance,
                    time_sec=result.time_sec,
                    is_pb=result.is_personal_best,
                )
                for result in competition.results
            ],
        )
        for competition in flatten_competitions(competitions)
    ]

    return ExportDocument(trainings=trainings, competitions=competition_dtos)


def export_json(
    sessions: Iterable[TrainingSession],
    competitions: Iterable[Competition],
) -> str:
    """Render sessions and competitions as one JSON document."""
    return build_document(sessions, competitions).model_dump_json(by_alias=True)
