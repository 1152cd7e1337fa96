"""
Export data flattening.

Walks sessions and competitions and produces flat records with every tag
code resolved to its display label. Codes we don't know (for example ones
written by a newer app version) pass through unchanged instead of failing
the export.
"""

import logging
from enum import Enum
from typing import Iterable, Mapping, Union

from ..journal.models import (
    COURSE_LABELS,
    EQUIPMENT_LABELS,
    LOCATION_LABELS,
    STROKE_LABELS,
    TECHNIQUE_LABELS,
    Competition,
    TrainingSession,
    WorkoutSet,
)
from .records import (
    FlatCompetitionRecord,
    FlatResultRecord,
    FlatSessionRecord,
    FlatSetRecord,
)

logger = logging.getLogger(__name__)


def resolve_label(code: Union[str, Enum], labels: Mapping[str, str]) -> str:
    """Look up the display label for a code, falling back to the code itself."""
    if isinstance(code, Enum):
        code = code.value
    return labels.get(code, code)


def equipment_labels(codes: Iterable[str]) -> list[str]:
    """Resolve equipment codes in order, keeping duplicates."""
    return [resolve_label(code, EQUIPMENT_LABELS) for code in codes]


def technique_labels(codes: Iterable[str]) -> list[str]:
    """Resolve technique codes in order, keeping duplicates."""
    return [resolve_label(code, TECHNIQUE_LABELS) for code in codes]


def _unique_sorted(labels: Iterable[str]) -> list[str]:
    return sorted(set(labels))


def aggregated_equipment(sets: Iterable[WorkoutSet]) -> list[str]:
    """All equipment labels used across the sets, deduplicated and sorted."""
    return _unique_sorted(
        equipment_labels(code for workout_set in sets for code in workout_set.equipment)
    )


def aggregated_technique(sets: Iterable[WorkoutSet]) -> list[str]:
    """All technique labels used across the sets, deduplicated and sorted."""
    return _unique_sorted(
        technique_labels(code for workout_set in sets for code in workout_set.technique)
    )


def flatten_set(workout_set: WorkoutSet) -> FlatSetRecord:
    laps = sorted(workout_set.laps, key=lambda lap: lap.index)
    return FlatSetRecord(
        title=workout_set.title,
        repetitions=workout_set.repetitions,
        distance_per_rep=workout_set.distance_per_rep,
        interval_sec=workout_set.interval_sec,
        equipment=equipment_labels(workout_set.equipment),
        technique=technique_labels(workout_set.technique),
        laps=[lap.split_sec for lap in laps],
    )


def flatten_sessions(sessions: Iterable[TrainingSession]) -> list[FlatSessionRecord]:
    """
    Flatten training sessions into export records.

    Session-level equipment and technique summaries are deduplicated and
    sorted; each set keeps its own labels in original order.
    """
    records = [
        FlatSessionRecord(
            date=session.date,
            total_meters=session.total_meters,
            total_duration_sec=session.total_duration_sec,
            borg=session.borg,
            location=resolve_label(session.location, LOCATION_LABELS),
            feeling=session.feeling or "",
            notes=session.notes or "",
            equipment_summary=aggregated_equipment(session.sets),
            technique_summary=aggregated_technique(session.sets),
            sets=[flatten_set(workout_set) for workout_set in session.sets],
        )
        for session in sessions
    ]

    logger.debug("Flattened sessions", extra={"count": len(records)})

    return records


def flatten_competitions(competitions: Iterable[Competition]) -> list[FlatCompetitionRecord]:
    """
    Flatten competitions into export records.

    A result without a recorded placing is exported with rank 0.
    """
    records = [
        FlatCompetitionRecord(
            date=competition.date,
            name=competition.name,
            venue=competition.venue,
            course=resolve_label(competition.course, COURSE_LABELS),
            results=[
                FlatResultRecord(
                    stroke=resolve_label(result.stroke, STROKE_LABELS),
                    distance=result.distance,
                    time_sec=result.time_sec,
                    rank=result.rank if result.rank is not None else 0,
                    is_personal_best=result.is_personal_best,
                )
                for result in competition.results
            ],
        )
        for competition in competitions
    ]

    logger.debug("Flattened competitions", extra={"count": len(records)})

    return records
