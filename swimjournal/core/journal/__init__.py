"""
Swim journal domain.

Read-only snapshots of sessions, sets, laps, competitions and results,
plus the tag enums and their display labels.
"""

from .models import (
    Competition,
    CourseType,
    Intensity,
    Location,
    RaceResult,
    SetLap,
    Stroke,
    TechniqueFocus,
    TrainingEquipment,
    TrainingSession,
    User,
    WorkoutSet,
    clamp_borg,
)
from .snapshot import JournalSnapshot

__all__ = [
    "Competition",
    "CourseType",
    "Intensity",
    "Location",
    "RaceResult",
    "SetLap",
    "Stroke",
    "TechniqueFocus",
    "TrainingEquipment",
    "TrainingSession",
    "User",
    "WorkoutSet",
    "clamp_borg",
    "JournalSnapshot",
]
