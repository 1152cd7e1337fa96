"""
Domain models for the swim training journal.

These are read-only snapshots of what the persistence layer owns: users,
their training sessions (with sets and laps) and their competitions (with
race results). The export pipeline only ever reads them, so they carry no
back-references to their owners.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4


JournalDate = Union[date, datetime]

BORG_MIN = 1
BORG_MAX = 10


class Location(Enum):
    """Where a session was swum."""
    POOL = "becken"
    OPEN_WATER = "freiwasser"

    @property
    def label(self) -> str:
        return LOCATION_LABELS[self.value]


class Intensity(Enum):
    """Qualitative intensity tag of a session."""
    EASY = "locker"
    AEROBIC = "aerob"
    THRESHOLD = "schwelle"
    VO2 = "vo2"
    SPRINT = "sprint"
    RECOVERY = "regenerativ"

    @property
    def label(self) -> str:
        return INTENSITY_LABELS[self.value]


class CourseType(Enum):
    """Course of a competition."""
    SHORT_COURSE_25M = "scm25"
    LONG_COURSE_50M = "lcm50"
    OPEN_WATER = "openWater"

    @property
    def label(self) -> str:
        return COURSE_LABELS[self.value]


class Stroke(Enum):
    """The four competitive strokes plus individual medley."""
    FREESTYLE = "freistil"
    BACKSTROKE = "ruecken"
    BREASTSTROKE = "brust"
    BUTTERFLY = "schmetterling"
    MEDLEY = "lagen"

    @property
    def label(self) -> str:
        return STROKE_LABELS[self.value]


class TrainingEquipment(Enum):
    """Equipment a set can be swum with."""
    PULLBUOY = "pullbuoy"
    PADDLES = "paddles"
    FINS = "fins"
    SNORKEL = "snorkel"
    KICKBOARD = "kickboard"
    RESISTANCE_BAND = "resistanceBand"
    PARACHUTE = "parachute"
    TEMPO_TRAINER = "tempoTrainer"

    @property
    def label(self) -> str:
        return EQUIPMENT_LABELS[self.value]


class TechniqueFocus(Enum):
    """
    What a set concentrates on technically.

    Sets store these as plain code strings so that codes written by a newer
    app version survive a round trip through an older one.
    """
    BREATHING = "breathing"
    KICK = "kick"
    CATCH_PHASE = "catchPhase"
    TURNS = "turns"
    STARTS = "starts"
    PACE_CONTROL = "paceControl"
    COORDINATION = "coordination"
    OPEN_WATER_SKILLS = "openWaterSkills"

    @property
    def label(self) -> str:
        return TECHNIQUE_LABELS[self.value]


# Display labels keyed by stored code
LOCATION_LABELS = {"becken": "Becken", "freiwasser": "Freiwasser"}

INTENSITY_LABELS = {
    "locker": "Locker",
    "aerob": "Aerob",
    "schwelle": "Schwelle",
    "vo2": "VO2max",
    "sprint": "Sprint",
    "regenerativ": "Regenerativ",
}

COURSE_LABELS = {"scm25": "25 m", "lcm50": "50 m", "openWater": "Freiwasser"}

STROKE_LABELS = {
    "freistil": "Freistil",
    "ruecken": "Rücken",
    "brust": "Brust",
    "schmetterling": "Schmetterling",
    "lagen": "Lagen",
}

EQUIPMENT_LABELS = {
    "pullbuoy": "Pullbuoy",
    "paddles": "Paddles",
    "fins": "Flossen",
    "snorkel": "Schnorchel",
    "kickboard": "Brett",
    "resistanceBand": "Band",
    "parachute": "Fallschirm",
    "tempoTrainer": "Tempo-Trainer",
}

TECHNIQUE_LABELS = {
    "breathing": "Atmung",
    "kick": "Beine",
    "catchPhase": "Zugphase",
    "turns": "Wenden",
    "starts": "Starts",
    "paceControl": "Pace",
    "coordination": "Koordination",
    "openWaterSkills": "Freiwasser",
}


def clamp_borg(value: int) -> int:
    """Clamp a perceived-exertion score into the Borg range [1, 10]."""
    return max(BORG_MIN, min(BORG_MAX, value))


@dataclass(frozen=True)
class SetLap:
    """One timed repetition within a set."""
    index: int
    split_sec: int


@dataclass
class WorkoutSet:
    """
    A repeated-interval block within a session, e.g. "10x100".

    Equipment and technique are stored as raw code strings rather than
    enum members. Laps are kept sorted by index with indices 0..n-1.
    """
    title: str
    repetitions: int
    distance_per_rep: int
    interval_sec: int
    equipment: list[str] = field(default_factory=list)
    technique: list[str] = field(default_factory=list)
    comment: Optional[str] = None
    laps: list[SetLap] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._renumber_laps()

    def add_lap(self, split_sec: int) -> SetLap:
        """Append a lap at the end of the set."""
        lap = SetLap(index=len(self.laps), split_sec=split_sec)
        self.laps.append(lap)
        return lap

    def remove_lap(self, index: int) -> None:
        """Remove the lap at ``index`` and close the gap in the numbering."""
        self.laps = [lap for lap in self.laps if lap.index != index]
        self._renumber_laps()

    def _renumber_laps(self) -> None:
        ordered = sorted(self.laps, key=lambda lap: lap.index)
        self.laps = [
            SetLap(index=position, split_sec=lap.split_sec)
            for position, lap in enumerate(ordered)
        ]

    @property
    def total_meters(self) -> int:
        return self.repetitions * self.distance_per_rep


@dataclass
class TrainingSession:
    """
    One logged swim workout.

    The Borg score is clamped on construction, so every session seen by
    the export pipeline carries a value in [1, 10].
    """
    date: JournalDate
    total_meters: int
    total_duration_sec: int
    borg: int = 5
    location: Location = Location.POOL
    intensity: Optional[Intensity] = None
    feeling: Optional[str] = None
    notes: Optional[str] = None
    sets: list[WorkoutSet] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        self.borg = clamp_borg(self.borg)
        if self.total_meters < 0:
            raise ValueError("Total meters cannot be negative")
        if self.total_duration_sec < 0:
            raise ValueError("Total duration cannot be negative")


@dataclass
class RaceResult:
    """A single swim within a competition."""
    stroke: Stroke
    distance: int
    time_sec: int
    hundredths: Optional[int] = None
    heat: Optional[int] = None
    lane: Optional[int] = None
    rank: Optional[int] = None
    is_personal_best: bool = False

    def __post_init__(self) -> None:
        if self.hundredths is not None and not 0 <= self.hundredths <= 99:
            raise ValueError("Hundredths must be between 0 and 99")

    @property
    def formatted_time(self) -> str:
        """Race time as M:SS or M:SS.hh"""
        minutes, seconds = divmod(self.time_sec, 60)
        if self.hundredths is None:
            return f"{minutes}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}.{self.hundredths:02d}"


@dataclass
class Competition:
    """A race event with one or more results."""
    date: JournalDate
    name: str
    venue: str = ""
    course: CourseType = CourseType.SHORT_COURSE_25M
    results: list[RaceResult] = field(default_factory=list)


@dataclass
class User:
    """
    Owner of a journal.

    Only identity is modelled here; credentials live with the
    authentication layer.
    """
    email: str
    display_name: str
    id: UUID = field(default_factory=uuid4)
    sessions: list[TrainingSession] = field(default_factory=list)
    competitions: list[Competition] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.email = self.email.strip().lower()
        if not self.email:
            raise ValueError("User email cannot be empty")

    @property
    def has_data(self) -> bool:
        return bool(self.sessions or self.competitions)
