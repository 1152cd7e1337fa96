"""
CSV rendering of flattened journal data.

Two tables are produced: trainings (one row per session) and competitions
(one row per race result, repeating the competition's columns). Rows are
joined with "\\n" and there is no trailing newline.
"""

from typing import Iterable, Union

from ..journal.models import Competition, TrainingSession
from .flatten import flatten_competitions, flatten_sessions

TRAINING_HEADER = "date,totalMeters,totalMinutes,borg,location,feeling,notes,equipment,technique"
COMPETITION_HEADER = "date,name,venue,course,stroke,distance,timeSec,rank,isPB"

_NEEDS_QUOTING = (",", "\"", "\n")


def escape_field(value: str) -> str:
    """
    Quote a text field if it contains a comma, a double quote or a newline.

    Embedded double quotes are doubled. Anything else is returned as-is.
    """
    if not any(char in value for char in _NEEDS_QUOTING):
        return value
    escaped = value.replace("\"", "\"\"")
    return f"\"{escaped}\""


def format_value(value: Union[str, int, bool]) -> str:
    """Render a single cell. Numbers and booleans are never quoted."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return escape_field(value)


def _row(values: Iterable[Union[str, int, bool]]) -> str:
    return ",".join(format_value(value) for value in values)


def training_csv(sessions: Iterable[TrainingSession]) -> str:
    """Render sessions as the training CSV table."""
    lines = [TRAINING_HEADER]

    for session in flatten_sessions(sessions):
        # The date is already yyyy-MM-dd and never needs quoting
        lines.append(session.date_string + "," + _row([
            session.total_meters,
            session.total_minutes,
            session.borg,
            session.location,
            session.feeling,
            session.notes,
            session.equipment_summary_string,
            session.technique_summary_string,
        ]))

    return "\n".join(lines)


def competition_csv(competitions: Iterable[Competition]) -> str:
    """Render competitions as the competition CSV table, one row per result."""
    lines = [COMPETITION_HEADER]

    for competition in flatten_competitions(competitions):
        for result in competition.results:
            lines.append(competition.date_string + "," + _row([
                competition.name,
                competition.venue,
                competition.course,
                result.stroke,
                result.distance,
                result.time_sec,
                result.rank,
                result.is_personal_best,
            ]))

    return "\n".join(lines)
