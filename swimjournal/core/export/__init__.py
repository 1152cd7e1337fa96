"""
Export pipeline: flattening plus CSV and JSON encoders.

Pure transformations over in-memory journal data; no file system access.
"""

from .csv_encoder import (
    COMPETITION_HEADER,
    TRAINING_HEADER,
    competition_csv,
    escape_field,
    training_csv,
)
from .flatten import flatten_competitions, flatten_sessions
from .json_encoder import ExportDocument, build_document, export_json
from .records import (
    FlatCompetitionRecord,
    FlatResultRecord,
    FlatSessionRecord,
    FlatSetRecord,
)

__all__ = [
    "COMPETITION_HEADER",
    "TRAINING_HEADER",
    "competition_csv",
    "escape_field",
    "training_csv",
    "flatten_competitions",
    "flatten_sessions",
    "ExportDocument",
    "build_document",
    "export_json",
    "FlatCompetitionRecord",
    "FlatResultRecord",
    "FlatSessionRecord",
    "FlatSetRecord",
]
