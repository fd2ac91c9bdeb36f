"""Persona inference engine: behavioral fingerprints, archetype matching and
group consensus personas from social/payments history."""

from .analyzers import analyze_group_persona, analyze_user_profile
from .catalog import PERSONAS, Persona
from .features import extract_user_features
from .matcher import calculate_similarity, get_persona_details, match_persona
from .records import (
    Event,
    Group,
    RecordLoadError,
    RecordSet,
    Split,
    Transaction,
    User,
    load_records,
)

__version__ = "1.0.0"

__all__ = [
    "analyze_group_persona",
    "analyze_user_profile",
    "calculate_similarity",
    "extract_user_features",
    "get_persona_details",
    "load_records",
    "match_persona",
    "Event",
    "Group",
    "Persona",
    "PERSONAS",
    "RecordLoadError",
    "RecordSet",
    "Split",
    "Transaction",
    "User",
]
