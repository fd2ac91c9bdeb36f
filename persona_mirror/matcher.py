"""Persona matcher: weighted ordinal similarity against the archetype catalog.

Each trait contributes ``1 - distance / max_distance`` along its ordered
vocabulary, weighted by TRAIT_WEIGHTS. The overall score is the weighted
mean, so it always lies in [0, 1].
"""

from __future__ import annotations

import logging
from typing import Any

from persona_mirror.catalog import (
    PERSONA_DETAILS,
    PERSONAS,
    TRAIT_VALUES,
    TRAIT_WEIGHTS,
    UNKNOWN_PERSONA_DETAILS,
    Persona,
)

logger = logging.getLogger(__name__)

TOP_MATCHES = 3


def categorical_similarity(value1: str, value2: str, ordered_values: list[str]) -> float:
    """Similarity of two values on an ordered scale; 0 if either is off-scale."""
    if value1 == value2:
        return 1.0
    if value1 not in ordered_values or value2 not in ordered_values:
        return 0.0
    distance = abs(ordered_values.index(value1) - ordered_values.index(value2))
    max_distance = len(ordered_values) - 1
    return 1 - (distance / max_distance)


def calculate_similarity(persona1: Persona, persona2: Persona) -> float:
    """Weighted mean of per-trait similarities between two fingerprints."""
    total_score = 0.0
    total_weight = 0.0
    for trait, ordered_values in TRAIT_VALUES.items():
        weight = TRAIT_WEIGHTS[trait]
        score = categorical_similarity(
            getattr(persona1, trait), getattr(persona2, trait), ordered_values,
        )
        total_score += score * weight
        total_weight += weight
    return total_score / total_weight


def match_persona(user_persona: Persona) -> dict[str, Any]:
    """Rank every catalog archetype against *user_persona*.

    Returns:
        ``persona_key`` and ``similarity`` of the best match, plus
        ``matches``: the top 3 as ``{"key", "similarity"}`` dicts.
        Equal scores keep catalog order.
    """
    matches = [
        {"key": key, "similarity": calculate_similarity(user_persona, persona)}
        for key, persona in PERSONAS.items()
    ]
    matches.sort(key=lambda m: m["similarity"], reverse=True)

    best = matches[0]
    logger.debug(
        "[MATCH] %s (%.0f%%) runner-up %s (%.0f%%)",
        best["key"], best["similarity"] * 100,
        matches[1]["key"], matches[1]["similarity"] * 100,
    )
    return {
        "persona_key": best["key"],
        "similarity": best["similarity"],
        "matches": matches[:TOP_MATCHES],
    }


def get_persona_details(persona_key: str) -> dict[str, Any]:
    """Emoji, description and trait phrases for an archetype key."""
    details = PERSONA_DETAILS.get(persona_key, UNKNOWN_PERSONA_DETAILS)
    return {
        "type": persona_key,
        "emoji": details["emoji"],
        "description": details["description"],
        "traits": list(details["traits"]),
    }
