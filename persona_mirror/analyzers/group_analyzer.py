"""
Group persona analyzer.

Classifies every member individually, takes the most common archetype as
the group's dominant persona, and describes the group with stats computed
directly from the group's own events and transactions.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from persona_mirror.catalog import GROUP_PERSONA_DETAILS
from persona_mirror.features.extractor import extract_user_features
from persona_mirror.features.utils import (
    events_frame,
    events_per_month,
    mean_hour,
    mean_participants,
    round_half_up,
    safe_divide,
    transactions_frame,
)
from persona_mirror.matcher import get_persona_details, match_persona
from persona_mirror.records import Event, Group, Transaction, User

logger = logging.getLogger(__name__)

GROUP_SETTLEMENT_HOURS = 48  # placeholder until settlement timestamps exist
UNKNOWN_PERSONA_KEY = "unknown"


def _classify_members(
    members: list[User],
    transactions: list[Transaction],
    events: list[Event],
    groups: list[Group],
) -> list[dict[str, Any]]:
    member_personas: list[dict[str, Any]] = []
    for member in members:
        persona = extract_user_features(member.id, transactions, events, groups)
        match = match_persona(persona)
        member_personas.append({
            "user_id": member.id,
            "user_name": member.name,
            "persona_key": match["persona_key"],
            "similarity": match["similarity"],
            "persona": persona.as_dict(),
        })
    return member_personas


def _tally(member_personas: list[dict[str, Any]]) -> dict[str, int]:
    """Archetype counts in first-seen order."""
    counts: dict[str, int] = {}
    for mp in member_personas:
        counts[mp["persona_key"]] = counts.get(mp["persona_key"], 0) + 1
    return counts


def _dominant_key(counts: dict[str, int]) -> str:
    """Highest count wins; ties go to the key seen first."""
    if not counts:
        return UNKNOWN_PERSONA_KEY
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[0][0]


def _distribution(counts: dict[str, int], total_members: int) -> list[dict[str, Any]]:
    distribution = [
        {
            "persona_key": key,
            "emoji": get_persona_details(key)["emoji"],
            "count": count,
            "percentage": int(round_half_up(safe_divide(count, total_members) * 100)),
        }
        for key, count in counts.items()
    ]
    distribution.sort(key=lambda d: d["count"], reverse=True)
    return distribution


def compute_group_stats(
    group_id: str,
    transactions: list[Transaction],
    events: list[Event],
) -> dict[str, Any]:
    """Unrounded group-wide figures from the group's own records."""
    ev_df = events_frame(e for e in events if e.group_id == group_id)
    tx_df = transactions_frame(t for t in transactions if t.group_id == group_id)

    if tx_df.empty:
        fronted = tx_df
    else:
        fronted = tx_df[tx_df["type"].isin(["split", "event"])]
    # summed in record order
    total_spent = float(sum(fronted["total_amount"].tolist()))

    return {
        "total_events": len(ev_df),
        "total_transactions": len(tx_df),
        "total_spent": total_spent,
        "avg_event_cost": safe_divide(total_spent, len(ev_df)),
        "avg_group_size": mean_participants(ev_df, 0),
        "most_active_time": int(round_half_up(mean_hour(ev_df))),
        "group_generosity": safe_divide(len(fronted), len(tx_df)),
        "events_per_month": events_per_month(ev_df),
        "avg_transaction_amount": safe_divide(total_spent, len(tx_df)),
    }


def analyze_group_persona(
    group_id: str,
    members: Iterable[User],
    transactions: Iterable[Transaction],
    events: Iterable[Event],
    groups: Iterable[Group] | None = None,
) -> dict[str, Any]:
    """Consensus persona for a group.

    Args:
        group_id: Group whose events/transactions feed the group stats.
        members: Users to classify, in display order (drives tie-breaking).
        transactions: All known transactions; members are classified on
            their full history, not just this group's.
        events: All known events.
        groups: Passed through to the extractor.

    Returns:
        Dict with ``dominant_persona`` (profile-shaped), ``persona_distribution``,
        ``group_traits``, ``group_stats`` and ``member_personas``.
    """
    members = list(members)
    transactions = list(transactions)
    events = list(events)
    groups = list(groups or [])

    member_personas = _classify_members(members, transactions, events, groups)
    counts = _tally(member_personas)
    dominant_key = _dominant_key(counts)
    distribution = _distribution(counts, len(members))

    stats = compute_group_stats(group_id, transactions, events)

    dominant_details = get_persona_details(dominant_key)
    group_info = GROUP_PERSONA_DETAILS.get(dominant_key) or {
        "description": dominant_details["description"],
        "traits": dominant_details["traits"],
    }
    group_traits = list(group_info["traits"])

    total_spent = round_half_up(stats["total_spent"], 2)
    avg_event_cost = round_half_up(stats["avg_event_cost"], 2)
    avg_group_size = round_half_up(stats["avg_group_size"], 1)
    generosity = round_half_up(stats["group_generosity"], 2)

    if not members:
        logger.warning("[GROUP_PERSONA] group %s has no members to classify", group_id)
    logger.info(
        "[GROUP_PERSONA] %s: %d members -> %s (%s)",
        group_id, len(members), dominant_key,
        ", ".join(f"{d['persona_key']}={d['count']}" for d in distribution) or "none",
    )

    return {
        "dominant_persona": {
            "type": dominant_key,
            "emoji": dominant_details["emoji"],
            "description": group_info["description"],
            "traits": group_traits,
            "stats": {
                "events_attended": stats["total_events"],
                "total_spent": total_spent,
                "avg_event_cost": avg_event_cost,
                "features": {
                    "avg_group_size": avg_group_size,
                    "events_per_month": round_half_up(stats["events_per_month"], 1),
                    "avg_transaction_amount": round_half_up(stats["avg_transaction_amount"], 2),
                    "avg_settlement_hours": GROUP_SETTLEMENT_HOURS,
                    "most_active_hour": stats["most_active_time"],
                    "generosity_score": generosity,
                },
            },
        },
        "persona_distribution": distribution,
        "group_traits": group_traits,
        "group_stats": {
            "total_members": len(members),
            "total_events": stats["total_events"],
            "total_spent": total_spent,
            "avg_event_cost": avg_event_cost,
            "avg_group_size": avg_group_size,
            "most_active_time": stats["most_active_time"],
            "group_generosity": generosity,
        },
        "member_personas": member_personas,
    }
