"""
Individual profile analyzer.

Runs the fingerprint -> match pipeline for one user and attaches
descriptive statistics for display. The statistics are recomputed from
the raw records rather than reused from the extractor: the two use
slightly different transaction sets and defaults, and both are kept.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from persona_mirror.features.extractor import extract_user_features
from persona_mirror.features.utils import (
    count_p2p_sent,
    count_payer_fronted,
    events_frame,
    events_per_month,
    mean_hour,
    mean_participants,
    participates,
    round_half_up,
    safe_divide,
    total_spent,
    transactions_frame,
    user_transactions,
)
from persona_mirror.matcher import get_persona_details, match_persona
from persona_mirror.records import Event, Group, Transaction

logger = logging.getLogger(__name__)

# Settlement-time proxies (hours); no settlement timestamps exist.
FAST_SETTLEMENT_HOURS = 48
SLOW_SETTLEMENT_HOURS = 120


def compute_user_stats(
    user_id: str,
    transactions: list[Transaction],
    events: list[Event],
) -> dict[str, Any]:
    """Descriptive stats block for one user's profile card."""
    tx_df = transactions_frame(transactions)
    ev_df = events_frame(events)

    user_ev = ev_df[participates(ev_df, user_id)] if not ev_df.empty else ev_df
    # Any split membership counts here, even with nothing paid.
    user_tx = user_transactions(tx_df, user_id, require_paid=False)

    spent = total_spent(user_tx, user_id)
    n_ev = len(user_ev)
    n_tx = len(user_tx)

    paid_for_others = count_payer_fronted(user_tx, user_id)
    has_p2p = count_p2p_sent(tx_df, user_id) > 0

    return {
        "events_attended": n_ev,
        "total_spent": round_half_up(spent, 2),
        "avg_event_cost": round_half_up(safe_divide(spent, n_ev), 2),
        "features": {
            "avg_group_size": round_half_up(mean_participants(user_ev, 0), 1),
            "events_per_month": round_half_up(events_per_month(user_ev), 1),
            "avg_transaction_amount": round_half_up(safe_divide(spent, n_tx), 2),
            "avg_settlement_hours": FAST_SETTLEMENT_HOURS if has_p2p else SLOW_SETTLEMENT_HOURS,
            "most_active_hour": int(round_half_up(mean_hour(user_ev))),
            "generosity_score": round_half_up(safe_divide(paid_for_others, n_tx), 2),
        },
    }


def analyze_user_profile(
    user_id: str,
    transactions: Iterable[Transaction],
    events: Iterable[Event],
    groups: Iterable[Group] | None = None,
) -> dict[str, Any]:
    """Full persona profile for one user.

    Returns:
        Dict with ``type``, ``emoji``, ``description``, ``traits`` and a
        ``stats`` block (events attended, total spent, average event cost
        and six derived features).
    """
    transactions = list(transactions)
    events = list(events)
    groups = list(groups or [])

    persona = extract_user_features(user_id, transactions, events, groups)
    match = match_persona(persona)
    details = get_persona_details(match["persona_key"])
    stats = compute_user_stats(user_id, transactions, events)

    logger.info(
        "[PROFILE] %s -> %s (%.0f%% match, %d events, $%.2f spent)",
        user_id, details["type"], match["similarity"] * 100,
        stats["events_attended"], stats["total_spent"],
    )

    return {
        "type": details["type"],
        "emoji": details["emoji"],
        "description": details["description"],
        "traits": details["traits"],
        "stats": stats,
    }
