"""Persona feature extractor: raw history -> seven-trait fingerprint.

Each trait is computed from a continuous ratio and then bucketed with
fixed cutpoints. Every ratio has a default for an empty denominator, so a
user with no history still gets a complete fingerprint.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from persona_mirror.catalog import Persona
from persona_mirror.features.utils import (
    count_p2p_sent,
    count_payer_fronted,
    events_frame,
    events_per_month,
    mean_hour,
    mean_participants,
    participates,
    safe_divide,
    total_spent,
    transactions_frame,
    user_transactions,
)
from persona_mirror.records import Event, Group, Transaction

logger = logging.getLogger(__name__)

DEFAULT_GROUP_SIZE = 2


# ── Bucketing helpers ───────────────────────────────────────────────────────


def _label_at_most(value: float, labels: list[tuple[float, str]], top: str) -> str:
    """First label whose bound satisfies ``value <= bound``, else *top*."""
    for bound, label in labels:
        if value <= bound:
            return label
    return top


def _label_below(value: float, labels: list[tuple[float, str]], top: str) -> str:
    """First label whose bound satisfies ``value < bound``, else *top*."""
    for bound, label in labels:
        if value < bound:
            return label
    return top


# ── Trait scorers ───────────────────────────────────────────────────────────


def _score_group_size(avg_group_size: float) -> str:
    return _label_at_most(avg_group_size, [(3, "small"), (6, "medium")], "large")


def _score_socialness(create_rate: float) -> str:
    return _label_at_most(create_rate, [(0.3, "introvert"), (0.6, "ambivert")], "extrovert")


def _score_budget_level(avg_spend: float) -> str:
    return _label_below(avg_spend, [(20, "budget"), (50, "moderate")], "premium")


def _score_generosity(generosity_rate: float) -> str:
    return _label_at_most(generosity_rate, [(0.25, "low"), (0.5, "medium")], "high")


def _score_payment_speed(settle_rate: float) -> str:
    # p2p frequency stands in for settlement speed; there are no settlement timestamps.
    return _label_at_most(settle_rate, [(0.2, "slow"), (0.4, "medium")], "fast")


def _score_activity_level(monthly_events: float) -> str:
    return _label_at_most(monthly_events, [(3, "low"), (8, "medium")], "high")


def _score_time_preference(avg_hour: float) -> str:
    return _label_below(
        avg_hour, [(11, "morning"), (16, "afternoon"), (21, "evening")], "night",
    )


# ── Raw features ────────────────────────────────────────────────────────────


def compute_raw_features(
    user_id: str,
    transactions: Iterable[Transaction],
    events: Iterable[Event],
) -> dict[str, Any]:
    """Continuous ratios behind each trait, before bucketing."""
    tx_df = transactions_frame(transactions)
    ev_df = events_frame(events)

    user_tx = user_transactions(tx_df, user_id, require_paid=True)
    user_ev = ev_df[participates(ev_df, user_id)] if not ev_df.empty else ev_df
    n_tx = len(user_tx)
    n_ev = len(user_ev)

    created = int((ev_df["created_by"] == user_id).sum()) if not ev_df.empty else 0
    spent = total_spent(user_tx, user_id)

    return {
        "avg_group_size": mean_participants(user_ev, DEFAULT_GROUP_SIZE),
        "create_rate": safe_divide(created, n_ev),
        "avg_spend": safe_divide(spent, n_tx),
        "generosity_rate": safe_divide(count_payer_fronted(tx_df, user_id), n_tx),
        "settle_rate": safe_divide(count_p2p_sent(tx_df, user_id), n_tx),
        "events_per_month": events_per_month(user_ev),
        "avg_hour": mean_hour(user_ev),
        "transaction_count": n_tx,
        "event_count": n_ev,
        "total_spent": spent,
    }


def extract_user_features(
    user_id: str,
    transactions: Iterable[Transaction],
    events: Iterable[Event],
    groups: Iterable[Group] | None = None,
) -> Persona:
    """Build the behavioral fingerprint for one user.

    Args:
        user_id: The user to profile.
        transactions: All known transactions (any group).
        events: All known events (any group).
        groups: Accepted for interface symmetry with the analyzers; unused.

    Returns:
        A ``Persona`` with one bucket per trait.
    """
    raw = compute_raw_features(user_id, transactions, events)

    persona = Persona(
        group_size=_score_group_size(raw["avg_group_size"]),
        socialness=_score_socialness(raw["create_rate"]),
        budget_level=_score_budget_level(raw["avg_spend"]),
        generosity=_score_generosity(raw["generosity_rate"]),
        payment_speed=_score_payment_speed(raw["settle_rate"]),
        activity_level=_score_activity_level(raw["events_per_month"]),
        time_preference=_score_time_preference(raw["avg_hour"]),
    )

    logger.debug(
        "[EXTRACT] user=%s events=%d txns=%d raw=%s -> %s",
        user_id, raw["event_count"], raw["transaction_count"], raw, persona,
    )
    return persona
