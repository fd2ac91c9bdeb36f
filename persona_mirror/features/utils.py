"""Shared helpers for persona feature extraction and profile statistics.

Records are flattened into small DataFrames once per call; every helper
here is pure and stateless.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

import pandas as pd

from persona_mirror.records import Event, Transaction

logger = logging.getLogger(__name__)

SECONDS_PER_MONTH = 60 * 60 * 24 * 30
DEFAULT_HOUR = 18

_EVENT_COLUMNS = ["id", "group_id", "created_by", "participants", "n_participants", "date"]
_TX_COLUMNS = ["id", "group_id", "type", "from_user", "to_user", "total_amount", "splits"]


def safe_divide(a: float | None, b: float | None, default: float = 0.0) -> float:
    """Division returning *default* if b is 0 or either side is None."""
    if a is None or b is None or b == 0:
        return default
    return float(a / b)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positives (``Math.round`` style).

    Python's round() uses banker's rounding, which would turn 20.5 into 20.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def events_frame(events: Iterable[Event]) -> pd.DataFrame:
    """Flatten events into a DataFrame with a tz-aware ``date`` column."""
    rows = [
        {
            "id": e.id,
            "group_id": e.group_id,
            "created_by": e.created_by,
            "participants": list(e.participants or []),
            "n_participants": len(e.participants or []),
            "date": e.date,
        }
        for e in events
    ]
    if not rows:
        df = pd.DataFrame(columns=_EVENT_COLUMNS)
        df["n_participants"] = df["n_participants"].astype(int)
    else:
        df = pd.DataFrame(rows, columns=_EVENT_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], utc=True, errors="coerce")
    return df


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Flatten transactions into a DataFrame. Splits stay as Split lists."""
    rows = [
        {
            "id": t.id,
            "group_id": t.group_id,
            "type": t.type,
            "from_user": t.from_user,
            "to_user": t.to_user,
            "total_amount": float(t.total_amount or 0.0),
            "splits": list(t.splits) if t.splits else [],
        }
        for t in transactions
    ]
    if not rows:
        df = pd.DataFrame(columns=_TX_COLUMNS)
        df["total_amount"] = df["total_amount"].astype(float)
        return df
    return pd.DataFrame(rows, columns=_TX_COLUMNS)


def participates(events_df: pd.DataFrame, user_id: str) -> pd.Series:
    """Boolean mask of events that list *user_id* as a participant."""
    if events_df.empty:
        return pd.Series(dtype=bool)
    return events_df["participants"].apply(lambda p: user_id in p).astype(bool)


def split_paid(splits: list, user_id: str) -> float:
    """The user's ``paid`` value in a split list, 0.0 when absent."""
    for split in splits or []:
        if split.user_id == user_id:
            return float(split.paid or 0.0)
    return 0.0


def in_splits(splits: list, user_id: str, require_paid: bool = False) -> bool:
    """True if the user appears in *splits* (optionally with paid > 0)."""
    for split in splits or []:
        if split.user_id == user_id:
            if not require_paid or (split.paid or 0.0) > 0:
                return True
    return False


def user_transactions(tx_df: pd.DataFrame, user_id: str, require_paid: bool) -> pd.DataFrame:
    """Transactions the user paid for, or split-type ones they appear in.

    With *require_paid* the user must also have a positive ``paid`` share.
    """
    if tx_df.empty:
        return tx_df
    is_payer = tx_df["from_user"] == user_id
    in_split = (tx_df["type"] == "split") & tx_df["splits"].apply(
        lambda s: in_splits(s, user_id, require_paid=require_paid)
    ).astype(bool)
    return tx_df[is_payer | in_split]


def total_spent(user_tx: pd.DataFrame, user_id: str) -> float:
    """Payer rows add ``total_amount``; split rows add the user's own ``paid``."""
    if user_tx.empty:
        return 0.0
    total = 0.0
    for _, row in user_tx.iterrows():
        if row["from_user"] == user_id:
            total += float(row["total_amount"])
        elif row["type"] == "split":
            total += split_paid(row["splits"], user_id)
    return total


def count_payer_fronted(tx_df: pd.DataFrame, user_id: str) -> int:
    """Split/event transactions paid by the user."""
    if tx_df.empty:
        return 0
    mask = (tx_df["from_user"] == user_id) & tx_df["type"].isin(["split", "event"])
    return int(mask.sum())


def count_p2p_sent(tx_df: pd.DataFrame, user_id: str) -> int:
    """Peer-to-peer payments initiated by the user."""
    if tx_df.empty:
        return 0
    mask = (tx_df["from_user"] == user_id) & (tx_df["type"] == "p2p")
    return int(mask.sum())


def mean_participants(events_df: pd.DataFrame, default: float) -> float:
    if events_df.empty:
        return float(default)
    return float(events_df["n_participants"].sum()) / len(events_df)


def mean_hour(events_df: pd.DataFrame, default: float = DEFAULT_HOUR) -> float:
    """Mean hour-of-day (UTC) across events with a valid date."""
    if events_df.empty:
        return float(default)
    hours = events_df["date"].dropna().dt.hour
    if hours.empty:
        return float(default)
    return float(hours.sum()) / len(hours)


def events_per_month(events_df: pd.DataFrame) -> float:
    """Event count over the covered span in 30-day months, floored at 1.

    No valid dates count as a one-month span. A zero span (every valid
    date identical) gives 0.0.
    """
    count = len(events_df)
    dates = events_df["date"].dropna() if count else pd.Series(dtype="datetime64[ns, UTC]")
    if dates.empty:
        months = 1.0
    else:
        months = (dates.max() - dates.min()).total_seconds() / SECONDS_PER_MONTH
    if months <= 0:
        return 0.0
    return count / max(months, 1.0)
