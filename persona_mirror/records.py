"""
Plain records consumed by the persona engine.

The surrounding app stores users, groups, events and transactions in a
hosted database. Rows come back either in the app's camelCase shape
(``groupId``, ``totalAmount``, ``from``) or as raw snake_case columns
(``group_id``, ``total_amount``, ``from_user``, ``event_participants``).
Both are accepted here and normalized into the dataclasses below.

Nothing in this module validates cross-record invariants; see
``persona_mirror.integrity`` for the audit.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

TRANSACTION_TYPES = ("event", "split", "p2p")


class RecordLoadError(Exception):
    """Raised when a record file cannot be read or decoded."""


@dataclass
class User:
    id: str
    name: str
    joined_groups: list[str] = field(default_factory=list)


@dataclass
class Group:
    id: str
    name: str
    members: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass
class Event:
    """A scheduled group event. The creator is usually also a participant."""

    id: str
    group_id: str
    name: str
    date: Optional[datetime]
    created_by: str
    participants: list[str] = field(default_factory=list)


@dataclass
class Split:
    """One participant's share of a split-type transaction."""

    user_id: str
    paid: float = 0.0
    owes: float = 0.0
    net: float = 0.0  # paid - owes


@dataclass
class Transaction:
    """A single money movement inside a group.

    ``type`` selects the variant:
      - ``event``: ``from_user`` fronted ``amount`` / ``total_amount`` for ``participants``
      - ``split``: ``from_user`` paid ``total_amount``, shares listed in ``splits``
      - ``p2p``:   ``from_user`` paid ``to_user`` directly
    """

    id: str
    group_id: str
    type: str
    from_user: str
    total_amount: float = 0.0
    created_at: Optional[datetime] = None
    event_id: Optional[str] = None
    participants: list[str] = field(default_factory=list)
    amount: Optional[float] = None
    splits: Optional[list[Split]] = None
    to_user: Optional[str] = None
    note: str = ""

    @property
    def is_payer_fronted(self) -> bool:
        """True for split/event transactions, where the payer covers the group."""
        return self.type in ("split", "event")

    def split_for(self, user_id: str) -> Optional[Split]:
        """Return the user's split, or None when absent or not a split txn."""
        if self.type != "split" or not self.splits:
            return None
        for split in self.splits:
            if split.user_id == user_id:
                return split
        return None


@dataclass
class RecordSet:
    """The four materialized collections the engine reads from."""

    users: list[User] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def get_group(self, group_id: str) -> Optional[Group]:
        return next((g for g in self.groups if g.id == group_id), None)

    def group_data(self, group_id: str) -> Optional[dict[str, Any]]:
        """Collect a group with its events, transactions and member users.

        Returns None for an unknown group. Member ids with no matching user
        are skipped.
        """
        group = self.get_group(group_id)
        if group is None:
            logger.warning("Group %s not found in record set", group_id)
            return None

        members: list[User] = []
        for member_id in group.members:
            user = self.get_user(member_id)
            if user is None:
                logger.warning("Group %s lists unknown member %s", group_id, member_id)
                continue
            members.append(user)

        return {
            "group": group,
            "events": [e for e in self.events if e.group_id == group_id],
            "transactions": [t for t in self.transactions if t.group_id == group_id],
            "members": members,
        }


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 / Postgres-style string or datetime into an aware UTC datetime.

    Naive values are taken as UTC. Anything unparseable returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            return None
        ts = pd.to_datetime(text, utc=True, errors="coerce")
        if pd.isna(ts):
            logger.debug("Unparseable timestamp %r", value)
            return None
        dt = ts.to_pydatetime()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_amount(value: Any) -> float:
    """Coerce a numeric-ish value to float; blanks and junk become 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = str(value).strip().replace(",", "").lstrip("$")
    if not cleaned:
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _first(row: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-None value among *keys*."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return default


def _id_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(v) for v in value if v is not None]


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def user_from_row(row: dict[str, Any]) -> User:
    return User(
        id=str(row["id"]),
        name=str(_first(row, "name", default="")),
        joined_groups=_id_list(_first(row, "joinedGroups", "joined_groups")),
    )


def group_from_row(row: dict[str, Any]) -> Group:
    members = _first(row, "members")
    if members is None:
        # Database shape: group_members(user_id)
        members = [m.get("user_id") for m in row.get("group_members") or []]
    return Group(
        id=str(row["id"]),
        name=str(_first(row, "name", default="")),
        members=_id_list(members),
        created_at=parse_timestamp(_first(row, "createdAt", "created_at")),
    )


def event_from_row(row: dict[str, Any]) -> Event:
    participants = _first(row, "participants")
    if participants is None:
        participants = [p.get("user_id") for p in row.get("event_participants") or []]
    return Event(
        id=str(row["id"]),
        group_id=str(_first(row, "groupId", "group_id", default="")),
        name=str(_first(row, "name", default="")),
        date=parse_timestamp(row.get("date")),
        created_by=str(_first(row, "createdBy", "created_by", default="")),
        participants=_id_list(participants),
    )


def split_from_row(row: dict[str, Any]) -> Split:
    paid = parse_amount(row.get("paid"))
    owes = parse_amount(row.get("owes"))
    net = row.get("net")
    return Split(
        user_id=str(_first(row, "userId", "user_id", default="")),
        paid=paid,
        owes=owes,
        net=parse_amount(net) if net is not None else paid - owes,
    )


def transaction_from_row(row: dict[str, Any]) -> Transaction:
    tx_type = str(_first(row, "type", default="")).strip().lower()
    if tx_type not in TRANSACTION_TYPES:
        logger.warning("Transaction %s has unknown type %r", row.get("id"), tx_type)

    raw_splits = row.get("splits")
    splits = None
    if raw_splits is not None:
        splits = [split_from_row(s) for s in raw_splits if isinstance(s, dict)]

    amount = row.get("amount")
    event_id = _first(row, "eventId", "event_id")
    to_user = _first(row, "to", "to_user")

    return Transaction(
        id=str(row["id"]),
        group_id=str(_first(row, "groupId", "group_id", default="")),
        type=tx_type,
        from_user=str(_first(row, "from", "from_user", default="")),
        total_amount=parse_amount(_first(row, "totalAmount", "total_amount")),
        created_at=parse_timestamp(_first(row, "createdAt", "created_at")),
        event_id=str(event_id) if event_id is not None else None,
        participants=_id_list(row.get("participants")),
        amount=parse_amount(amount) if amount is not None else None,
        splits=splits,
        to_user=str(to_user) if to_user is not None else None,
        note=str(_first(row, "note", default="")),
    )


def records_from_dict(doc: dict[str, Any]) -> RecordSet:
    """Build a RecordSet from a ``{"users", "groups", "events", "transactions"}`` doc."""
    return RecordSet(
        users=[user_from_row(r) for r in doc.get("users") or []],
        groups=[group_from_row(r) for r in doc.get("groups") or []],
        events=[event_from_row(r) for r in doc.get("events") or []],
        transactions=[transaction_from_row(r) for r in doc.get("transactions") or []],
    )


def load_records(path: str | Path) -> RecordSet:
    """Load a JSON record file into a RecordSet."""
    p = Path(path)
    if not p.exists():
        raise RecordLoadError(f"Record file not found: {p}")
    try:
        with open(p, encoding="utf-8") as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordLoadError(f"Invalid JSON in {p}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise RecordLoadError(f"Cannot read record file {p}: {e}") from e
    if not isinstance(doc, dict):
        raise RecordLoadError(f"Expected a JSON object in {p}, got {type(doc).__name__}")

    try:
        records = records_from_dict(doc)
    except (KeyError, TypeError, AttributeError) as e:
        raise RecordLoadError(f"Malformed record in {p}: {e!r}") from e
    logger.info(
        "Loaded %d users, %d groups, %d events, %d transactions from %s",
        len(records.users), len(records.groups), len(records.events),
        len(records.transactions), p.name,
    )
    return records
