"""Shared fixtures: the bundled sample records plus small record builders."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from persona_mirror import settings
from persona_mirror.records import Event, Split, Transaction, User, load_records

BASE_DATE = datetime(2026, 1, 5, 19, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def sample_records():
    return load_records(settings.SAMPLE_RECORDS_PATH)


@pytest.fixture
def make_event():
    counter = {"n": 0}

    def _make(
        participants: list[str],
        created_by: str = "someone",
        date: datetime | None = BASE_DATE,
        group_id: str = "g1",
    ) -> Event:
        counter["n"] += 1
        return Event(
            id=f"ev-{counter['n']}",
            group_id=group_id,
            name=f"Event {counter['n']}",
            date=date,
            created_by=created_by,
            participants=list(participants),
        )

    return _make


@pytest.fixture
def make_tx():
    counter = {"n": 0}

    def _make(
        tx_type: str,
        from_user: str,
        total: float,
        splits: list[tuple[str, float, float]] | None = None,
        to_user: str | None = None,
        group_id: str = "g1",
        event_id: str | None = None,
    ) -> Transaction:
        counter["n"] += 1
        split_objs = None
        if splits is not None:
            split_objs = [Split(user_id=u, paid=p, owes=o, net=p - o) for u, p, o in splits]
        return Transaction(
            id=f"tx-{counter['n']}",
            group_id=group_id,
            type=tx_type,
            from_user=from_user,
            total_amount=total,
            created_at=BASE_DATE,
            event_id=event_id,
            splits=split_objs,
            to_user=to_user,
        )

    return _make


@pytest.fixture
def night_owl_history(make_event, make_tx):
    """A user who created 1 of 2 attended events, spent $150 over 3
    transactions (one self-initiated p2p) and goes out at 21:00 and 23:00."""
    user = "zoe"
    events = [
        make_event([user, "a", "b", "c"], created_by=user,
                   date=datetime(2026, 1, 10, 21, 0, tzinfo=timezone.utc)),
        make_event([user, "a", "b", "d"], created_by="a",
                   date=datetime(2026, 1, 20, 23, 0, tzinfo=timezone.utc)),
    ]
    transactions = [
        make_tx("split", user, 60.0, splits=[(user, 60.0, 15.0), ("a", 0.0, 15.0),
                                              ("b", 0.0, 15.0), ("c", 0.0, 15.0)]),
        make_tx("event", user, 60.0),
        make_tx("p2p", user, 30.0, to_user="a"),
    ]
    return user, transactions, events


def spaced_dates(count: int, span: timedelta, start: datetime = BASE_DATE) -> list[datetime]:
    """*count* dates evenly covering *span* (first and last inclusive)."""
    if count == 1:
        return [start]
    step = span / (count - 1)
    return [start + step * i for i in range(count)]


@pytest.fixture
def member():
    def _make(user_id: str, name: str | None = None) -> User:
        return User(id=user_id, name=name or user_id.title())

    return _make
