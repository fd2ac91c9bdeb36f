"""Tests for the individual profile analyzer."""

from __future__ import annotations

import logging

import pytest

from persona_mirror.analyzers import analyze_user_profile, compute_user_stats
from persona_mirror.features import round_half_up


class TestRoundHalfUp:

    @pytest.mark.parametrize("value, digits, expected", [
        (20.5, 0, 21),
        (21.5, 0, 22),
        (18.57, 0, 19),
        (0.375, 2, 0.38),
        (3.866, 1, 3.9),
        (42.1875, 2, 42.19),
    ])
    def test_values(self, value, digits, expected):
        assert round_half_up(value, digits) == pytest.approx(expected)


class TestSampleProfiles:

    def test_alice(self, sample_records):
        profile = analyze_user_profile("user-1", sample_records.transactions, sample_records.events)
        assert profile["type"] == "planner"
        assert profile["emoji"] == "📅"
        assert profile["description"].startswith("The Planner")
        assert profile["stats"] == {
            "events_attended": 7,
            "total_spent": 337.5,
            "avg_event_cost": pytest.approx(48.21),
            "features": {
                "avg_group_size": pytest.approx(3.3),
                "events_per_month": pytest.approx(6.8),
                "avg_transaction_amount": pytest.approx(42.19),
                "avg_settlement_hours": 48,
                "most_active_hour": 19,
                "generosity_score": pytest.approx(0.38),
            },
        }

    def test_bob(self, sample_records):
        profile = analyze_user_profile("user-2", sample_records.transactions, sample_records.events)
        assert profile["type"] == "generousWhale"
        stats = profile["stats"]
        assert stats["events_attended"] == 4
        assert stats["total_spent"] == 320.0
        assert stats["avg_event_cost"] == 80.0
        # counts splits Bob is in without paying
        assert stats["features"]["avg_transaction_amount"] == 80.0
        assert stats["features"]["generosity_score"] == 0.25
        assert stats["features"]["avg_settlement_hours"] == 120
        # mean hour 20.5 rounds up
        assert stats["features"]["most_active_hour"] == 21
        assert stats["features"]["events_per_month"] == pytest.approx(3.9)

    def test_eve_is_ghost(self, sample_records):
        profile = analyze_user_profile("user-5", sample_records.transactions, sample_records.events)
        assert profile["type"] == "ghost"
        assert profile["stats"]["total_spent"] == 0.0
        assert profile["stats"]["features"]["generosity_score"] == 0.0

    def test_groups_passthrough(self, sample_records):
        with_groups = analyze_user_profile(
            "user-3", sample_records.transactions, sample_records.events, sample_records.groups,
        )
        without = analyze_user_profile("user-3", sample_records.transactions, sample_records.events)
        assert with_groups == without
        assert with_groups["type"] == "generousWhale"


class TestEmptyProfile:

    def test_defaults(self):
        profile = analyze_user_profile("nobody", [], [])
        assert profile["type"] == "ghost"
        assert profile["stats"] == {
            "events_attended": 0,
            "total_spent": 0.0,
            "avg_event_cost": 0.0,
            "features": {
                "avg_group_size": 0.0,
                "events_per_month": 0.0,
                "avg_transaction_amount": 0.0,
                "avg_settlement_hours": 120,
                "most_active_hour": 18,
                "generosity_score": 0.0,
            },
        }

    def test_unknown_user_in_sample(self, sample_records):
        stats = compute_user_stats("user-99", sample_records.transactions, sample_records.events)
        assert stats["events_attended"] == 0
        assert stats["features"]["most_active_hour"] == 18


class TestProfileShape:

    def test_night_owl_history(self, night_owl_history):
        user, txns, events = night_owl_history
        profile = analyze_user_profile(user, txns, events)
        assert profile["type"] == "generousWhale"
        assert profile["stats"]["total_spent"] == 150.0
        assert profile["stats"]["avg_event_cost"] == 75.0
        assert profile["stats"]["features"]["most_active_hour"] == 22
        assert profile["stats"]["features"]["avg_settlement_hours"] == 48
        assert profile["stats"]["features"]["generosity_score"] == pytest.approx(0.67)

    def test_logs_profile_line(self, sample_records, caplog):
        with caplog.at_level(logging.INFO, logger="persona_mirror.analyzers.profile_analyzer"):
            analyze_user_profile("user-1", sample_records.transactions, sample_records.events)
        assert "[PROFILE] user-1 -> planner" in caplog.text
