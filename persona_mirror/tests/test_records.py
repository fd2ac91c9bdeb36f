"""Tests for record parsing and loading."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import pytest

from persona_mirror.records import (
    RecordLoadError,
    event_from_row,
    group_from_row,
    load_records,
    parse_amount,
    parse_timestamp,
    records_from_dict,
    split_from_row,
    transaction_from_row,
)


class TestParseTimestamp:

    def test_zulu_suffix(self):
        assert parse_timestamp("2026-01-05T21:00:00Z") == datetime(2026, 1, 5, 21, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        dt = parse_timestamp("2026-01-05T21:00:00+02:00")
        assert dt.hour == 19
        assert dt.utcoffset().total_seconds() == 0

    def test_postgres_style_offset(self):
        assert parse_timestamp("2026-01-05 21:00:00+00") == datetime(2026, 1, 5, 21, tzinfo=timezone.utc)

    def test_five_digit_fraction(self):
        dt = parse_timestamp("2026-01-05T21:00:00.12345Z")
        assert dt == datetime(2026, 1, 5, 21, 0, 0, 123450, tzinfo=timezone.utc)

    def test_naive_taken_as_utc(self):
        assert parse_timestamp("2026-01-05T08:30:00").tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        naive = datetime(2026, 1, 5, 8)
        assert parse_timestamp(naive) == datetime(2026, 1, 5, 8, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2026-13-45"])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


class TestParseAmount:

    @pytest.mark.parametrize("value, expected", [
        (42, 42.0),
        (42.5, 42.5),
        ("42.5", 42.5),
        ("$1,250.00", 1250.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (True, 0.0),
    ])
    def test_values(self, value, expected):
        assert parse_amount(value) == expected


class TestRowMapping:

    def test_camel_case_transaction(self):
        tx = transaction_from_row({
            "id": "tx-1", "groupId": "g", "type": "P2P", "from": "a", "to": "b",
            "totalAmount": "30", "eventId": "e", "createdAt": "2026-01-06T10:00:00Z",
        })
        assert tx.type == "p2p"
        assert tx.from_user == "a"
        assert tx.to_user == "b"
        assert tx.total_amount == 30.0
        assert tx.event_id == "e"
        assert tx.splits is None
        assert not tx.is_payer_fronted

    def test_snake_case_transaction(self):
        tx = transaction_from_row({
            "id": "tx-2", "group_id": "g", "type": "split", "from_user": "a",
            "total_amount": 50, "created_at": "2026-01-06T10:00:00Z",
            "splits": [
                {"user_id": "a", "paid": 50, "owes": 25},
                {"user_id": "b", "paid": 0, "owes": 25},
            ],
        })
        assert tx.is_payer_fronted
        assert tx.split_for("a").net == 25.0
        assert tx.split_for("b").net == -25.0
        assert tx.split_for("c") is None

    def test_unknown_type_kept_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            tx = transaction_from_row({"id": "tx-3", "groupId": "g", "type": "refund", "from": "a"})
        assert tx.type == "refund"
        assert "unknown type" in caplog.text

    def test_ui_only_fields_ignored(self):
        tx = transaction_from_row({
            "id": "tx-4", "groupId": "g", "type": "split", "from": "a",
            "totalAmount": 20, "deadline": "2026-02-01T00:00:00Z",
        })
        assert not hasattr(tx, "deadline")
        assert tx.total_amount == 20.0

    def test_split_net_supplied(self):
        split = split_from_row({"userId": "a", "paid": 10, "owes": 0, "net": 7})
        assert split.net == 7.0

    def test_event_participant_rows(self):
        event = event_from_row({
            "id": "e", "group_id": "g", "name": "Dinner", "date": "2026-01-05T19:00:00Z",
            "created_by": "a",
            "event_participants": [{"user_id": "a"}, {"user_id": "b"}],
        })
        assert event.participants == ["a", "b"]
        assert event.created_by == "a"

    def test_event_bad_date(self):
        event = event_from_row({"id": "e", "groupId": "g", "date": "soon", "createdBy": "a"})
        assert event.date is None
        assert event.participants == []

    def test_group_member_rows(self):
        group = group_from_row({"id": "g", "name": "Crew", "group_members": [{"user_id": "a"}]})
        assert group.members == ["a"]


class TestRecordSet:

    def test_sample_counts(self, sample_records):
        assert len(sample_records.users) == 5
        assert len(sample_records.groups) == 2
        assert len(sample_records.events) == 7
        assert len(sample_records.transactions) == 11

    def test_group_data(self, sample_records):
        data = sample_records.group_data("group-2")
        assert data["group"].name == "Foodie Friends"
        assert [u.id for u in data["members"]] == ["user-1", "user-3", "user-4", "user-5"]
        assert {e.id for e in data["events"]} == {"event-2", "event-4", "event-6"}
        assert len(data["transactions"]) == 5

    def test_group_data_unknown(self, sample_records):
        assert sample_records.group_data("group-9") is None

    def test_group_data_skips_unknown_member(self, caplog):
        records = records_from_dict({
            "users": [{"id": "a", "name": "A"}],
            "groups": [{"id": "g", "name": "G", "members": ["a", "ghost"]}],
        })
        with caplog.at_level(logging.WARNING):
            data = records.group_data("g")
        assert [u.id for u in data["members"]] == ["a"]
        assert "unknown member ghost" in caplog.text

    def test_empty_document(self):
        records = records_from_dict({})
        assert records.users == [] and records.transactions == []


class TestLoadRecords:

    def test_missing_file(self, tmp_path):
        with pytest.raises(RecordLoadError, match="not found"):
            load_records(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RecordLoadError, match="Invalid JSON"):
            load_records(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"users": [{"id": "\xff\xfe"}]}')
        with pytest.raises(RecordLoadError, match="Cannot read"):
            load_records(path)

    def test_directory_path(self, tmp_path):
        with pytest.raises(RecordLoadError, match="Cannot read"):
            load_records(tmp_path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(RecordLoadError, match="Expected a JSON object"):
            load_records(path)

    def test_row_without_id(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text(json.dumps({"users": [{"name": "No Id"}]}), encoding="utf-8")
        with pytest.raises(RecordLoadError, match="Malformed record"):
            load_records(path)

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "ok.json"
        path.write_text(json.dumps({"users": [{"id": 7, "name": "Seven"}]}), encoding="utf-8")
        records = load_records(str(path))
        assert records.get_user("7").name == "Seven"
