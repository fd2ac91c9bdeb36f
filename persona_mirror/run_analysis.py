#!/usr/bin/env python3
"""
Persona analysis demo: classify every user (or one group) in a record file.

Usage:
  persona-mirror                                   # bundled sample data
  persona-mirror --data records.json --user user-1 # one user
  persona-mirror --group group-1                   # group persona
  persona-mirror --group group-1 --json            # raw result dicts
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from persona_mirror import settings
from persona_mirror.analyzers import analyze_group_persona, analyze_user_profile
from persona_mirror.features import extract_user_features, round_half_up
from persona_mirror.integrity import audit_records
from persona_mirror.matcher import match_persona
from persona_mirror.records import RecordLoadError, RecordSet, load_records

logger = logging.getLogger(__name__)


def _print_user(user_id: str, name: str, records: RecordSet) -> None:
    persona = extract_user_features(user_id, records.transactions, records.events, records.groups)
    match = match_persona(persona)
    profile = analyze_user_profile(user_id, records.transactions, records.events, records.groups)
    stats = profile["stats"]
    feats = stats["features"]

    print(f"\n  {name} ({user_id})")
    print(f"  {'-' * 66}")
    print(f"\n  {profile['emoji']} {profile['description']}")
    print(f"  Match Confidence: {int(round_half_up(match['similarity'] * 100))}%")

    print("\n  Personality Traits:")
    for trait in profile["traits"]:
        print(f"    - {trait}")

    print("\n  Activity Stats:")
    print(f"    Events Attended:    {stats['events_attended']}")
    print(f"    Total Spent:        ${stats['total_spent']:,.2f}")
    print(f"    Average per Event:  ${stats['avg_event_cost']:,.2f}")

    print("\n  Behavioral Features:")
    print(f"    Preferred Group Size: {feats['avg_group_size']} people ({persona.group_size})")
    print(f"    Social Style:         {persona.socialness}")
    print(f"    Budget Level:         {persona.budget_level} (${feats['avg_transaction_amount']:.2f} avg)")
    print(f"    Generosity:           {persona.generosity} "
          f"({feats['generosity_score'] * 100:.0f}% pays for others)")
    print(f"    Payment Speed:        {persona.payment_speed} (~{feats['avg_settlement_hours']}h to settle)")
    print(f"    Activity Level:       {persona.activity_level} ({feats['events_per_month']:.1f} events/month)")
    print(f"    Time Preference:      {persona.time_preference} "
          f"(most active ~{feats['most_active_hour']}:00)")

    print("\n  Top 3 Persona Matches:")
    for idx, m in enumerate(match["matches"], start=1):
        print(f"    {idx}. {m['key']}: {int(round_half_up(m['similarity'] * 100))}% match")


def _print_group(result: dict[str, Any], group_name: str) -> None:
    dominant = result["dominant_persona"]
    gs = result["group_stats"]

    print(f"\n  {group_name}")
    print(f"  {'-' * 66}")
    print(f"\n  {dominant['emoji']} {dominant['description']}")

    print("\n  Group Traits:")
    for trait in result["group_traits"]:
        print(f"    - {trait}")

    print("\n  Persona Distribution:")
    for d in result["persona_distribution"]:
        print(f"    {d['emoji']} {d['persona_key']:<16} {d['count']:>3}  ({d['percentage']}%)")

    print("\n  Group Stats:")
    print(f"    Members:            {gs['total_members']}")
    print(f"    Events:             {gs['total_events']}")
    print(f"    Total Spent:        ${gs['total_spent']:,.2f}")
    print(f"    Average per Event:  ${gs['avg_event_cost']:,.2f}")
    print(f"    Average Group Size: {gs['avg_group_size']}")
    print(f"    Most Active Time:   ~{gs['most_active_time']}:00")
    print(f"    Generosity:         {gs['group_generosity'] * 100:.0f}% payer-fronted")


def _run_group(args: argparse.Namespace, records: RecordSet) -> int:
    data = records.group_data(args.group)
    if data is None:
        print(f"ERROR: Unknown group: {args.group}", file=sys.stderr)
        return 1

    result = analyze_group_persona(
        args.group, data["members"], records.transactions, records.events, records.groups,
    )
    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        _print_group(result, data["group"].name)
    return 0


def _run_users(args: argparse.Namespace, records: RecordSet) -> int:
    users = records.users
    if args.user:
        wanted = set(args.user)
        users = [u for u in users if u.id in wanted]
        missing = wanted - {u.id for u in users}
        if missing:
            print(f"ERROR: Unknown user(s): {', '.join(sorted(missing))}", file=sys.stderr)
            return 1

    if args.json:
        results = []
        for user in users:
            persona = extract_user_features(user.id, records.transactions, records.events, records.groups)
            results.append({
                "user_id": user.id,
                "persona": persona.as_dict(),
                "match": match_persona(persona),
                "profile": analyze_user_profile(
                    user.id, records.transactions, records.events, records.groups,
                ),
            })
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return 0

    for user in users:
        _print_user(user.id, user.name, records)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify users and groups into behavioral personas.",
    )
    parser.add_argument(
        "--data", type=str, default=str(settings.SAMPLE_RECORDS_PATH),
        help="JSON record file with users/groups/events/transactions (default: bundled sample)",
    )
    parser.add_argument(
        "--user", action="append", default=None,
        help="Only analyze this user id (repeatable)",
    )
    parser.add_argument(
        "--group", type=str, default=None,
        help="Analyze the group persona for this group id instead of users",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print raw result dicts as JSON",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Debug logging and a record integrity audit",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings.configure_logging("DEBUG" if args.verbose else None)

    try:
        records = load_records(args.data)
    except RecordLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        issues = audit_records(records)
        logger.info("Integrity audit found %d issue(s)", len(issues))

    if not args.json:
        print("=" * 70)
        print("  Persona Analysis")
        print(f"  Data: {args.data}")
        print("=" * 70)

    status = _run_group(args, records) if args.group else _run_users(args, records)

    if not args.json and status == 0:
        print("\n" + "=" * 70)
    return status


if __name__ == "__main__":
    sys.exit(main())
