"""Record integrity audit: reports invariant violations without raising.

The analyzers tolerate broken data (missing splits count as zero, bad
dates are skipped). This module surfaces what was tolerated so callers
can decide whether to trust a result:

- transaction references an unknown group
- transaction references an unknown event, or one in another group
- split-type totals do not reconcile (sum(paid) vs total, sum(net) vs 0)
- event / transaction timestamps that could not be parsed
"""

from __future__ import annotations

import logging
from typing import Any

from persona_mirror.records import RecordSet

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01


def _issue(kind: str, record_id: str, detail: str) -> dict[str, Any]:
    return {"kind": kind, "record_id": record_id, "detail": detail}


def audit_records(records: RecordSet, tolerance: float = DEFAULT_TOLERANCE) -> list[dict[str, Any]]:
    """Scan a RecordSet and return one issue dict per violation found."""
    issues: list[dict[str, Any]] = []
    group_ids = {g.id for g in records.groups}
    event_groups = {e.id: e.group_id for e in records.events}

    for event in records.events:
        if event.date is None:
            issues.append(_issue("event_date_invalid", event.id, "date missing or unparseable"))
        if event.group_id not in group_ids:
            issues.append(_issue("unknown_group", event.id, f"group {event.group_id!r} not found"))

    for tx in records.transactions:
        if tx.group_id not in group_ids:
            issues.append(_issue("unknown_group", tx.id, f"group {tx.group_id!r} not found"))

        if tx.event_id is not None:
            owner = event_groups.get(tx.event_id)
            if owner is None:
                issues.append(_issue("unknown_event", tx.id, f"event {tx.event_id!r} not found"))
            elif owner != tx.group_id:
                issues.append(_issue(
                    "event_group_mismatch", tx.id,
                    f"event {tx.event_id!r} belongs to {owner!r}, transaction to {tx.group_id!r}",
                ))

        if tx.created_at is None:
            issues.append(_issue("transaction_date_invalid", tx.id, "created_at missing or unparseable"))

        if tx.type == "split":
            if not tx.splits:
                issues.append(_issue("split_missing", tx.id, "split transaction without splits"))
                continue
            paid = sum(s.paid for s in tx.splits)
            net = sum(s.net for s in tx.splits)
            if abs(paid - tx.total_amount) > tolerance:
                issues.append(_issue(
                    "split_paid_mismatch", tx.id,
                    f"sum(paid)={paid:.2f} vs total_amount={tx.total_amount:.2f}",
                ))
            if abs(net) > tolerance:
                issues.append(_issue("split_net_nonzero", tx.id, f"sum(net)={net:.2f}"))

    for issue in issues:
        logger.warning("[AUDIT] %s %s: %s", issue["kind"], issue["record_id"], issue["detail"])
    if not issues:
        logger.info("[AUDIT] %d events, %d transactions: no issues",
                    len(records.events), len(records.transactions))
    return issues
