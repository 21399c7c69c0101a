"""
Change detection between two flight board snapshots.

Compares the previous and current snapshot and produces the status changes
that should be announced to subscribers.
"""

import re
from typing import Any, List, Mapping, Optional

from models.flight import Change, FlightRecord, Snapshot, coerce_snapshot

# HTML non-breaking space, as an entity or as the decoded character
_NBSP_PATTERN = re.compile(r"&nbsp;|&#160;|&#xa0;|\xa0", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_status(status: Optional[str]) -> str:
    """
    Collapse whitespace and non-breaking spaces in a status string.

    Runs of whitespace (including &nbsp;) become a single ASCII space and the
    result is trimmed. None is treated as an empty string.
    """
    if not status:
        return ""
    text = _NBSP_PATTERN.sub(" ", str(status))
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def render_change_message(record: FlightRecord, new_status: str) -> str:
    """Human-readable text for a single status change."""
    return f"{record.flight_number} status: {new_status}"


def diff_snapshots(
    previous: Optional[Mapping[str, Any]], current: Mapping[str, Any]
) -> List[Change]:
    """
    Find flights whose status changed between two snapshots.

    A change is emitted only when the flight exists in both snapshots, its
    normalized status differs, and the new normalized status is not empty.
    New flights and flights that disappeared are ignored.

    Args:
        previous: Snapshot from the last run (None on the first run)
        current: Snapshot from this run

    Returns:
        Changes in the iteration order of the current snapshot

    Raises:
        SnapshotValidationError: If either snapshot is not a mapping of records
    """
    previous_snapshot: Snapshot = coerce_snapshot(previous)
    current_snapshot: Snapshot = coerce_snapshot(current)

    changes: List[Change] = []
    for flight_id, new_flight in current_snapshot.items():
        old_flight = previous_snapshot.get(flight_id)
        if old_flight is None:
            continue

        old_status = normalize_status(old_flight.status)
        new_status = normalize_status(new_flight.status)

        if not new_status or old_status == new_status:
            continue

        changes.append(
            Change(
                flight_id=flight_id,
                flight_number=new_flight.flight_number,
                airline_code=new_flight.airline_code,
                type=new_flight.type,
                old_status=old_status,
                new_status=new_status,
                message=render_change_message(new_flight, new_status),
            )
        )

    return changes
