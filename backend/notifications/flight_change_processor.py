"""
Flight change processing: snapshots in, push notifications out.

Ties together change detection, grouping, audience filters and dispatch.
Each notification is sent independently so one failed send does not stop the
rest of the run.
"""

import time
from typing import Any, Callable, Dict, List, Mapping, Optional

from config.airlines import DEFAULT_CATALOG, AirlineCatalog
from models.notification import DispatchStats, PushNotification
from notifications.change_aggregator import (
    GroupKeyFunc,
    aggregate_changes,
    combine_all,
    group_by_airline,
)
from notifications.error_logger import log_notification_error
from notifications.message_builder import build_push_notifications
from notifications.snapshot_differ import diff_snapshots

GROUPING_KEYS: Dict[str, GroupKeyFunc] = {
    "per_airline": group_by_airline,
    "combined": combine_all,
}

SendFunc = Callable[[PushNotification], Dict[str, Any]]


def build_notifications(
    previous: Optional[Mapping[str, Any]],
    current: Mapping[str, Any],
    catalog: AirlineCatalog = DEFAULT_CATALOG,
    grouping: str = "per_airline",
    presentation: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> List[PushNotification]:
    """
    Compute the notifications for a pair of snapshots.

    Args:
        previous: Last run's snapshot (None on the first run)
        current: This run's snapshot
        catalog: Airline lookup (known tags, display names)
        grouping: "per_airline" or "combined"
        presentation: Optional category -> title/sound mapping

    Returns:
        One notification per change group (empty if nothing changed)

    Raises:
        ValueError: If grouping is not a known mode
        SnapshotValidationError: If a snapshot is not a mapping of records
    """
    if grouping not in GROUPING_KEYS:
        raise ValueError(
            f"Unknown grouping mode {grouping!r}, expected one of {', '.join(GROUPING_KEYS)}"
        )

    changes = diff_snapshots(previous, current)
    if not changes:
        return []

    groups = aggregate_changes(changes, key=GROUPING_KEYS[grouping])
    return build_push_notifications(groups, catalog, presentation)


def dispatch_notifications(
    notifications: List[PushNotification],
    send: SendFunc,
    dry_run: bool = False,
    delay_seconds: float = 0.0,
) -> DispatchStats:
    """
    Send notifications one at a time, isolating failures.

    Args:
        notifications: Compiled notifications
        send: Callable performing the actual send, returning a result dict
              with 'success' and optionally 'error' / 'notification_id'
        dry_run: If True, print what would be sent instead of sending
        delay_seconds: Pause between consecutive real sends

    Returns:
        DispatchStats with sent/failed/skipped counts
    """
    stats = DispatchStats()
    attempted = 0

    for notification in notifications:
        print(
            f"→ Notifying group {notification.group_key} "
            f"({notification.change_count} change(s)): {notification.body}"
        )

        if dry_run:
            print(f"  [DRY RUN] Would send '{notification.title}' to {len(notification.filters)} filter token(s)")
            stats.skipped += 1
            continue

        # Pause only between real sends
        if attempted and delay_seconds:
            time.sleep(delay_seconds)
        attempted += 1

        try:
            result = send(notification)
        except Exception as e:
            result = {"success": False, "error": f"{type(e).__name__}: {e}"}

        if result.get("success"):
            print(f"  ✓ Sent notification {result.get('notification_id')}")
            stats.sent += 1
            continue

        error_msg = str(result.get("error", "Unknown error"))
        print(f"  ✗ Failed to send notification for {notification.group_key}: {error_msg}")
        stats.failed += 1

        try:
            error_file = log_notification_error(
                error_type="sending",
                error_message=error_msg,
                context={
                    "group_key": notification.group_key,
                    "airline_codes": notification.airline_codes,
                    "change_count": notification.change_count,
                    "title": notification.title,
                    "body": notification.body,
                    "filters": notification.wire_filters(),
                },
            )
        except OSError as e:
            print(f"    ⚠ Could not write error report: {e}")
        else:
            print(f"    Error details logged to: {error_file}")

    return stats
