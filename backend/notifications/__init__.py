"""
Notification system for the flight status notifier.

This module handles:
- Detecting status changes between two flight board snapshots
- Grouping changes per airline (or into one combined notification)
- Compiling push audience filters from subscriber tags
- Sending push notifications via OneSignal
"""

from .snapshot_differ import diff_snapshots, normalize_status
from .change_aggregator import aggregate_changes, combine_all, group_by_airline
from .audience_filter import build_audience_filter, evaluate_filter
from .push_sender import send_push_notification
from .flight_change_processor import build_notifications, dispatch_notifications

__all__ = [
    'diff_snapshots',
    'normalize_status',
    'aggregate_changes',
    'group_by_airline',
    'combine_all',
    'build_audience_filter',
    'evaluate_filter',
    'send_push_notification',
    'build_notifications',
    'dispatch_notifications',
]
