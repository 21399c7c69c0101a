"""Pydantic models for data validation and type checking."""

from models.audience import (
    AND,
    OR,
    FilterExpression,
    FilterOperator,
    TagCondition,
    filters_to_wire,
)
from models.flight import (
    Change,
    FlightRecord,
    FlightType,
    Snapshot,
    SnapshotValidationError,
    coerce_snapshot,
    snapshot_to_json,
)
from models.notification import DispatchStats, PushNotification

__all__ = [
    "FlightRecord",
    "FlightType",
    "Snapshot",
    "SnapshotValidationError",
    "Change",
    "coerce_snapshot",
    "snapshot_to_json",
    "TagCondition",
    "FilterOperator",
    "FilterExpression",
    "OR",
    "AND",
    "filters_to_wire",
    "PushNotification",
    "DispatchStats",
]
