"""
Grouping of flight status changes into notifications.

Changes are grouped by a caller-supplied key function: one group per airline,
or a single combined group for every change in the run.
"""

from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from models.flight import Change, FlightType
from models.types import AirlineCode

# Group key for changes whose airline code could not be determined
UNKNOWN_AIRLINE = "unknown"

# Group key used when all changes are sent as one notification
COMBINED_GROUP = "all"

GroupKeyFunc = Callable[[Change], str]


class NotificationCategory(str, Enum):
    """Presentation category of a notification (drives title and sound)."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"


def group_by_airline(change: Change) -> str:
    """Group key: the change's airline code, or the unknown sentinel."""
    return change.airline_code or UNKNOWN_AIRLINE


def combine_all(change: Change) -> str:
    """Group key: every change lands in the same group."""
    return COMBINED_GROUP


class ChangeGroup(BaseModel):
    """An ordered group of changes that will become one notification."""

    key: str
    changes: List[Change] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.changes)

    @property
    def first_change(self) -> Change:
        return self.changes[0]

    @property
    def airline_codes(self) -> List[AirlineCode]:
        """Distinct known airline codes in first-seen order."""
        codes: List[AirlineCode] = []
        for change in self.changes:
            if change.airline_code and change.airline_code not in codes:
                codes.append(change.airline_code)
        return codes

    @property
    def departure_count(self) -> int:
        return sum(1 for c in self.changes if c.type == FlightType.DEPARTURE)

    @property
    def is_mostly_departure(self) -> bool:
        # Ties count as departure-dominant
        return self.departure_count >= self.count / 2

    @property
    def category(self) -> NotificationCategory:
        if self.is_mostly_departure:
            return NotificationCategory.DEPARTURE
        return NotificationCategory.ARRIVAL

    def summary_message(
        self, summarize: Optional[Callable[["ChangeGroup"], str]] = None
    ) -> str:
        """
        Message body for the group.

        A single change is used verbatim. For more than one change the
        caller's summarize policy is applied; without one, the first message
        is returned.
        """
        if self.count == 1 or summarize is None:
            return self.first_change.message
        return summarize(self)


def aggregate_changes(
    changes: Iterable[Change], key: GroupKeyFunc = group_by_airline
) -> List[ChangeGroup]:
    """
    Group changes using the given key function.

    Args:
        changes: Changes as produced by diff_snapshots
        key: group_by_airline (one group per airline) or combine_all

    Returns:
        Non-empty groups in first-seen order; changes keep their order within a group
    """
    groups: Dict[str, ChangeGroup] = {}
    for change in changes:
        group_key = key(change) or UNKNOWN_AIRLINE
        if group_key not in groups:
            groups[group_key] = ChangeGroup(key=group_key)
        groups[group_key].changes.append(change)

    return list(groups.values())
