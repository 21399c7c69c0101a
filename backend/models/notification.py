"""Pydantic models for outgoing push notifications."""

from pydantic import BaseModel, Field

from models.audience import FilterExpression, filters_to_wire
from models.types import AirlineCode


class PushNotification(BaseModel):
    """A compiled notification for one change group, ready to dispatch."""

    group_key: str
    airline_codes: list[AirlineCode] = Field(default_factory=list)
    filters: FilterExpression
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    sound: str | None = None
    category: str
    change_count: int = Field(..., ge=1)

    def wire_filters(self) -> list[dict[str, str]]:
        return filters_to_wire(self.filters)


class DispatchStats(BaseModel):
    """Outcome counters for one run's dispatch phase."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.sent + self.failed + self.skipped
