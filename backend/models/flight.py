"""Pydantic models for flight board data."""

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import AirlineCode, DateString, FlightID, StatusText


class SnapshotValidationError(ValueError):
    """Raised when a snapshot does not have the expected mapping shape."""


class FlightType(str, Enum):
    """Direction of a flight relative to the airport."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"


# Query values used by the airport's flight board pages
_FLIGHT_TYPE_ALIASES = {
    "dprtr": FlightType.DEPARTURE,
    "arivl": FlightType.ARRIVAL,
}


class FlightRecord(BaseModel):
    """One scheduled flight occurrence as seen on the flight board."""

    model_config = ConfigDict(populate_by_name=True)

    id: FlightID = FlightID("")
    flight_number: str = Field("", alias="flightNumber")
    airline_code: Optional[AirlineCode] = Field(None, alias="airlineCode")
    status: StatusText = ""
    actual_time: str = Field("", alias="actualTime")
    type: FlightType = FlightType.DEPARTURE

    @field_validator("id", "flight_number", "status", "actual_time", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("airline_code", mode="before")
    @classmethod
    def _normalize_airline_code(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        code = str(value).strip().upper()
        return code or None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, FlightType):
            return value
        key = str(value or "").strip().lower()
        if key in _FLIGHT_TYPE_ALIASES:
            return _FLIGHT_TYPE_ALIASES[key]
        if key == FlightType.ARRIVAL.value:
            return FlightType.ARRIVAL
        # Unknown or missing direction falls back to departure
        return FlightType.DEPARTURE

    @staticmethod
    def make_id(flight_number: str, date: DateString) -> FlightID:
        """Build the stable identity of a flight occurrence."""
        return FlightID(f"{flight_number}-{date}")


Snapshot = dict[FlightID, FlightRecord]


class Change(BaseModel):
    """A status transition for one flight occurrence between two snapshots."""

    flight_id: FlightID
    flight_number: str
    airline_code: Optional[AirlineCode] = None
    type: FlightType
    old_status: StatusText
    new_status: StatusText
    message: str


def coerce_snapshot(raw: Optional[Mapping[str, Any]]) -> Snapshot:
    """
    Build a Snapshot from a JSON-like mapping keyed by flight id.

    Args:
        raw: Mapping of id -> record dict (or FlightRecord). None means there is
             no previous snapshot (first run).

    Returns:
        Snapshot keyed by flight id, preserving the input order

    Raises:
        SnapshotValidationError: If the snapshot or one of its records is not a mapping
    """
    if raw is None:
        return {}

    if not isinstance(raw, Mapping):
        raise SnapshotValidationError(
            f"Snapshot must be a mapping of flight id to record, got {type(raw).__name__}"
        )

    snapshot: Snapshot = {}
    for flight_id, record in raw.items():
        if isinstance(record, FlightRecord):
            snapshot[FlightID(flight_id)] = record.model_copy(update={"id": flight_id})
            continue

        if not isinstance(record, Mapping):
            raise SnapshotValidationError(
                f"Record {flight_id!r} must be a mapping, got {type(record).__name__}"
            )

        snapshot[FlightID(flight_id)] = FlightRecord.model_validate(
            {**record, "id": flight_id}
        )

    return snapshot


def snapshot_to_json(snapshot: Snapshot) -> dict[str, dict[str, Any]]:
    """Serialize a Snapshot into the persisted JSON object keyed by id."""
    return {
        flight_id: record.model_dump(mode="json", by_alias=True, exclude={"id"})
        for flight_id, record in snapshot.items()
    }
