# This module defines the airline lookup table as module-level constants.
# Airline codes double as subscriber tag keys on the push service, so this list
# must match the tags the mobile app lets users subscribe to.

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

# Tag a subscriber sets to receive updates for every flight.
ALL_FLIGHTS_TAG = "all_flights"

# Airline code -> display name, in the order the app lists them.
AIRLINE_NAMES = {
    "ME": "Middle East Airlines",
    "TK": "Turkish Airlines",
    "AF": "Air France",
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "RJ": "Royal Jordanian",
}


class AirlineCatalog(BaseModel):
    """Immutable airline/tag lookup passed into the notification pipeline."""

    model_config = ConfigDict(frozen=True)

    # (code, display name) pairs, in display order
    airlines: tuple[tuple[str, str], ...]
    all_flights_tag: str = ALL_FLIGHTS_TAG

    @classmethod
    def from_names(
        cls, airline_names: Mapping[str, str], all_flights_tag: str = ALL_FLIGHTS_TAG
    ) -> "AirlineCatalog":
        return cls(
            airlines=tuple(airline_names.items()),
            all_flights_tag=all_flights_tag,
        )

    @property
    def airline_names(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.airlines))

    @property
    def known_tags(self) -> tuple[str, ...]:
        """Every tag a subscriber can set, airline codes first."""
        return (*(code for code, _ in self.airlines), self.all_flights_tag)

    def display_name(self, code: str | None) -> str:
        if not code:
            return "Unknown airline"
        return self.airline_names.get(code, code)


DEFAULT_CATALOG = AirlineCatalog.from_names(AIRLINE_NAMES)
