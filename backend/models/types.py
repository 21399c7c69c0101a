"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing an AirlineCode where a FlightID is expected).

Uses TypeAlias for simple structural types.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
FlightID = NewType("FlightID", str)  # "<flightNumber>-<date>"
AirlineCode = NewType("AirlineCode", str)  # 2-character carrier code
TagKey = NewType("TagKey", str)  # subscriber tag key on the push service

# Structural aliases using TypeAlias
StatusText: TypeAlias = str  # free text from the flight board
DateString: TypeAlias = str  # date label as shown on the flight board
