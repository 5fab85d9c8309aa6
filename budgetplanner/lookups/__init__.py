"""Mini README: Location and airport lookups for trip planning."""

from .directory import (
    Airport,
    AirportDirectory,
    City,
    Country,
    LocationDirectory,
    StaticAirportDirectory,
    StaticLocationDirectory,
)

__all__ = [
    "Airport",
    "AirportDirectory",
    "City",
    "Country",
    "LocationDirectory",
    "StaticAirportDirectory",
    "StaticLocationDirectory",
]
