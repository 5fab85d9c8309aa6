"""Mini README: Country, city and airport lookups used by trip forms.

Structure:
    * Country, City, Airport - lookup records.
    * LocationDirectory / AirportDirectory - narrow protocols the planner
      depends on, so live services can be swapped in.
    * StaticLocationDirectory / StaticAirportDirectory - offline
      implementations backed by a small built-in dataset.

Lookups never touch planner state. Static directories do not perform network
I/O; they answer from the tuples below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

MIN_CITY_QUERY_LENGTH = 2
MAX_CITY_RESULTS = 10


@dataclass(slots=True, frozen=True)
class Country:
    name: str
    code: str


@dataclass(slots=True, frozen=True)
class City:
    name: str
    country: str
    region: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Airport:
    iata: str
    name: str
    city: str
    country: str


class LocationDirectory(Protocol):
    def countries(self) -> List[Country]:
        """Return all countries sorted by name."""

    def cities(self, country_code: str, query: str = "") -> List[City]:
        """Return cities in ``country_code`` whose name contains ``query``."""


class AirportDirectory(Protocol):
    def airports_by_country(self, country: str) -> List[Airport]:
        """Return airports located in ``country``."""


_COUNTRIES: Sequence[Country] = (
    Country("United States", "US"),
    Country("United Kingdom", "GB"),
    Country("Germany", "DE"),
    Country("France", "FR"),
    Country("Netherlands", "NL"),
    Country("Japan", "JP"),
    Country("Papua New Guinea", "PG"),
)

_CITIES: Sequence[City] = (
    City("San Francisco", "US", "California"),
    City("San Diego", "US", "California"),
    City("San Antonio", "US", "Texas"),
    City("Chicago", "US", "Illinois"),
    City("New York", "US", "New York"),
    City("London", "GB", "England"),
    City("Manchester", "GB", "England"),
    City("Edinburgh", "GB", "Scotland"),
    City("Berlin", "DE", "Berlin"),
    City("Munich", "DE", "Bavaria"),
    City("Paris", "FR", "Ile-de-France"),
    City("Amsterdam", "NL", "North Holland"),
    City("Tokyo", "JP", "Tokyo"),
    City("Goroka", "PG", "Eastern Highlands"),
    City("Madang", "PG", "Madang"),
)

_AIRPORTS: Sequence[Airport] = (
    Airport("GKA", "Goroka", "Goroka", "Papua New Guinea"),
    Airport("MAG", "Madang", "Madang", "Papua New Guinea"),
    Airport("SFO", "San Francisco International Airport", "San Francisco", "United States"),
    Airport("ORD", "Chicago O'Hare International Airport", "Chicago", "United States"),
    Airport("JFK", "John F Kennedy International Airport", "New York", "United States"),
    Airport("LHR", "London Heathrow Airport", "London", "United Kingdom"),
    Airport("MAN", "Manchester Airport", "Manchester", "United Kingdom"),
    Airport("BER", "Berlin Brandenburg Airport", "Berlin", "Germany"),
    Airport("CDG", "Charles de Gaulle International Airport", "Paris", "France"),
    Airport("AMS", "Amsterdam Airport Schiphol", "Amsterdam", "Netherlands"),
    Airport("HND", "Tokyo Haneda International Airport", "Tokyo", "Japan"),
)


class StaticLocationDirectory:
    """Offline ``LocationDirectory`` backed by a fixed dataset."""

    def __init__(
        self,
        countries: Optional[Iterable[Country]] = None,
        cities: Optional[Iterable[City]] = None,
    ) -> None:
        self._countries = list(countries if countries is not None else _COUNTRIES)
        self._cities = list(cities if cities is not None else _CITIES)

    def countries(self) -> List[Country]:
        return sorted(self._countries, key=lambda country: country.name)

    def cities(self, country_code: str, query: str = "") -> List[City]:
        """Match city names by case-insensitive substring, at most ten results."""

        if len(query.strip()) < MIN_CITY_QUERY_LENGTH:
            return []
        needle = query.strip().lower()
        code = country_code.strip().upper()
        matches = [
            city for city in self._cities if city.country == code and needle in city.name.lower()
        ]
        LOGGER.debug("City lookup country=%s query=%s -> %s results", code, query, len(matches))
        return matches[:MAX_CITY_RESULTS]


class StaticAirportDirectory:
    """Offline ``AirportDirectory`` backed by a fixed dataset."""

    def __init__(self, airports: Optional[Iterable[Airport]] = None) -> None:
        self._airports = list(airports if airports is not None else _AIRPORTS)

    def airports_by_country(self, country: str) -> List[Airport]:
        # Country names are stored in full, so a code or partial name matches by substring.
        needle = country.strip().lower()
        if not needle:
            return []
        return [airport for airport in self._airports if needle in airport.country.lower()]
