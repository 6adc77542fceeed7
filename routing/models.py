"""
Purpose: Domain models for the safe-route core.
What it does:
- Defines core data structures:
- Point (lng, lat) in GeoJSON order
- Route (ordered polyline of at least two points, immutable)
- Direction (ORIGINAL | NORTH | SOUTH | EAST | WEST)

Rule: No HTTP calls, no search logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, NamedTuple, Optional, Tuple, Union

from .exceptions import InvalidInputError
from .geometry import geodesic_length_km


class Point(NamedTuple):
    """A (longitude, latitude) pair in decimal degrees. Longitude first."""
    lng: float
    lat: float


class Direction(Enum):
    ORIGINAL = "original"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Accepts a Direction or its name ("north", "NORTH", ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidInputError(f"Unknown direction: {value!r}")


def as_point(value: Iterable[float]) -> Point:
    """
    Normalise a (lng, lat) pair (tuple, list, Point) into a Point.
    Raises InvalidInputError for anything that is not exactly two numbers.
    """
    if isinstance(value, Point):
        return value
    try:
        lng, lat = value
        return Point(float(lng), float(lat))
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Not a (lng, lat) pair: {value!r}") from e


@dataclass(frozen=True)
class Route:
    """
    A walking polyline from origin to destination, as returned by a routing
    provider. Vertices stay in travel order and are never mutated.
    """
    coordinates: Tuple[Point, ...]

    def __post_init__(self):
        points = tuple(as_point(c) for c in self.coordinates)
        if len(points) < 2:
            raise InvalidInputError(
                f"A route needs at least 2 points, got {len(points)}."
            )
        object.__setattr__(self, "coordinates", points)

    def __len__(self) -> int:
        return len(self.coordinates)

    @property
    def origin(self) -> Point:
        return self.coordinates[0]

    @property
    def destination(self) -> Point:
        return self.coordinates[-1]

    def length_km(self) -> float:
        return geodesic_length_km(self.coordinates)

    @classmethod
    def from_geojson(cls, geometry: Dict[str, Any]) -> "Route":
        """Build a Route from a GeoJSON LineString geometry dict."""
        if not isinstance(geometry, dict) or geometry.get("type") != "LineString":
            raise InvalidInputError(f"Expected a GeoJSON LineString, got {geometry!r}")
        return cls(tuple(geometry["coordinates"]))

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "LineString",
            "coordinates": [[p.lng, p.lat] for p in self.coordinates],
        }

    def to_feature(self, properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "properties": dict(properties or {}),
            "geometry": self.to_geojson(),
        }


RouteLike = Union[Route, Dict[str, Any], Iterable[Iterable[float]]]


def as_route(value: RouteLike) -> Route:
    """Return `value` as a Route, validating raw coordinate sequences."""
    if isinstance(value, Route):
        return value
    if value is None:
        raise InvalidInputError("A route is required, got None.")
    if isinstance(value, dict):
        return Route.from_geojson(value)
    return Route(tuple(value))
