#Purpose: Destination perturbation for alternative candidate routes.
#Moves a point a fixed number of degrees towards one compass direction.
#Does not check that the shifted point is on land or routable (the provider decides).

from __future__ import annotations

from typing import Iterable, Union

from .exceptions import InvalidInputError
from .models import Direction, Point, as_point
from .policy import SHIFT_OFFSET_DEGREES


def shift_coordinates(
    point: Iterable[float],
    direction: Union[Direction, str],
    offset: float = SHIFT_OFFSET_DEGREES,
) -> Point:
    """
    Shift a (lng, lat) point by `offset` degrees.

    north/south move the latitude, east/west move the longitude.
    Direction.ORIGINAL and unknown values raise InvalidInputError.
    """
    lng, lat = as_point(point)
    direction = Direction.parse(direction)

    if direction is Direction.NORTH:
        return Point(lng, lat + offset)
    if direction is Direction.SOUTH:
        return Point(lng, lat - offset)
    if direction is Direction.EAST:
        return Point(lng + offset, lat)
    if direction is Direction.WEST:
        return Point(lng - offset, lat)

    raise InvalidInputError(f"Cannot shift towards {direction.value!r}")


def candidate_destination(
    destination: Iterable[float],
    direction: Union[Direction, str],
    offset: float = SHIFT_OFFSET_DEGREES,
) -> Point:
    """The destination itself for ORIGINAL, otherwise the shifted point."""
    if Direction.parse(direction) is Direction.ORIGINAL:
        return as_point(destination)
    return shift_coordinates(destination, direction, offset)
