#Purpose: Danger-zone geofencing logic.
#Decides whether a walking route passes too close to any user-marked danger zone.
#Typical responsibilities:
#Expand each danger point into a circular buffer (DANGER_ZONE_RADIUS_KM)
#Intersect the route polyline with every buffer, stop at the first hit
#Export the same buffers as GeoJSON so the map highlights exactly what is avoided
#Output: a safe/unsafe verdict (or the list of violated zones for diagnostics).

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Sequence

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon, mapping

from .geometry import local_projection, project_line, reproject
from .models import Point, RouteLike, as_point, as_route
from .policy import DANGER_ZONE_RADIUS_KM

logger = logging.getLogger(__name__)


def _local_buffer(radius_km: float) -> Polygon:
    # circle around the origin of a zone-centred metric frame
    return ShapelyPoint(0.0, 0.0).buffer(radius_km * 1000.0)


def _intersects_zone(
    coordinates: Sequence[Point],
    zone: Point,
    radius_km: float,
) -> bool:
    line = project_line(coordinates, zone)
    return line.intersects(_local_buffer(radius_km))


def is_route_safe(
    route: RouteLike,
    danger_zones: Iterable[Iterable[float]],
    *,
    radius_km: float = DANGER_ZONE_RADIUS_KM,
) -> bool:
    """
    Checks if a route intersects any danger zone.

    Each danger zone is a (lng, lat) point buffered to a circle of `radius_km`.
    The route is unsafe as soon as its line touches or crosses one buffer.

    Args:
        route: Route, GeoJSON LineString dict or sequence of (lng, lat) pairs,
            in travel order
        danger_zones: (lng, lat) centres of the areas to avoid
        radius_km: buffer radius, defaults to DANGER_ZONE_RADIUS_KM

    Returns:
        True when the route intersects no buffer (always True for no zones).

    Raises:
        InvalidInputError: the route has fewer than 2 points.
    """
    coordinates = as_route(route).coordinates

    for zone in danger_zones:
        center = as_point(zone)
        if _intersects_zone(coordinates, center, radius_km):
            logger.debug("Route crosses danger zone at %s", center)
            return False

    return True


def unsafe_zones(
    route: RouteLike,
    danger_zones: Iterable[Iterable[float]],
    *,
    radius_km: float = DANGER_ZONE_RADIUS_KM,
) -> List[Point]:
    """
    Every danger zone the route violates, in input order.
    Unlike is_route_safe this does not stop at the first hit.
    """
    coordinates = as_route(route).coordinates
    hits: List[Point] = []
    for zone in danger_zones:
        center = as_point(zone)
        if _intersects_zone(coordinates, center, radius_km):
            hits.append(center)
    return hits


def danger_zone_polygon(
    zone: Iterable[float],
    radius_km: float = DANGER_ZONE_RADIUS_KM,
) -> Polygon:
    """The buffer used by the safety check, as a lon/lat polygon."""
    center = as_point(zone)
    _, inverse = local_projection(center)
    return reproject(_local_buffer(radius_km), inverse)


def danger_zones_to_geojson(
    danger_zones: Iterable[Iterable[float]],
    radius_km: float = DANGER_ZONE_RADIUS_KM,
) -> Dict[str, Any]:
    """
    GeoJSON FeatureCollection of the danger-zone buffers for map highlighting.
    Uses the same radius as is_route_safe so the map and the check never disagree.
    """
    features = []
    for zone in danger_zones:
        center = as_point(zone)
        features.append({
            "type": "Feature",
            "properties": {
                "center": [center.lng, center.lat],
                "radius_km": radius_km,
            },
            "geometry": mapping(danger_zone_polygon(center, radius_km)),
        })
    return {"type": "FeatureCollection", "features": features}
