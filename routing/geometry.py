#Purpose: Low level geometry helpers shared by the geofence and the models.
#Works on plain (lng, lat) sequences so it has no dependency on the domain models.
#Typical responsibilities:
#geodesic polyline length on the WGS84 ellipsoid (pyproj.Geod)
#local metric projection centred on a point (azimuthal equidistant)
#projecting a lon/lat line into that local frame for buffer tests

from __future__ import annotations

from functools import lru_cache
from typing import Sequence, Tuple

from pyproj import CRS, Geod, Transformer
import shapely
from shapely.geometry import LineString

LngLat = Tuple[float, float]

WGS84 = "EPSG:4326"

_GEOD = Geod(ellps="WGS84")


def geodesic_length_km(coordinates: Sequence[LngLat]) -> float:
    """
    Sum of the geodesic segment lengths along the polyline, in kilometers.
    """
    lons = [lng for lng, _ in coordinates]
    lats = [lat for _, lat in coordinates]
    return _GEOD.line_length(lons, lats) / 1000.0


@lru_cache(maxsize=256)
def local_projection(center: LngLat) -> Tuple[Transformer, Transformer]:
    """
    Returns (forward, inverse) transformers between WGS84 and an azimuthal
    equidistant projection centred on `center`.

    Distances measured from the origin (0, 0) of the projected frame are true
    geodesic distances from `center`, and the frame is close to flat over a few
    kilometers, so a planar buffer of radius r around (0, 0) is a meter-accurate
    geodesic circle at city scale.
    """
    lng, lat = center
    local_crs = CRS.from_proj4(
        f"+proj=aeqd +lat_0={lat} +lon_0={lng} +datum=WGS84 +units=m +no_defs"
    )
    forward = Transformer.from_crs(WGS84, local_crs, always_xy=True)
    inverse = Transformer.from_crs(local_crs, WGS84, always_xy=True)
    return forward, inverse


def project_line(coordinates: Sequence[LngLat], center: LngLat) -> LineString:
    """Project a lon/lat polyline into the local metric frame of `center`."""
    forward, _ = local_projection(center)
    return reproject(LineString(coordinates), forward)


def reproject(geometry, transformer: Transformer):
    """Apply a pyproj transformer to every coordinate of a shapely geometry."""
    return shapely.transform(geometry, transformer.transform, interleaved=False)
