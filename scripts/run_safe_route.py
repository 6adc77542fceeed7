import argparse
import json
import logging
from typing import List, Optional

from routing.mapbox_client import MapboxClient
from routing.osrm_client import OSRMClient
from routing.geofence import danger_zones_to_geojson
from routing.models import Point
from routing.policy import concurrent_policy, default_policy
from routing.route_service import search_safe_routes

# the map's default danger zone is Times Square; start from Bryant Park, ~600 m
# away, since an origin inside the zone makes every route unsafe
DEFAULT_DANGER_ZONES = [Point(-73.9851, 40.7589)]
DEFAULT_ORIGIN = Point(-73.9832, 40.7536)


def parse_point(text: str) -> Point:
    """'lng,lat' -> Point"""
    try:
        lng, lat = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'lng,lat', got {text!r}")
    return Point(lng, lat)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the shortest walking route that avoids danger zones.")
    parser.add_argument("destination",
                        help="'lng,lat' or a place name (place names need --provider mapbox)")
    parser.add_argument("--origin", type=parse_point, default=DEFAULT_ORIGIN,
                        help="start point as 'lng,lat' (default: Bryant Park, outside the default danger zone)")
    parser.add_argument("--danger", type=parse_point, action="append", default=None,
                        help="danger zone as 'lng,lat'; repeat for several zones")
    parser.add_argument("--provider", choices=["mapbox", "osrm"], default="mapbox")
    parser.add_argument("--concurrent", action="store_true",
                        help="issue the five routing calls at once")
    parser.add_argument("--zones-geojson", action="store_true",
                        help="also print the danger-zone buffers as GeoJSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def resolve_destination(text: str, mapbox: Optional[MapboxClient]) -> Optional[Point]:
    try:
        return parse_point(text)
    except argparse.ArgumentTypeError:
        if mapbox is None:
            return None
        return mapbox.geocode(text)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mapbox = MapboxClient() if args.provider == "mapbox" else None
    provider = mapbox or OSRMClient(profile="foot")

    destination = resolve_destination(args.destination, mapbox)
    if destination is None:
        print(f"Could not resolve destination: {args.destination}")
        return 2

    danger_zones = args.danger if args.danger is not None else DEFAULT_DANGER_ZONES
    policy = concurrent_policy() if args.concurrent else default_policy()

    result = search_safe_routes(provider, args.origin, destination, danger_zones, policy=policy)

    if args.zones_geojson:
        print(json.dumps(danger_zones_to_geojson(danger_zones), indent=2))

    best = result.best
    if best is None:
        print("No safe route found.")
        return 1

    print(f"Safe route chosen: {best.direction.value} {best.distance_km:.2f} km")
    print(json.dumps(best.route.to_feature({
        "direction": best.direction.value,
        "distance_km": round(best.distance_km, 3),
    }), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
