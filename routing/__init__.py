#Marks routing as a package.
#Re-exports the public API (find_best_safe_route, is_route_safe, shift_coordinates,
#the provider clients) so other modules import from routing without knowing internal file names.
#No business logic.

from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    ProviderUnavailableError,
    SafeRouteError,
)
from .models import Direction, Point, Route
from .policy import (
    CANDIDATE_DIRECTIONS,
    DANGER_ZONE_RADIUS_KM,
    SHIFT_OFFSET_DEGREES,
    SafetyPolicy,
    concurrent_policy,
    default_policy,
)
from .geofence import danger_zones_to_geojson, is_route_safe
from .shift import shift_coordinates
from .route_service import Candidate, SearchResult, find_best_safe_route, search_safe_routes
from .mapbox_client import MapboxClient
from .osrm_client import OSRMClient

__all__ = [
           "find_best_safe_route",
           "search_safe_routes",
           "is_route_safe",
           "shift_coordinates",
           "danger_zones_to_geojson",
           "Point",
           "Route",
           "Direction",
           "Candidate",
           "SearchResult",
           "SafetyPolicy",
           "default_policy",
           "concurrent_policy",
           "DANGER_ZONE_RADIUS_KM",
           "SHIFT_OFFSET_DEGREES",
           "CANDIDATE_DIRECTIONS",
           "MapboxClient",
           "OSRMClient",
           "SafeRouteError",
           "ProviderUnavailableError",
           "InvalidInputError",
           "ConfigurationError",
           ]
