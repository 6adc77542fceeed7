#Purpose: The Mapbox "adapter/client".
#Sole responsibility: talk to the Mapbox Directions and Geocoding APIs via HTTP.
#Encapsulates Mapbox-specific details:
#access token handling (MAPBOX_ACCESS_TOKEN)
#walking profile URL construction
#parsing GeoJSON geometries into Route / Point
#It should not contain safety rules or route selection.

from dotenv import load_dotenv
import logging
import os
from typing import Any, Dict, Optional, Sequence
import requests

from .exceptions import ConfigurationError, ProviderUnavailableError
from .models import Point, Route, as_point

# Example in .env:
# MAPBOX_ACCESS_TOKEN=pk.xxxxx
load_dotenv()
MAPBOX_ACCESS_TOKEN = os.getenv("MAPBOX_ACCESS_TOKEN")
ROUTING_TIMEOUT = float(os.getenv("ROUTING_TIMEOUT", "5"))

logger = logging.getLogger(__name__)


class MapboxClient:
    """
    Mapbox Adapter / Client

    Sole responsibility:
    - Fetch walking directions and return the first route as a Route
    - Resolve a free-text place into a Point (forward geocoding)
    """
    DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/{profile}/{coordinates}"
    GEOCODING_URL = "https://api.mapbox.com/search/geocode/v6/forward"

    def __init__(self, access_token: Optional[str] = None, profile: str = "walking",
                 timeout: float = ROUTING_TIMEOUT):
        self.access_token = access_token or MAPBOX_ACCESS_TOKEN
        self.profile = profile
        self.timeout = timeout

        if not self.access_token:
            raise ConfigurationError(
                "Mapbox access token not set. Please set MAPBOX_ACCESS_TOKEN in the .env file.")

    def format_coordinates(self, coords: Sequence[Point]) -> str:
        """Convert list of (lng, lat) to Mapbox format 'lng,lat;lng,lat'"""
        return ';'.join(f"{lng},{lat}" for lng, lat in (as_point(c) for c in coords))

    def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(params, access_token=self.access_token)
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailableError(f"Mapbox request failed: {e}") from e
        except ValueError as e:
            raise ProviderUnavailableError("Mapbox returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ProviderUnavailableError("Mapbox returned an unexpected payload")
        return data

    def request_route(self, origin: Point, destination: Point) -> Route:
        """
        Walking route from origin to destination.

        Raises:
            ProviderUnavailableError: network failure, no route or malformed response
        """
        url = self.DIRECTIONS_URL.format(
            profile=self.profile,
            coordinates=self.format_coordinates([origin, destination]),
        )
        data = self._get_json(url, {"geometries": "geojson", "overview": "full"})

        routes = data.get("routes")
        if not routes:
            raise ProviderUnavailableError(
                f"No route found ({data.get('code', 'unknown')}: {data.get('message', '')})")

        try:
            # *** NORMALIZATION to our Route object ***
            return Route.from_geojson(routes[0]["geometry"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderUnavailableError(f"Malformed Mapbox route geometry: {e}") from e

    def get_route(self, origin: Point, destination: Point) -> Optional[Route]:
        """Routing provider contract: a Route, or None on any failure."""
        try:
            return self.request_route(origin, destination)
        except ProviderUnavailableError as e:
            logger.warning("Mapbox route %s -> %s unavailable: %s", origin, destination, e)
            return None

    def geocode(self, query: str) -> Optional[Point]:
        """Converts a free-text place into its best-matching Point, or None."""
        try:
            data = self._get_json(self.GEOCODING_URL, {"q": query, "limit": 1})
            features = data.get("features") or []
            if not features:
                logger.warning("Could not find coordinates for: %s", query)
                return None
            return as_point(features[0]["geometry"]["coordinates"])
        except ProviderUnavailableError as e:
            logger.warning("Mapbox geocoding failed for %r: %s", query, e)
            return None
        except (KeyError, IndexError, TypeError, ValueError):
            logger.warning("Error parsing Mapbox geocoding response for: %s", query)
            return None
