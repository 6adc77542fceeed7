#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lng,lat;lng,lat)
#URL construction (/route)
#timeouts/error handling
#parsing response JSON into a Route
#It should not contain safety rules or route selection.


from dotenv import load_dotenv
import logging
import os
from typing import Dict, Optional, Sequence
import requests

from .exceptions import ConfigurationError, InvalidInputError, ProviderUnavailableError
from .models import Point, Route, as_point

# Read OSRM base URL from environment
# Example in .env:
# BASE_URL=http://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("BASE_URL")
ROUTING_TIMEOUT = float(os.getenv("ROUTING_TIMEOUT", "5"))

logger = logging.getLogger(__name__)


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Return the walking geometry as a Route, or None when OSRM has no route

    """
    def __init__(self, profile: str = "foot", timeout: float = ROUTING_TIMEOUT,
                 base_url: Optional[str] = None):
        self.base_url = (base_url or BASE_URL or "").rstrip("/")
        self.timeout = timeout #the time to wait for a response from OSRM before giving up
        self.profile = profile #the mode of transportation (foot, driving, cycling)

        if not self.base_url:
            raise ConfigurationError("OSRM base URL not set. Please set BASE_URL in the .env file.")

    #----------------
    # Internal helper methods for coordinate formatting and URL construction
    #----------------
    def format_coordinates(self, coords: Sequence[Point]) -> str:
        """Convert list of (lng, lat) to OSRM format 'lng,lat;lng,lat;...'"""
        return ';'.join(f"{lng},{lat}" for lng, lat in (as_point(c) for c in coords))

    def _get(self, coords: Sequence[Point], params: Dict[str, str]) -> Dict:
        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coords)}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            data = response.json() #OSRM answers errors (NoRoute, InvalidQuery) with a JSON body too
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailableError(f"OSRM request failed: {e}") from e
        except ValueError as e:
            raise ProviderUnavailableError(f"OSRM returned invalid JSON (HTTP {response.status_code})") from e

        #validating OSRM response
        if not isinstance(data, dict):
            raise ProviderUnavailableError("OSRM returned an unexpected payload")
        if data.get("code") != "Ok" or not data.get("routes"):
            raise ProviderUnavailableError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")
        return data

    #----------------
    # Public methods
    #----------------
    def request_route(self, origin: Point, destination: Point) -> Route:
        """
        calls the OSRM /route endpoint and returns the first route's geometry.

        Raises:
            ProviderUnavailableError: network failure, no route or malformed response
        """
        data = self._get(
            [origin, destination],
            {
                "overview": "full", # the whole polyline, not a simplified one
                "geometries": "geojson",
            },
        )
        try:
            return Route.from_geojson(data["routes"][0]["geometry"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderUnavailableError(f"Malformed OSRM route geometry: {e}") from e

    def get_route(self, origin: Point, destination: Point) -> Optional[Route]:
        """Routing provider contract: a Route, or None on any failure."""
        try:
            return self.request_route(origin, destination)
        except ProviderUnavailableError as e:
            logger.warning("OSRM route %s -> %s unavailable: %s", origin, destination, e)
            return None

    def compute_route(self, coordinates: Sequence[Point]) -> Dict[str, float]:
        """
            calls the OSRM /route endpoint without geometry and
            returns a dict with distance and duration

            Returns:
                {
                    "distance": float, # in meters
                    "duration": float, # in seconds
                }
        """
        if len(coordinates) < 2:
            raise InvalidInputError("At least two coordinates are required to compute a route.")

        route = self._get(coordinates, {"overview": "false"})["routes"][0]

        #Normalize output to internal format
        return {
            "distance": route["distance"],
            "duration": route["duration"],
        }
