import pytest
import requests

from routing import mapbox_client, osrm_client
from routing.exceptions import ConfigurationError, InvalidInputError, ProviderUnavailableError
from routing.mapbox_client import MapboxClient
from routing.models import Point, Route
from routing.osrm_client import OSRMClient
from routing.route_service import find_best_safe_route

ORIGIN = Point(-73.9851, 40.7589)
DESTINATION = Point(-73.9772, 40.7527)

WALK = [[-73.9851, 40.7589], [-73.9812, 40.7560], [-73.9772, 40.7527]]


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeGet:
    """Stands in for requests.get and records every call."""
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def directions_payload(coordinates=WALK):
    return {
        "code": "Ok",
        "routes": [{"geometry": {"type": "LineString", "coordinates": coordinates}, "distance": 1100.0}],
    }


@pytest.fixture
def mapbox():
    return MapboxClient(access_token="pk.test", timeout=3)


@pytest.fixture
def osrm():
    return OSRMClient(base_url="http://osrm.local/", timeout=3)


# ---------------- Mapbox ----------------

def test_mapbox_walking_route(monkeypatch, mapbox):
    fake = FakeGet(FakeResponse(directions_payload()))
    monkeypatch.setattr(mapbox_client.requests, "get", fake)

    route = mapbox.get_route(ORIGIN, DESTINATION)

    assert route == Route(tuple(WALK))
    call = fake.calls[0]
    assert call["url"] == (
        "https://api.mapbox.com/directions/v5/mapbox/walking/"
        "-73.9851,40.7589;-73.9772,40.7527"
    )
    assert call["params"]["geometries"] == "geojson"
    assert call["params"]["access_token"] == "pk.test"
    assert call["timeout"] == 3


@pytest.mark.parametrize("response", [
    FakeResponse({"code": "NoRoute", "message": "No route found", "routes": []}),
    FakeResponse({"code": "Ok"}),
    FakeResponse({"code": "Ok", "routes": [{"geometry": {"type": "LineString", "coordinates": [[0, 0]]}}]}),
    FakeResponse({"code": "Ok", "routes": [{}]}),
    FakeResponse(["not", "a", "dict"]),
    FakeResponse(invalid_json=True),
    FakeResponse({"message": "Not Authorized - Invalid Token"}, status_code=401),
    requests.exceptions.ConnectionError("connection refused"),
    requests.exceptions.Timeout("read timed out"),
])
def test_mapbox_failures_become_none(monkeypatch, mapbox, response):
    monkeypatch.setattr(mapbox_client.requests, "get", FakeGet(response))

    assert mapbox.get_route(ORIGIN, DESTINATION) is None
    with pytest.raises(ProviderUnavailableError):
        mapbox.request_route(ORIGIN, DESTINATION)


def test_mapbox_requires_token(monkeypatch):
    monkeypatch.setattr(mapbox_client, "MAPBOX_ACCESS_TOKEN", None)
    with pytest.raises(ConfigurationError):
        MapboxClient()


def test_mapbox_geocode(monkeypatch, mapbox):
    payload = {"features": [{"geometry": {"type": "Point", "coordinates": [-73.9772, 40.7527]}}]}
    fake = FakeGet(FakeResponse(payload))
    monkeypatch.setattr(mapbox_client.requests, "get", fake)

    assert mapbox.geocode("Grand Central") == DESTINATION
    assert fake.calls[0]["url"] == MapboxClient.GEOCODING_URL
    assert fake.calls[0]["params"]["q"] == "Grand Central"


@pytest.mark.parametrize("response", [
    FakeResponse({"features": []}),
    FakeResponse({"features": [{"geometry": {}}]}),
    requests.exceptions.ConnectionError("offline"),
])
def test_mapbox_geocode_failures(monkeypatch, mapbox, response):
    monkeypatch.setattr(mapbox_client.requests, "get", FakeGet(response))
    assert mapbox.geocode("nowhere") is None


def test_search_through_mapbox_client(monkeypatch, mapbox):
    # original destination fails, every shifted one gets the same safe walk
    fake = FakeGet(
        requests.exceptions.Timeout("slow"),
        FakeResponse(directions_payload()),
    )
    monkeypatch.setattr(mapbox_client.requests, "get", fake)

    route = find_best_safe_route(mapbox, ORIGIN, DESTINATION, [(-74.0100, 40.7000)])

    assert route == Route(tuple(WALK))
    assert len(fake.calls) == 5


def test_search_through_mapbox_client_all_unsafe(monkeypatch, mapbox):
    monkeypatch.setattr(mapbox_client.requests, "get", FakeGet(FakeResponse(directions_payload())))
    # danger zone sits on the middle vertex of every returned walk
    assert find_best_safe_route(mapbox, ORIGIN, DESTINATION, [(-73.9812, 40.7560)]) is None


# ---------------- OSRM ----------------

def test_osrm_foot_route(monkeypatch, osrm):
    fake = FakeGet(FakeResponse(directions_payload()))
    monkeypatch.setattr(osrm_client.requests, "get", fake)

    route = osrm.get_route(ORIGIN, DESTINATION)

    assert route == Route(tuple(WALK))
    call = fake.calls[0]
    assert call["url"] == "http://osrm.local/route/v1/foot/-73.9851,40.7589;-73.9772,40.7527"
    assert call["params"] == {"overview": "full", "geometries": "geojson"}
    assert call["timeout"] == 3


@pytest.mark.parametrize("response", [
    FakeResponse({"code": "NoRoute", "message": "Impossible route between points"}, status_code=400),
    FakeResponse({"code": "Ok", "routes": [{"geometry": "encoded-polyline"}]}),
    FakeResponse(invalid_json=True),
    requests.exceptions.ConnectionError("connection refused"),
])
def test_osrm_failures_become_none(monkeypatch, osrm, response):
    monkeypatch.setattr(osrm_client.requests, "get", FakeGet(response))

    assert osrm.get_route(ORIGIN, DESTINATION) is None
    with pytest.raises(ProviderUnavailableError):
        osrm.request_route(ORIGIN, DESTINATION)


def test_osrm_compute_route_summary(monkeypatch, osrm):
    payload = {"code": "Ok", "routes": [{"distance": 1100.0, "duration": 790.0}]}
    fake = FakeGet(FakeResponse(payload))
    monkeypatch.setattr(osrm_client.requests, "get", fake)

    assert osrm.compute_route([ORIGIN, DESTINATION]) == {"distance": 1100.0, "duration": 790.0}
    assert fake.calls[0]["params"] == {"overview": "false"}


def test_osrm_compute_route_needs_two_points(osrm):
    with pytest.raises(InvalidInputError):
        osrm.compute_route([ORIGIN])


def test_osrm_requires_base_url(monkeypatch):
    monkeypatch.setattr(osrm_client, "BASE_URL", None)
    with pytest.raises(ConfigurationError):
        OSRMClient()
