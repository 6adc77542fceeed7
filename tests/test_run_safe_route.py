import importlib.util
from pathlib import Path

import pytest

from routing.geofence import is_route_safe
from routing.models import Point, Route

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_safe_route.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("run_safe_route", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class StraightLineMapbox:
    """Walks straight to whatever point it is asked for."""
    def __init__(self, *args, **kwargs):
        self.calls = []

    def get_route(self, origin, destination):
        self.calls.append(destination)
        return Route((origin, destination))

    def geocode(self, query):
        return Point(-73.9772, 40.7527)


def test_default_origin_is_outside_default_danger_zones(script):
    origin = script.DEFAULT_ORIGIN
    assert origin not in script.DEFAULT_DANGER_ZONES
    assert is_route_safe([origin, origin], script.DEFAULT_DANGER_ZONES) is True


def test_defaults_find_a_safe_route(script, monkeypatch, capsys):
    monkeypatch.setattr(script, "MapboxClient", StraightLineMapbox)

    assert script.main(["-73.9772,40.7527"]) == 0
    out = capsys.readouterr().out
    assert "Safe route chosen:" in out
    assert "\"LineString\"" in out


def test_place_name_is_geocoded(script, monkeypatch, capsys):
    monkeypatch.setattr(script, "MapboxClient", StraightLineMapbox)

    assert script.main(["Grand Central Terminal", "--zones-geojson"]) == 0
    assert "FeatureCollection" in capsys.readouterr().out


def test_origin_inside_a_danger_zone_finds_nothing(script, monkeypatch, capsys):
    monkeypatch.setattr(script, "MapboxClient", StraightLineMapbox)

    assert script.main(["-73.9772,40.7527", "--origin", "-73.9851,40.7589"]) == 1
    assert "No safe route found." in capsys.readouterr().out
