"""
Purpose: Best-safe-route search (the "glue").
What it does:
Asks the routing provider for a walking route to the destination and to four
cardinal perturbations of it, drops the routes that cross a danger zone, and
returns the shortest safe one.

Selection strategy:
  1) Try every direction in policy.directions (no early exit on first success).
  2) Skip directions whose provider call fails or returns nothing.
  3) Skip routes that fail the geofence check.
  4) Shortest geodesic length wins; on an exact tie the earlier direction wins.

It will not find a detour that needs a different path shape; only the
destination is moved, and only by policy.shift_offset_degrees.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

import requests

from .exceptions import InvalidInputError, ProviderUnavailableError
from .geofence import is_route_safe
from .models import Direction, Point, Route, as_point, as_route
from .policy import SafetyPolicy, default_policy
from .shift import candidate_destination

logger = logging.getLogger(__name__)

RouteFetcher = Callable[[Point, Point], Optional[Route]]


@dataclass(frozen=True)
class Candidate:
    """
    A safe route found for one direction, with its length.
    Transient: only lives for the duration of one search.
    """
    route: Route
    direction: Direction
    distance_km: float


@dataclass
class SearchResult:
    """
    Outcome of one search, per direction.
    `candidates` keeps direction order, which is also the tie-break order.
    """
    candidates: List[Candidate] = field(default_factory=list)
    skipped: List[Direction] = field(default_factory=list)  # no route from provider
    unsafe: List[Direction] = field(default_factory=list)

    @property
    def best(self) -> Optional[Candidate]:
        if not self.candidates:
            return None
        # min() keeps the first of equal keys, i.e. the earliest direction
        return min(self.candidates, key=lambda candidate: candidate.distance_km)

    @property
    def route(self) -> Optional[Route]:
        best = self.best
        return best.route if best else None


def _route_fetcher(provider) -> RouteFetcher:
    """Accept an adapter exposing get_route() or a plain callable."""
    get_route = getattr(provider, "get_route", None)
    if callable(get_route):
        return get_route
    if callable(provider):
        return provider
    raise InvalidInputError(
        f"Routing provider must be callable or expose get_route(): {provider!r}"
    )


def _request_route(
    fetch: RouteFetcher,
    origin: Point,
    target: Point,
    direction: Direction,
) -> Optional[Route]:
    """
    One provider call. Absence, provider errors and malformed routes all
    come back as None so a single direction can never abort the search.
    """
    try:
        raw = fetch(origin, target)
    except (ProviderUnavailableError, requests.exceptions.RequestException, OSError) as e:
        # network failures from plain callables count as an outage too
        logger.warning("Routing provider failed for %s: %s", direction.value, e)
        return None

    if raw is None:
        logger.info("No route for direction %s", direction.value)
        return None

    try:
        return as_route(raw)
    except InvalidInputError as e:
        logger.warning("Discarding malformed route for %s: %s", direction.value, e)
        return None


def _fetch_routes(
    fetch: RouteFetcher,
    origin: Point,
    targets: Sequence[Point],
    directions: Sequence[Direction],
    max_workers: int,
) -> List[Optional[Route]]:
    """
    Fetch one route per target. Results land in per-direction slots, so the
    returned list is in direction order whatever order the calls finish in.
    """
    if max_workers <= 1:
        return [
            _request_route(fetch, origin, target, direction)
            for target, direction in zip(targets, directions)
        ]

    slots: List[Optional[Route]] = [None] * len(targets)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(targets))) as pool:
        futures = {
            pool.submit(_request_route, fetch, origin, target, direction): index
            for index, (target, direction) in enumerate(zip(targets, directions))
        }
        for future in as_completed(futures):
            slots[futures[future]] = future.result()
    return slots


def search_safe_routes(
    provider,
    origin: Iterable[float],
    destination: Iterable[float],
    danger_zones: Iterable[Iterable[float]],
    *,
    policy: Optional[SafetyPolicy] = None,
) -> SearchResult:
    """
    Run the perturbed-destination search and report every direction's outcome.

    Args:
        provider: object with get_route(origin, destination) or a callable
            with the same signature, returning a Route (or None)
        origin: (lng, lat) start point, never shifted
        destination: (lng, lat) end point
        danger_zones: (lng, lat) points to keep policy.buffer_radius_km away from
        policy: SafetyPolicy, defaults to default_policy()

    Returns:
        SearchResult; its .route is None when no safe route was found.
    """
    policy = policy or default_policy()
    policy.validate()

    fetch = _route_fetcher(provider)
    origin = as_point(origin)
    destination = as_point(destination)
    zones = [as_point(zone) for zone in danger_zones]

    directions = list(policy.directions)
    targets = [
        candidate_destination(destination, direction, policy.shift_offset_degrees)
        for direction in directions
    ]

    routes = _fetch_routes(fetch, origin, targets, directions, policy.max_workers)

    result = SearchResult()
    for direction, route in zip(directions, routes):
        if route is None:
            result.skipped.append(direction)
            continue

        if not is_route_safe(route, zones, radius_km=policy.buffer_radius_km):
            logger.debug("Route for %s crosses a danger zone", direction.value)
            result.unsafe.append(direction)
            continue

        result.candidates.append(
            Candidate(route=route, direction=direction, distance_km=route.length_km())
        )

    best = result.best
    if best is None:
        logger.warning(
            "No safe route found (%d skipped, %d unsafe)",
            len(result.skipped),
            len(result.unsafe),
        )
    else:
        logger.info(
            "Safe route chosen: %s %.2f km", best.direction.value, best.distance_km
        )
    return result


def find_best_safe_route(
    provider,
    origin: Iterable[float],
    destination: Iterable[float],
    danger_zones: Iterable[Iterable[float]],
    *,
    policy: Optional[SafetyPolicy] = None,
) -> Optional[Route]:
    """
    Shortest safe walking route from origin to the destination or one of its
    perturbations, or None when every direction failed or was unsafe.
    """
    return search_safe_routes(
        provider, origin, destination, danger_zones, policy=policy
    ).route
