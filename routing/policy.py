"""
Purpose: Central configuration for the safe-route search (single source of truth).
What it does:

Stores all tunable constants:

DANGER_ZONE_RADIUS_KM = 0.1 (buffer around every danger zone)

SHIFT_OFFSET_DEGREES = 0.002 (~200 m destination perturbation)

CANDIDATE_DIRECTIONS = original, north, south, east, west

Defines a SafetyPolicy object so callers can pass policy explicitly.

Rule: No logic here, just parameters so you can tune without rewriting code.
The buffer radius is read from here by both the safety check and the danger
zone highlighting, never hardcoded anywhere else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .exceptions import InvalidInputError
from .models import Direction

DANGER_ZONE_RADIUS_KM = 0.1

# separate from the buffer radius: ~200 m of latitude, less of longitude away from the equator
SHIFT_OFFSET_DEGREES = 0.002

CANDIDATE_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.ORIGINAL,
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)


@dataclass(frozen=True)
class SafetyPolicy:
    """
    Configuration for one best-safe-route search.

    Notes:
    - 'directions' order is the tie-break order: on equal distance the
      direction listed first wins.
    - 'max_workers' > 1 issues the provider calls on a thread pool. Selection
      still happens after all calls return, so results do not depend on
      completion order.
    """

    # --- Danger zone buffer ---
    buffer_radius_km: float = DANGER_ZONE_RADIUS_KM

    # --- Destination perturbation ---
    shift_offset_degrees: float = SHIFT_OFFSET_DEGREES
    directions: Tuple[Direction, ...] = CANDIDATE_DIRECTIONS

    # --- Provider fan-out ---
    max_workers: int = 1

    def validate(self) -> None:
        """
        Basic sanity checks. Called by the search before it runs.
        """
        if self.buffer_radius_km <= 0:
            raise InvalidInputError("buffer_radius_km must be > 0")

        if self.shift_offset_degrees <= 0:
            raise InvalidInputError("shift_offset_degrees must be > 0")

        if not self.directions:
            raise InvalidInputError("directions must not be empty")

        if any(not isinstance(d, Direction) for d in self.directions):
            raise InvalidInputError("directions must be Direction members")

        if len(set(self.directions)) != len(self.directions):
            raise InvalidInputError("directions must not repeat")

        if self.max_workers < 1:
            raise InvalidInputError("max_workers must be >= 1")


def default_policy() -> SafetyPolicy:
    """
    Convenience factory for the default policy (sequential provider calls).
    """
    p = SafetyPolicy()
    p.validate()
    return p


def concurrent_policy(max_workers: int = len(CANDIDATE_DIRECTIONS)) -> SafetyPolicy:
    """
    Same constants as the default, with all provider calls issued at once.
    """
    p = SafetyPolicy(max_workers=max_workers)
    p.validate()
    return p
