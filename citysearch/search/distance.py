from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .rounding import round_half_up

EARTH_RADIUS_KM = 6371.071


@dataclass(frozen=True)
class DistanceMatch:
    distance_km: float
    score: float
    valid: bool

    @property
    def label(self) -> str:
        """Human-readable distance, for display only."""
        return f"{self.distance_km} Km"


def _as_coordinate(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def haversine_km(
    origin: tuple[float, float], target: tuple[float, float]
) -> float:
    """Great-circle distance in kilometers between two ``(lat, lon)`` points."""
    lat1, lon1 = origin
    lat2, lon2 = target
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    half_dphi = (phi2 - phi1) / 2
    half_dlambda = math.radians(lon2 - lon1) / 2
    a = math.sin(half_dphi) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(half_dlambda) ** 2
    # Float error can push ``a`` just above 1 for antipodal points.
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def score_distance(
    origin: tuple[Any, Any],
    target: tuple[float, float],
    limit_km: float,
    weight: float,
) -> DistanceMatch:
    """Score how close *origin* (a record's coordinates) is to *target*.

    The score falls linearly from ``weight`` at distance 0 to 0 at
    ``limit_km``. A record whose coordinates are not numeric is reported at
    ``limit_km`` with a zero score and ``valid=False``.
    """
    lat = _as_coordinate(origin[0])
    lon = _as_coordinate(origin[1])
    if lat is None or lon is None:
        return DistanceMatch(distance_km=limit_km, score=0.0, valid=False)

    distance = round_half_up(haversine_km((lat, lon), target))
    score = (1 - distance / limit_km) * weight if distance < limit_km else 0.0
    return DistanceMatch(distance_km=distance, score=score, valid=True)
