"""Impact consequence calculator — crater, seismic, and energy proxies.

These are simplified empirical proxies, not validated physical models. The
contract is determinism: identical inputs give bit-identical outputs.
"""

import math

from impactglobe.models import AsteroidSnapshot, ImpactConsequence, ImpactEvent

DEFAULT_DIAMETER_M = 340.0
DEFAULT_VELOCITY_KM_S = 18.5

CRATER_DIAMETER_RATIO = 7.3
CRATER_DEPTH_RATIO = 1.3
SEISMIC_BASE = 6.5
ENERGY_COEFFICIENT = 0.5  # Mt per (km/s)^2
DEVASTATION_MULTIPLE = 3

# Meters per degree, used for small ground circles
_M_PER_DEG_LON_EQUATOR = 111_320.0
_M_PER_DEG_LAT = 110_574.0


def compute_consequence(
    diameter_m: float | None = None,
    velocity_km_s: float | None = None,
) -> ImpactConsequence:
    """Compute impact figures from asteroid diameter (m) and velocity (km/s).

    Missing, non-finite, or non-positive inputs fall back to the reference
    asteroid (340 m, 18.5 km/s).
    """
    diameter = _positive_or(diameter_m, DEFAULT_DIAMETER_M)
    velocity = _positive_or(velocity_km_s, DEFAULT_VELOCITY_KM_S)
    return ImpactConsequence(
        crater_diameter_m=diameter * CRATER_DIAMETER_RATIO,
        crater_depth_m=diameter * CRATER_DEPTH_RATIO,
        seismic_magnitude=SEISMIC_BASE + math.log10(diameter),
        energy_megatons=velocity**2 * ENERGY_COEFFICIENT,
    )


def consequence_of(impact: ImpactEvent | AsteroidSnapshot) -> ImpactConsequence:
    """Consequences for a confirmed event (or a bare asteroid snapshot)."""
    asteroid = impact.asteroid if isinstance(impact, ImpactEvent) else impact
    return compute_consequence(asteroid.diameter_m, asteroid.velocity_km_s)


def footprint_ring(
    lat: float, lon: float, radius_m: float, points: int = 64
) -> tuple[tuple[float, float], ...]:
    """Closed (lon, lat) ring approximating a ground circle of radius_m.

    Uses a flat local approximation; the first vertex is repeated at the end.
    """
    dx = radius_m / (_M_PER_DEG_LON_EQUATOR * math.cos(math.radians(lat)))
    dy = radius_m / _M_PER_DEG_LAT
    ring = [
        (
            lon + dx * math.cos(2 * math.pi * k / points),
            lat + dy * math.sin(2 * math.pi * k / points),
        )
        for k in range(points)
    ]
    ring.append(ring[0])
    return tuple(ring)


def _positive_or(value: float | None, default: float) -> float:
    if value is None:
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value
