"""Orbit sampling layer — synthetic inclined circular orbits for catalog asteroids.

This is an illustrative fixed-plane circular orbit, not a propagator. Altitudes
are compressed logarithmically so low and far objects stay visible side by side,
and the true orbital period is squeezed into a fixed visualization window.
"""

import logging
import math
from datetime import datetime, timedelta, timezone

import numpy as np

from impactglobe.models import (
    AsteroidRecord,
    EntityKind,
    OrbitPass,
    OrbitPath,
    OrbitSample,
    SceneEntity,
)

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0
DURATION_S = 360.0  # Visualization window (simulated seconds)
ALTITUDE_SCALE_M = 200_000.0  # Meters per decade of (altitude_km + 100)
MIN_SPEED_FACTOR = 0.1
MAX_SPEED_FACTOR = 10.0
MIN_ORBIT_RADIUS_M = 1.0  # Smaller radii cannot advance and use the speed floor
RANDOM_INCLINATION_DEG = 60.0  # Substituted inclination lies in [-60°, 60°]
MIN_INCLINATION_DEG = 10.0
MIN_SCALE = 50.0
GLOBAL_SCALE_FACTOR = 0.5

PALETTE: tuple[str, ...] = (
    "#ffff00",  # yellow
    "#ffa500",  # orange
    "#ff0000",  # red
    "#008000",  # green
    "#0000ff",  # blue
    "#ee82ee",  # violet
    "#00ffff",  # cyan
    "#ff00ff",  # magenta
    "#ffd700",  # gold
    "#ff7f50",  # coral
)


def scaled_radius(
    altitude_m: float,
    base_radius: float = EARTH_RADIUS_M,
    scale_constant: float = ALTITUDE_SCALE_M,
) -> float:
    """Visualization orbital radius: base + log10(altitude_km + 100) * scale."""
    altitude_km = max(_finite_or(altitude_m, 0.0), 0.0) / 1000
    return base_radius + math.log10(altitude_km + 100) * scale_constant


def true_period(radius_m: float, velocity_km_s: float) -> float:
    """Seconds for one revolution at radius_m. inf when the orbit cannot advance.

    Radii below MIN_ORBIT_RADIUS_M (or non-finite) count as degenerate.
    """
    velocity_ms = _finite_or(velocity_km_s, 0.0) * 1000
    if velocity_ms <= 0:
        return math.inf
    if not (math.isfinite(radius_m) and radius_m >= MIN_ORBIT_RADIUS_M):
        return math.inf
    return 2 * math.pi * radius_m / velocity_ms


def speed_factor(
    period_s: float,
    duration_s: float = DURATION_S,
    floor: float = MIN_SPEED_FACTOR,
    ceiling: float = MAX_SPEED_FACTOR,
) -> float:
    """Compress the true period into duration_s, floored and capped.

    Degenerate periods (zero, negative, inf, NaN) fall back to the floor.
    """
    if not (period_s > 0 and math.isfinite(period_s)):
        return floor
    return min(max(duration_s / period_s, floor), ceiling)


def resolve_inclination(
    inclination_rad: float | None,
    rng: np.random.Generator,
    min_deg: float = MIN_INCLINATION_DEG,
    random_deg: float = RANDOM_INCLINATION_DEG,
) -> float:
    """Substitute a random plane for missing/zero inclination; clamp tiny ones to ±min_deg."""
    if inclination_rad is None or not math.isfinite(inclination_rad) or inclination_rad == 0:
        return math.radians(rng.uniform(-random_deg, random_deg))
    minimum = math.radians(min_deg)
    if abs(inclination_rad) < minimum:
        return minimum if inclination_rad > 0 else -minimum
    return inclination_rad


def visual_scale(
    diameter_m: float,
    min_scale: float = MIN_SCALE,
    scale_factor: float = GLOBAL_SCALE_FACTOR,
) -> float:
    return max(_finite_or(diameter_m, 0.0) / 100, min_scale) * scale_factor


def sample_orbit(
    asteroid: AsteroidRecord,
    rng: np.random.Generator,
    start: datetime | None = None,
    duration_s: float = DURATION_S,
    base_radius: float = EARTH_RADIUS_M,
    scale_constant: float = ALTITUDE_SCALE_M,
    scale_factor: float = GLOBAL_SCALE_FACTOR,
    color: str = PALETTE[0],
) -> OrbitPath:
    """Generate the time-sampled orbit path of a single asteroid.

    Args:
        asteroid: Catalog record. Missing or degenerate fields are replaced
            with sane defaults; this function never raises for bad data.
        rng: Random source for the substituted inclination and start phase.
        start: Timestamp of the first sample (default: now, UTC).
        duration_s: Visualization window the orbit is compressed into.
        base_radius: Radius of the central body (meters).
        scale_constant: Meters added per decade of compressed altitude.
        scale_factor: Global multiplier on the visual model scale.
        color: Display color for the path.

    Returns:
        OrbitPath with samples i = 0 .. floor(duration * speed), inclusive.
    """
    if start is None:
        start = datetime.now(timezone.utc)

    radius = scaled_radius(asteroid.altitude_m, base_radius, scale_constant)
    period = true_period(radius, asteroid.velocity_km_s)
    speed = speed_factor(period, duration_s)
    inclination = resolve_inclination(asteroid.inclination_rad, rng)
    start_phase = float(rng.uniform(0, 2 * math.pi))

    steps = max(duration_s, 0.0) * speed
    i = np.arange(0, math.floor(steps) + 1, dtype=float)
    if steps > 0:
        angles = start_phase + np.radians(i * (360 / steps))
    else:
        angles = np.full_like(i, start_phase)

    x = radius * np.cos(angles)
    y_prime = radius * np.sin(angles)
    y = y_prime * math.cos(inclination)
    z = y_prime * math.sin(inclination)

    ring = tuple(
        (float(px), float(py), float(pz)) for px, py, pz in zip(x, y, z)
    )
    samples = tuple(
        OrbitSample(timestamp=start + timedelta(seconds=float(n) / speed), position=p)
        for n, p in zip(i, ring)
    )
    scale = visual_scale(asteroid.diameter_m, scale_factor=scale_factor)

    logger.debug(
        "orbit %s: altitude %.2f km, scaled %.2f km, radius %.2f km, "
        "scale %.2f, inclination %.2f deg, phase %.2f deg, %d samples",
        asteroid.name,
        max(_finite_or(asteroid.altitude_m, 0.0), 0.0) / 1000,
        (radius - base_radius) / 1000,
        radius / 1000,
        scale,
        math.degrees(inclination),
        math.degrees(start_phase),
        len(samples),
    )

    return OrbitPath(
        asteroid=asteroid,
        samples=samples,
        ring=ring,
        radius_m=radius,
        period_s=period,
        speed_factor=speed,
        inclination_rad=inclination,
        start_phase_rad=start_phase,
        scale=scale,
        color=color,
    )


def generate_orbits(
    date: str,
    records: tuple[AsteroidRecord, ...],
    rng: np.random.Generator | None = None,
    start: datetime | None = None,
    **kwargs: float,
) -> OrbitPass:
    """Run one sampling pass over a catalog.

    Each asteroid gets exactly one path; a repeated id keeps the first record.
    Every path shares the same start timestamp. The returned pass also carries
    the tagged scene entities: one ASTEROID and one ORBIT_TRACE per path.

    Args:
        date: Catalog date ("YYYY-MM-DD") the records belong to.
        records: Catalog records, possibly empty.
        rng: Random source; a fresh unseeded generator is used when None.
        start: Shared start timestamp (default: now, UTC).
        **kwargs: Forwarded to sample_orbit (duration_s, base_radius, ...).

    Returns:
        A complete OrbitPass.
    """
    if rng is None:
        rng = np.random.default_rng()
    if start is None:
        start = datetime.now(timezone.utc)

    paths: dict[str, OrbitPath] = {}
    entities: list[SceneEntity] = []
    for index, asteroid in enumerate(records):
        if asteroid.id in paths:
            logger.debug("duplicate asteroid id %s ignored", asteroid.id)
            continue
        path = sample_orbit(
            asteroid,
            rng,
            start=start,
            color=PALETTE[index % len(PALETTE)],
            **kwargs,
        )
        paths[asteroid.id] = path
        entities.append(
            SceneEntity(
                id=f"{asteroid.id}:trace",
                name=f"{asteroid.name} orbit",
                kind=EntityKind.ORBIT_TRACE,
                asteroid=asteroid,
            )
        )
        entities.append(
            SceneEntity(
                id=asteroid.id,
                name=asteroid.name,
                kind=EntityKind.ASTEROID,
                asteroid=asteroid,
            )
        )

    return OrbitPass(date=date, paths=paths, entities=tuple(entities))


class OrbitField:
    """Holds the single live OrbitPass.

    A replacement pass is built completely before it is exposed, so readers
    never see a mix of stale and fresh paths.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng
        self._current: OrbitPass | None = None

    @property
    def current(self) -> OrbitPass | None:
        return self._current

    def replace(
        self,
        date: str,
        records: tuple[AsteroidRecord, ...],
        start: datetime | None = None,
    ) -> OrbitPass:
        fresh = generate_orbits(date, records, rng=self._rng, start=start)
        self._current = fresh
        logger.info("orbit pass for %s: %d asteroids", date, len(fresh.paths))
        return fresh

    def clear(self) -> None:
        self._current = None


def _finite_or(value: float | None, default: float) -> float:
    if value is None:
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default
