"""Data model definitions — explicit boundaries between catalog, orbit, selection, and report layers."""

import enum
from dataclasses import dataclass, field
from datetime import datetime

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class AsteroidRecord:
    """A single catalog entry. Read-only; sourced from the catalog service."""

    id: str  # Catalog identifier
    name: str  # Display name ("(2024 AB)")
    diameter_m: float  # Mean diameter (meters)
    velocity_km_s: float  # Relative velocity (km/s)
    altitude_m: float  # Altitude above Earth's surface at reference time (meters)
    inclination_rad: float | None = None  # Orbital inclination; None when absent


@dataclass(frozen=True)
class OrbitSample:
    """One timestamped point on an orbit path."""

    timestamp: datetime  # UTC
    position: Vector3  # Earth-fixed Cartesian (meters)


@dataclass(frozen=True)
class OrbitPath:
    """Time-sampled synthetic orbit for one asteroid in one sampling pass."""

    asteroid: AsteroidRecord
    samples: tuple[OrbitSample, ...]
    ring: tuple[Vector3, ...]  # Static background trace (positions only)
    radius_m: float  # Visualization-scale orbital radius
    period_s: float  # True orbital period at radius_m (inf for zero velocity)
    speed_factor: float  # Effective (floored) speed-up factor
    inclination_rad: float  # Resolved inclination after substitution/clamp
    start_phase_rad: float  # Random start phase
    scale: float  # Visual model scale
    color: str = "#ffff00"

    @property
    def duration_s(self) -> float:
        """Simulated seconds covered by the samples."""
        if len(self.samples) < 2:
            return 0.0
        return (self.samples[-1].timestamp - self.samples[0].timestamp).total_seconds()

    def position_at(self, elapsed_s: float) -> Vector3:
        """Interpolated position `elapsed_s` seconds after the first sample.

        The clock loops: offsets past the end wrap back to the start.
        """
        span = self.duration_s
        if span <= 0:
            return self.samples[0].position
        offset = elapsed_s % span
        step = span / (len(self.samples) - 1)
        idx = min(int(offset // step), len(self.samples) - 2)
        frac = (offset - idx * step) / step
        p0 = self.samples[idx].position
        p1 = self.samples[idx + 1].position
        return (
            p0[0] + (p1[0] - p0[0]) * frac,
            p0[1] + (p1[1] - p0[1]) * frac,
            p0[2] + (p1[2] - p0[2]) * frac,
        )


class EntityKind(enum.Enum):
    """Role of a scene object. Only ASTEROID entities are selectable."""

    ASTEROID = "asteroid"
    ORBIT_TRACE = "orbit_trace"
    IMPACT_MARKER = "impact_marker"


@dataclass(frozen=True)
class SceneEntity:
    """A tagged scene object handed to and back from the presentation layer."""

    id: str
    name: str
    kind: EntityKind
    asteroid: AsteroidRecord | None = None
    position: Vector3 | None = None  # Only set for impact markers


@dataclass(frozen=True)
class OrbitPass:
    """The result of one sampling pass over a catalog. The sole input to globe renderers."""

    date: str  # "YYYY-MM-DD"
    paths: dict[str, OrbitPath] = field(default_factory=dict)  # keyed by asteroid id
    entities: tuple[SceneEntity, ...] = ()

    def entity(self, entity_id: str) -> SceneEntity | None:
        for e in self.entities:
            if e.id == entity_id:
                return e
        return None


@dataclass(frozen=True)
class ImpactPoint:
    """Candidate impact point picked on the globe."""

    position: Vector3
    lat: float  # Latitude (decimal degrees)
    lon: float  # Longitude (decimal degrees)


@dataclass(frozen=True)
class AsteroidSnapshot:
    """Physical parameters copied at confirmation time."""

    name: str
    diameter_m: float
    velocity_km_s: float


@dataclass(frozen=True)
class ImpactEvent:
    """A confirmed impact. Ownership passes to the report layer."""

    lat: float
    lon: float
    position: Vector3
    asteroid: AsteroidSnapshot


@dataclass(frozen=True)
class ImpactConsequence:
    """Derived impact figures. Pure function of diameter and velocity."""

    crater_diameter_m: float
    crater_depth_m: float
    seismic_magnitude: float  # Richter-like
    energy_megatons: float

    @property
    def crater_radius_m(self) -> float:
        return self.crater_diameter_m / 2

    @property
    def devastation_radius_m(self) -> float:
        return self.crater_radius_m * 3
