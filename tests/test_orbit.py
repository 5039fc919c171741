"""Tests for the orbit sampling layer."""

import math
from datetime import datetime, timezone

import numpy as np
import pytest

from impactglobe.models import AsteroidRecord, EntityKind
from impactglobe.orbit import (
    EARTH_RADIUS_M,
    MAX_SPEED_FACTOR,
    MIN_SPEED_FACTOR,
    OrbitField,
    generate_orbits,
    resolve_inclination,
    sample_orbit,
    scaled_radius,
    speed_factor,
    true_period,
    visual_scale,
)

START = datetime(2025, 10, 5, tzinfo=timezone.utc)


def _asteroid(**overrides) -> AsteroidRecord:
    fields = dict(
        id="2000433",
        name="433 Eros",
        diameter_m=340.0,
        velocity_km_s=18.5,
        altitude_m=7_500_000.0,
        inclination_rad=0.3,
    )
    fields.update(overrides)
    return AsteroidRecord(**fields)


def _all_finite(path) -> bool:
    return all(math.isfinite(c) for s in path.samples for c in s.position)


class TestScaling:
    """Radius, period, and speed factor derivation."""

    def test_radius_is_logarithmic_in_altitude(self):
        """Zero altitude adds log10(100) * 200 km to Earth's radius."""
        assert scaled_radius(0) == pytest.approx(EARTH_RADIUS_M + 400_000)
        assert scaled_radius(9_900_000) == pytest.approx(EARTH_RADIUS_M + 800_000)

    def test_negative_altitude_treated_as_zero(self):
        assert scaled_radius(-5_000_000) == scaled_radius(0)

    def test_period_from_circumference_and_velocity(self):
        radius = 7_000_000.0
        assert true_period(radius, 10.0) == pytest.approx(2 * math.pi * radius / 10_000)

    def test_zero_velocity_period_is_infinite(self):
        assert true_period(7_000_000.0, 0.0) == math.inf

    def test_zero_radius_period_is_infinite(self):
        assert true_period(0.0, 18.5) == math.inf

    def test_sub_meter_radius_period_is_infinite(self):
        assert true_period(1e-3, 18.5) == math.inf
        assert speed_factor(true_period(0.5, 18.5)) == MIN_SPEED_FACTOR

    def test_high_velocity_still_capped(self):
        assert speed_factor(true_period(7_000_000.0, 1e9)) == MAX_SPEED_FACTOR

    @pytest.mark.parametrize("period", [math.inf, 0.0, -1.0, math.nan])
    def test_degenerate_periods_use_floor(self, period):
        assert speed_factor(period) == MIN_SPEED_FACTOR

    def test_slow_orbit_is_floored(self):
        """A period much longer than the window would stall without the floor."""
        assert speed_factor(1_000_000.0) == MIN_SPEED_FACTOR

    def test_fast_orbit_is_capped(self):
        assert speed_factor(1e-6) == MAX_SPEED_FACTOR

    def test_regular_factor(self):
        assert speed_factor(1800.0) == pytest.approx(0.2)

    def test_visual_scale_has_minimum(self):
        assert visual_scale(0.0) == pytest.approx(25.0)
        assert visual_scale(10_000.0) == pytest.approx(50.0)
        assert visual_scale(20_000.0) == pytest.approx(100.0)


class TestInclination:
    """Inclination substitution and clamping."""

    @pytest.mark.parametrize("value", [None, 0.0])
    def test_missing_inclination_is_randomized_within_bounds(self, value):
        rng = np.random.default_rng(7)
        for _ in range(50):
            inc = resolve_inclination(value, rng)
            assert -math.radians(60) <= inc <= math.radians(60)

    def test_small_positive_inclination_clamped(self):
        rng = np.random.default_rng(0)
        assert resolve_inclination(0.01, rng) == pytest.approx(math.radians(10))

    def test_small_negative_inclination_keeps_sign(self):
        rng = np.random.default_rng(0)
        assert resolve_inclination(-0.01, rng) == pytest.approx(-math.radians(10))

    def test_large_inclination_unchanged(self):
        rng = np.random.default_rng(0)
        assert resolve_inclination(0.8, rng) == 0.8


class TestSampleOrbit:
    """Sampling loop output."""

    def test_samples_have_increasing_timestamps_and_finite_positions(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(1), start=START)
        assert len(path.samples) > 1
        stamps = [s.timestamp for s in path.samples]
        assert all(a < b for a, b in zip(stamps, stamps[1:]))
        assert _all_finite(path)
        assert path.samples[0].timestamp == START

    def test_sample_count_follows_speed_factor(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(1), start=START)
        assert len(path.samples) == math.floor(360 * path.speed_factor) + 1

    def test_positions_lie_on_orbit_radius(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(1), start=START)
        for s in path.samples:
            assert math.dist((0, 0, 0), s.position) == pytest.approx(path.radius_m)

    def test_positions_lie_in_inclined_plane(self):
        """Every point satisfies z * cos(inc) == y * sin(inc)."""
        path = sample_orbit(_asteroid(), np.random.default_rng(1), start=START)
        inc = path.inclination_rad
        for _, y, z in path.ring:
            assert z * math.cos(inc) == pytest.approx(y * math.sin(inc), abs=1e-3)

    def test_ring_matches_samples(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(1), start=START)
        assert path.ring == tuple(s.position for s in path.samples)

    @pytest.mark.parametrize(
        "overrides",
        [
            dict(velocity_km_s=0.0),
            dict(diameter_m=0.0),
            dict(inclination_rad=None),
            dict(velocity_km_s=0.0, diameter_m=0.0, altitude_m=0.0, inclination_rad=None),
            dict(velocity_km_s=math.nan, altitude_m=math.inf),
        ],
    )
    def test_degenerate_records_produce_finite_paths(self, overrides):
        path = sample_orbit(_asteroid(**overrides), np.random.default_rng(3), start=START)
        assert path.samples
        assert _all_finite(path)
        assert math.isfinite(path.scale)

    def test_zero_velocity_uses_floor_and_terminates(self):
        path = sample_orbit(
            _asteroid(velocity_km_s=0.0), np.random.default_rng(3), start=START
        )
        assert path.speed_factor == MIN_SPEED_FACTOR
        assert len(path.samples) == 37

    def test_zero_radius_uses_floor(self):
        path = sample_orbit(
            _asteroid(),
            np.random.default_rng(3),
            start=START,
            base_radius=0.0,
            scale_constant=0.0,
        )
        assert path.radius_m == 0.0
        assert path.speed_factor == MIN_SPEED_FACTOR
        assert _all_finite(path)

    def test_tiny_radius_uses_floor_not_cap(self):
        path = sample_orbit(
            _asteroid(),
            np.random.default_rng(3),
            start=START,
            base_radius=1e-3,
            scale_constant=0.0,
        )
        assert path.period_s == math.inf
        assert path.speed_factor == MIN_SPEED_FACTOR
        assert len(path.samples) == 37
        assert _all_finite(path)

    def test_start_phase_differs_between_generations(self):
        rng = np.random.default_rng()
        a = sample_orbit(_asteroid(), rng, start=START)
        b = sample_orbit(_asteroid(), rng, start=START)
        assert a.start_phase_rad != b.start_phase_rad
        assert a.radius_m == b.radius_m
        assert a.period_s == b.period_s
        assert a.speed_factor == b.speed_factor

    def test_seeded_generator_is_reproducible(self):
        a = sample_orbit(_asteroid(inclination_rad=None), np.random.default_rng(42), start=START)
        b = sample_orbit(_asteroid(inclination_rad=None), np.random.default_rng(42), start=START)
        assert a == b


class TestPositionAt:
    """Time-driven position lookup."""

    def test_exact_sample_positions(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(5), start=START)
        assert path.position_at(0.0) == pytest.approx(path.samples[0].position, abs=1.0)
        t1 = (path.samples[1].timestamp - START).total_seconds()
        assert path.position_at(t1) == pytest.approx(path.samples[1].position, abs=1.0)

    def test_wraps_after_window(self):
        path = sample_orbit(_asteroid(), np.random.default_rng(5), start=START)
        assert path.position_at(path.duration_s + 1.0) == pytest.approx(
            path.position_at(1.0), abs=1.0
        )

    def test_single_sample_path(self):
        path = sample_orbit(
            _asteroid(), np.random.default_rng(5), start=START, duration_s=0.0
        )
        assert len(path.samples) == 1
        assert path.position_at(12.0) == path.samples[0].position


class TestOrbitPass:
    """Whole-catalog passes and the live pass holder."""

    def test_one_path_per_asteroid(self):
        records = (
            _asteroid(id="a", name="A"),
            _asteroid(id="b", name="B"),
            _asteroid(id="a", name="A duplicate"),
        )
        orbit_pass = generate_orbits("2025-10-05", records, np.random.default_rng(0), START)
        assert set(orbit_pass.paths) == {"a", "b"}
        assert orbit_pass.paths["a"].asteroid.name == "A"

    def test_entities_are_tagged(self):
        records = (_asteroid(id="a", name="A"),)
        orbit_pass = generate_orbits("2025-10-05", records, np.random.default_rng(0), START)
        kinds = sorted(e.kind.value for e in orbit_pass.entities)
        assert kinds == [EntityKind.ASTEROID.value, EntityKind.ORBIT_TRACE.value]
        assert orbit_pass.entity("a").kind is EntityKind.ASTEROID
        assert orbit_pass.entity("a:trace").kind is EntityKind.ORBIT_TRACE
        assert orbit_pass.entity("missing") is None

    def test_palette_cycles(self):
        records = tuple(_asteroid(id=str(i), name=str(i)) for i in range(12))
        orbit_pass = generate_orbits("2025-10-05", records, np.random.default_rng(0), START)
        assert orbit_pass.paths["0"].color == orbit_pass.paths["10"].color
        assert orbit_pass.paths["0"].color != orbit_pass.paths["1"].color

    def test_empty_catalog(self):
        orbit_pass = generate_orbits("2025-10-05", (), np.random.default_rng(0), START)
        assert orbit_pass.paths == {}
        assert orbit_pass.entities == ()

    def test_field_replaces_whole_pass(self):
        field = OrbitField(np.random.default_rng(0))
        assert field.current is None
        first = field.replace("2025-10-05", (_asteroid(id="a"), _asteroid(id="b")), START)
        second = field.replace("2025-10-06", (_asteroid(id="c"),), START)
        assert field.current is second
        assert set(second.paths) == {"c"}
        assert set(first.paths) == {"a", "b"}
        field.clear()
        assert field.current is None
