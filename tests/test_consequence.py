"""Tests for the impact consequence calculator."""

import math

import pytest

from impactglobe.consequence import compute_consequence, consequence_of, footprint_ring
from impactglobe.models import AsteroidSnapshot, ImpactEvent


class TestComputeConsequence:
    """Crater, seismic, and energy figures."""

    def test_reference_asteroid(self):
        """340 m at 18.5 km/s."""
        c = compute_consequence(340.0, 18.5)
        assert c.crater_diameter_m == pytest.approx(2482.0)
        assert c.crater_depth_m == pytest.approx(442.0)
        assert c.seismic_magnitude == pytest.approx(6.5 + math.log10(340))
        assert c.seismic_magnitude == pytest.approx(9.03, abs=0.01)
        assert c.energy_megatons == pytest.approx(171.125)

    def test_idempotent(self):
        assert compute_consequence(123.4, 17.2) == compute_consequence(123.4, 17.2)

    @pytest.mark.parametrize("diameter", [None, 0.0, -5.0, math.nan, math.inf])
    def test_invalid_diameter_uses_default(self, diameter):
        assert compute_consequence(diameter, 18.5) == compute_consequence(340.0, 18.5)

    @pytest.mark.parametrize("velocity", [None, 0.0, -1.0, math.nan])
    def test_invalid_velocity_uses_default(self, velocity):
        assert compute_consequence(340.0, velocity) == compute_consequence(340.0, 18.5)

    def test_tiny_asteroid_is_finite(self):
        c = compute_consequence(1e-6, 1e-6)
        for value in (c.crater_diameter_m, c.crater_depth_m, c.seismic_magnitude, c.energy_megatons):
            assert math.isfinite(value)

    def test_devastation_radius(self):
        c = compute_consequence(100.0, 20.0)
        assert c.crater_radius_m == pytest.approx(365.0)
        assert c.devastation_radius_m == pytest.approx(1095.0)

    def test_consequence_of_event_uses_snapshot(self):
        snap = AsteroidSnapshot(name="(2024 AB)", diameter_m=340.0, velocity_km_s=18.5)
        event = ImpactEvent(lat=1.0, lon=2.0, position=(0.0, 0.0, 0.0), asteroid=snap)
        assert consequence_of(event) == compute_consequence(340.0, 18.5)
        assert consequence_of(snap) == consequence_of(event)


class TestFootprintRing:
    """Ground circles for crater and devastation overlays."""

    def test_ring_is_closed(self):
        ring = footprint_ring(19.4, -99.1, 1000.0, points=32)
        assert len(ring) == 33
        assert ring[0] == ring[-1]

    def test_ring_extent_at_equator(self):
        ring = footprint_ring(0.0, 0.0, 111_320.0)
        lons = [p[0] for p in ring]
        lats = [p[1] for p in ring]
        assert max(lons) == pytest.approx(1.0)
        assert max(lats) == pytest.approx(111_320.0 / 110_574.0, rel=1e-3)

    def test_longitude_span_widens_with_latitude(self):
        equator = footprint_ring(0.0, 0.0, 5000.0)
        north = footprint_ring(60.0, 0.0, 5000.0)
        assert max(p[0] for p in north) == pytest.approx(2 * max(p[0] for p in equator))
