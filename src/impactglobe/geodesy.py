"""Earth-fixed Cartesian <-> geodetic conversion on the WGS-84 ellipsoid (skyfield)."""

import numpy as np
from skyfield.api import load, wgs84
from skyfield.toposlib import ITRSPosition
from skyfield.units import Distance

from impactglobe.models import Vector3

_ts = load.timescale()
# ITRS round trips are time-independent; any fixed epoch works.
_epoch = _ts.J2000


def to_geographic(position: Vector3) -> tuple[float, float]:
    """Return (latitude, longitude) in decimal degrees for an Earth-fixed position in meters."""
    geocentric = ITRSPosition(Distance(m=np.array(position, dtype=float))).at(_epoch)
    lat, lon = wgs84.latlon_of(geocentric)
    return float(lat.degrees), float(lon.degrees)


def to_cartesian(lat: float, lon: float, height_m: float = 0.0) -> Vector3:
    """Earth-fixed position (meters) of a point given in decimal degrees."""
    x, y, z = wgs84.latlon(lat, lon, elevation_m=height_m).itrs_xyz.m
    return float(x), float(y), float(z)
