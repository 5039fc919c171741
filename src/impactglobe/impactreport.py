"""CLI entry point for impact report generation.

Edit the date/lat/lon variables at the top, then run:
    uv run python src/impactglobe/impactreport.py
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from impactglobe import geodesy  # noqa: E402
from impactglobe.catalog import fetch_catalog  # noqa: E402
from impactglobe.consequence import consequence_of  # noqa: E402
from impactglobe.models import EntityKind  # noqa: E402
from impactglobe.orbit import generate_orbits  # noqa: E402
from impactglobe.renderers.static import save_static_report  # noqa: E402
from impactglobe.selection import ImpactSelector  # noqa: E402

logging.basicConfig(level=logging.INFO)

date = "2025-10-05"
lat, lon = 19.43, -99.13

orbit_pass = generate_orbits(date, fetch_catalog(date))
asteroids = [e for e in orbit_pass.entities if e.kind is EntityKind.ASTEROID]
if not asteroids:
    raise SystemExit(f"No asteroids for {date}")

selector = ImpactSelector()
selector.select(asteroids[0])
selector.begin_targeting()
selector.pick(geodesy.to_cartesian(lat, lon))
event = selector.confirm()
if event is None:
    raise SystemExit(f"Impact at {lat}, {lon} was not confirmed")

path = save_static_report(event, consequence_of(event))
print(f"Saved: {path}")
