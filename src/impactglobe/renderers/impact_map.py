"""Plotly geographic impact map with crater and devastation zones."""

import plotly.graph_objects as go

from impactglobe.consequence import footprint_ring
from impactglobe.models import ImpactConsequence, ImpactEvent

_CRATER_FILL = "rgba(26, 10, 0, 0.8)"
_CRATER_LINE = "#8B4513"
_DEVASTATION_FILL = "rgba(255, 68, 0, 0.15)"
_DEVASTATION_LINE = "#ff0000"


def _ring_trace(
    event: ImpactEvent, radius_m: float, fill: str, line: dict, name: str
) -> go.Scattergeo:
    ring = footprint_ring(event.lat, event.lon, radius_m)
    return go.Scattergeo(
        lon=[p[0] for p in ring],
        lat=[p[1] for p in ring],
        mode="lines",
        fill="toself",
        fillcolor=fill,
        line=line,
        hoverinfo="skip",
        name=name,
    )


def render_impact_map(
    event: ImpactEvent, consequence: ImpactConsequence, span_deg: float | None = None
) -> go.Figure:
    """Render the crater and devastation footprints on an orthographic map.

    Args:
        event: Confirmed impact.
        consequence: Its consequences (crater size drives both rings).
        span_deg: Visible latitude span; defaults to four devastation radii.

    Returns:
        Plotly Figure object.
    """
    devastation = _ring_trace(
        event,
        consequence.devastation_radius_m,
        _DEVASTATION_FILL,
        dict(color=_DEVASTATION_LINE, width=2, dash="dash"),
        "devastation",
    )
    crater = _ring_trace(
        event,
        consequence.crater_radius_m,
        _CRATER_FILL,
        dict(color=_CRATER_LINE, width=4),
        "crater",
    )
    point = go.Scattergeo(
        lon=[event.lon],
        lat=[event.lat],
        mode="markers",
        marker=dict(size=12, color="#ff0000"),
        hovertemplate=(
            f"<b>{event.asteroid.name}</b><br>"
            f"Crater: {consequence.crater_diameter_m:.1f} m<br>"
            f"Devastation: {consequence.devastation_radius_m * 2 / 1000:.2f} km"
            "<extra></extra>"
        ),
        name="impact",
    )

    if span_deg is None:
        span_deg = max(consequence.devastation_radius_m * 4 / 110_574.0, 0.05)

    fig = go.Figure(data=[devastation, crater, point])
    fig.update_layout(
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=600,
        paper_bgcolor="#0e1525",
        geo=dict(
            projection_type="orthographic",
            projection_rotation=dict(lon=event.lon, lat=event.lat),
            projection_scale=max(90 / span_deg, 1.0),
            showland=True,
            landcolor="#2b3a2f",
            showocean=True,
            oceancolor="#0b2a4a",
            showcountries=True,
            countrycolor="#555555",
            resolution=50,
        ),
    )
    return fig
