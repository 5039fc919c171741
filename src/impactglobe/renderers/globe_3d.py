"""Plotly 3D globe renderer.

Draws Earth as a sphere, each asteroid's static orbit ring, the asteroids at
a given clock offset, and the impact marker when one exists. Every trace
carries its SceneEntity id in ``customdata`` so traces can be matched to scene
entities by id. The app selects asteroids through ImpactSelector, not plotly
click events.
"""

import math

import numpy as np
import plotly.graph_objects as go

from impactglobe.models import OrbitPass, SceneEntity
from impactglobe.orbit import EARTH_RADIUS_M

_BG = "#000000"
_EARTH_COLORS = [[0.0, "#0b2a4a"], [0.5, "#1f5f8b"], [1.0, "#3a8fb7"]]
_MARKER_COLOR = "#ff2d2d"
_KM = 1000.0  # Figures are drawn in kilometers


def _earth_surface(resolution: int = 48) -> go.Surface:
    u = np.linspace(0, 2 * np.pi, resolution)
    v = np.linspace(0, np.pi, resolution // 2)
    r = EARTH_RADIUS_M / _KM
    x = r * np.outer(np.cos(u), np.sin(v))
    y = r * np.outer(np.sin(u), np.sin(v))
    z = r * np.outer(np.ones_like(u), np.cos(v))
    return go.Surface(
        x=x,
        y=y,
        z=z,
        surfacecolor=z,
        colorscale=_EARTH_COLORS,
        showscale=False,
        hoverinfo="skip",
        name="earth",
    )


def _marker_size(scale: float) -> float:
    """Map orbit visual scale to a marker size in pixels."""
    return max(4.0, min(4.0 + math.log10(max(scale, 1.0)) * 4, 16.0))


def render_globe(
    orbit_pass: OrbitPass,
    elapsed_s: float = 0.0,
    selected_id: str | None = None,
    markers: tuple[SceneEntity, ...] = (),
) -> go.Figure:
    """Render an orbit pass as a Plotly 3D figure.

    Args:
        orbit_pass: The live sampling pass.
        elapsed_s: Clock offset into the visualization window.
        selected_id: Asteroid id to highlight.
        markers: Impact markers to draw (at most one in practice).

    Returns:
        Plotly Figure object.
    """
    traces = [_earth_surface()]

    for asteroid_id, path in orbit_pass.paths.items():
        ring = np.array(path.ring) / _KM
        traces.append(
            go.Scatter3d(
                x=ring[:, 0],
                y=ring[:, 1],
                z=ring[:, 2],
                mode="lines",
                line=dict(color=path.color, width=2),
                opacity=0.2,
                customdata=[f"{asteroid_id}:trace"] * len(ring),
                hoverinfo="skip",
                name=f"{path.asteroid.name} orbit",
            )
        )

    for asteroid_id, path in orbit_pass.paths.items():
        x, y, z = (c / _KM for c in path.position_at(elapsed_s))
        highlighted = asteroid_id == selected_id
        traces.append(
            go.Scatter3d(
                x=[x],
                y=[y],
                z=[z],
                mode="markers+text",
                marker=dict(
                    size=_marker_size(path.scale) * (1.6 if highlighted else 1.0),
                    color=path.color,
                    line=dict(color="#ffffff", width=2 if highlighted else 0),
                ),
                text=[path.asteroid.name],
                textposition="top center",
                textfont=dict(color="#ffffff", size=12),
                customdata=[asteroid_id],
                hovertemplate=(
                    f"<b>{path.asteroid.name}</b><br>"
                    f"Diameter: {path.asteroid.diameter_m:.2f} m<br>"
                    f"Velocity: {path.asteroid.velocity_km_s:.2f} km/s<br>"
                    f"Altitude: {path.asteroid.altitude_m / 1000:.2f} km<br>"
                    f"Inclination: {math.degrees(path.inclination_rad):.2f}°"
                    "<extra></extra>"
                ),
                name=path.asteroid.name,
            )
        )

    for marker in markers:
        if marker.position is None:
            continue
        mx, my, mz = (c / _KM for c in marker.position)
        traces.append(
            go.Scatter3d(
                x=[mx],
                y=[my],
                z=[mz],
                mode="markers",
                marker=dict(size=10, color=_MARKER_COLOR, symbol="x"),
                customdata=[marker.id],
                hoverinfo="skip",
                name=marker.name,
            )
        )

    fig = go.Figure(data=traces)
    axis = dict(visible=False, showbackground=False)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=700,
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="data",
            bgcolor=_BG,
            camera=dict(eye=dict(x=1.2, y=1.2, z=0.9)),
        ),
    )
    return fig
