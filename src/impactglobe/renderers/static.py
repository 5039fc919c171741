"""Matplotlib static PNG impact report."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from impactglobe.consequence import footprint_ring
from impactglobe.models import ImpactConsequence, ImpactEvent

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_report(
    event: ImpactEvent, consequence: ImpactConsequence, chart_size: int = 10
) -> Figure:
    """Render an impact as a static matplotlib image.

    The left panel shows the crater and devastation footprints in lon/lat
    around the impact point; the right panel lists the consequence figures.

    Args:
        event: Confirmed impact.
        consequence: Its computed consequences.
        chart_size: Output image height in inches (width is 1.6x).

    Returns:
        matplotlib Figure object.
    """
    fig, (ax_map, ax_text) = plt.subplots(
        1, 2, figsize=(chart_size * 1.6, chart_size), width_ratios=[1, 0.6]
    )
    fig.patch.set_facecolor("black")
    for ax in (ax_map, ax_text):
        ax.set_facecolor("black")

    devastation = np.array(
        footprint_ring(event.lat, event.lon, consequence.devastation_radius_m)
    )
    crater = np.array(footprint_ring(event.lat, event.lon, consequence.crater_radius_m))

    ax_map.fill(devastation[:, 0], devastation[:, 1], color="#ff4400", alpha=0.15, zorder=1)
    ax_map.plot(
        devastation[:, 0], devastation[:, 1], color="#ff0000", linestyle="--", linewidth=1
    )
    ax_map.fill(crater[:, 0], crater[:, 1], color="#1a0a00", alpha=0.9, zorder=2)
    ax_map.plot(crater[:, 0], crater[:, 1], color="#8B4513", linewidth=3, zorder=3)
    ax_map.scatter([event.lon], [event.lat], color="#ff0000", marker="x", zorder=4)
    ax_map.set_aspect(1 / np.cos(np.radians(event.lat)))
    ax_map.tick_params(colors="#aaaaaa", labelsize=8)
    for spine in ax_map.spines.values():
        spine.set_color("#334466")
    ax_map.set_xlabel("Longitude (°)", color="#aaaaaa")
    ax_map.set_ylabel("Latitude (°)", color="#aaaaaa")

    lines = [
        event.asteroid.name,
        f"lat {event.lat:.4f}, lon {event.lon:.4f}",
        "",
        f"Crater diameter  {consequence.crater_diameter_m:.1f} m",
        f"Crater depth     {consequence.crater_depth_m:.0f} m",
        f"Magnitude        {consequence.seismic_magnitude:.1f}",
        f"Energy           {consequence.energy_megatons:.1f} Mt",
        f"Devastation      {consequence.devastation_radius_m * 2 / 1000:.2f} km",
    ]
    ax_text.text(
        0.0,
        0.95,
        "\n".join(lines),
        color="#e8e8e8",
        family="monospace",
        fontsize=13,
        va="top",
        transform=ax_text.transAxes,
    )
    ax_text.axis("off")

    return fig


def save_static_report(
    event: ImpactEvent,
    consequence: ImpactConsequence,
    output_path: Path | None = None,
) -> Path:
    """Save an impact report as a PNG file.

    Args:
        event: Confirmed impact.
        consequence: Its computed consequences.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"{event.asteroid.name}__{event.lat:.2f}_{event.lon:.2f}.png"
        filename = filename.replace(" ", "_").replace("(", "").replace(")", "")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_report(event, consequence)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path
