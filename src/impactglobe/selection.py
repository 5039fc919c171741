"""Impact selection state machine: asteroid focus, impact targeting, cancel/confirm.

The selected asteroid (transient UI focus) and the locked target (subject of
an in-progress targeting sequence) are held in two independent slots. Invalid
transitions are normal UI races and are ignored, never raised.
"""

import enum
import logging
from collections.abc import Callable

from impactglobe import geodesy
from impactglobe.consequence import DEFAULT_DIAMETER_M, DEFAULT_VELOCITY_KM_S
from impactglobe.models import (
    AsteroidSnapshot,
    EntityKind,
    ImpactEvent,
    ImpactPoint,
    SceneEntity,
    Vector3,
)

logger = logging.getLogger(__name__)

_MARKER_ID = "impact-marker"


class SelectionState(enum.Enum):
    IDLE = "idle"
    ASTEROID_SELECTED = "asteroid_selected"
    TARGETING = "targeting"
    CONFIRMED = "confirmed"


class ImpactSelector:
    """Tracks one selection/targeting cycle and produces ImpactEvents.

    Args:
        locate: Maps a picked Earth-fixed position to (lat, lon) degrees.
            Defaults to the WGS-84 conversion in impactglobe.geodesy.
    """

    def __init__(
        self,
        locate: Callable[[Vector3], tuple[float, float]] = geodesy.to_geographic,
    ) -> None:
        self._locate = locate
        self.selected: SceneEntity | None = None
        self.locked: SceneEntity | None = None
        self.candidate: ImpactPoint | None = None
        self.marker: SceneEntity | None = None
        self.is_targeting = False
        self.last_event: ImpactEvent | None = None

    @property
    def state(self) -> SelectionState:
        if self.is_targeting:
            return SelectionState.TARGETING
        if self.last_event is not None:
            return SelectionState.CONFIRMED
        if self.selected is not None:
            return SelectionState.ASTEROID_SELECTED
        return SelectionState.IDLE

    @property
    def markers(self) -> tuple[SceneEntity, ...]:
        """Impact markers currently on the globe (never more than one)."""
        return (self.marker,) if self.marker is not None else ()

    def select(self, entity: SceneEntity | None) -> None:
        """Handle a selection-changed event from the globe.

        Anything other than an ASTEROID entity (orbit traces, the impact
        marker, empty space) counts as a deselection. The locked target is
        left untouched.
        """
        self.last_event = None
        if entity is not None and entity.kind is EntityKind.ASTEROID:
            self.selected = entity
        else:
            self.selected = None

    def deselect(self) -> None:
        self.select(None)

    def begin_targeting(self) -> bool:
        """Lock the selected asteroid and start picking an impact point."""
        if self.is_targeting or self.selected is None:
            logger.debug("begin_targeting ignored in state %s", self.state.value)
            return False
        self.last_event = None
        self.locked = self.selected
        self.is_targeting = True
        return True

    def pick(
        self,
        position: Vector3 | None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> ImpactPoint | None:
        """Replace the candidate impact point with a new pick.

        Geographic coordinates are derived from the position when not given.
        Picks outside targeting, or without a position, are ignored.
        """
        if not self.is_targeting or position is None:
            logger.debug("pick ignored in state %s", self.state.value)
            return None
        if lat is None or lon is None:
            lat, lon = self._locate(position)
        self.candidate = ImpactPoint(position=tuple(position), lat=lat, lon=lon)
        self.marker = SceneEntity(
            id=_MARKER_ID,
            name="Impact point",
            kind=EntityKind.IMPACT_MARKER,
            position=self.candidate.position,
        )
        return self.candidate

    def cancel(self) -> None:
        """Leave targeting: clear the candidate point, its marker, and the lock."""
        self.is_targeting = False
        self.candidate = None
        self.marker = None
        self.locked = None

    def confirm(self) -> ImpactEvent | None:
        """Finalize the impact. Returns None unless a point and a target are both set."""
        if not self.is_targeting or self.candidate is None or self.locked is None:
            logger.debug("confirm ignored in state %s", self.state.value)
            return None
        event = ImpactEvent(
            lat=self.candidate.lat,
            lon=self.candidate.lon,
            position=self.candidate.position,
            asteroid=snapshot(self.locked),
        )
        self.cancel()
        self.last_event = event
        logger.info(
            "impact confirmed: %s at lat %.4f, lon %.4f",
            event.asteroid.name,
            event.lat,
            event.lon,
        )
        return event

    def reset(self) -> None:
        """Return to IDLE, dropping every slot."""
        self.cancel()
        self.selected = None
        self.last_event = None


def snapshot(entity: SceneEntity) -> AsteroidSnapshot:
    """Copy the physical parameters of a locked entity.

    Entities without a catalog record fall back to the reference asteroid
    (340 m, 18.5 km/s) under the entity's own name.
    """
    record = entity.asteroid
    if record is None:
        return AsteroidSnapshot(
            name=entity.name,
            diameter_m=DEFAULT_DIAMETER_M,
            velocity_km_s=DEFAULT_VELOCITY_KM_S,
        )
    return AsteroidSnapshot(
        name=record.name,
        diameter_m=record.diameter_m,
        velocity_km_s=record.velocity_km_s,
    )
