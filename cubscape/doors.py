"""Door bookkeeping for the raycaster: which door can be opened or closed."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

from cubscape.colors import rgb_mix_colors, rgb_to_uint
from cubscape.mapgrid import Cell
from cubscape.settings import Settings


class Orientation(enum.Enum):
    """Which family of grid lines a ray crossed when it met a door."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def door_colors(floor_rgb: Sequence[int], ceiling_rgb: Sequence[int]) -> tuple[int, int]:
    """Return (closed, open) minimap colours derived from floor and ceiling.

    The closed door leans towards the ceiling colour, the open one towards
    the floor colour.
    """
    middle = rgb_mix_colors(floor_rgb, ceiling_rgb)
    open_rgb = rgb_mix_colors(floor_rgb, middle)
    closed_rgb = rgb_mix_colors(ceiling_rgb, middle)
    return rgb_to_uint(closed_rgb), rgb_to_uint(open_rgb)


def blocks_ray(cell: Cell) -> bool:
    """True for squares that stop a ray: walls and closed doors."""
    return cell in (Cell.WALL, Cell.DOOR_CLOSED)


@dataclass
class DoorState:
    """Doors seen by the current frame's rays and the ones in reach."""

    closed_color: int = 0
    open_color: int = 0
    can_open: bool = False
    can_close: bool = False
    closed_target: tuple[int, int] = (0, 0)
    open_target: tuple[int, int] = (0, 0)
    closed_seen: set[Orientation] = field(default_factory=set)
    open_seen: set[Orientation] = field(default_factory=set)
    took_nearest: set[Orientation] = field(default_factory=set)
    closed_candidates: dict[Orientation, tuple[int, int]] = field(default_factory=dict)
    open_candidates: dict[Orientation, tuple[int, int, float]] = field(
        default_factory=dict
    )

    @classmethod
    def from_colors(
        cls, floor_rgb: Sequence[int], ceiling_rgb: Sequence[int]
    ) -> DoorState:
        """A fresh state whose minimap colours come from floor and ceiling."""
        closed, opened = door_colors(floor_rgb, ceiling_rgb)
        return cls(closed_color=closed, open_color=opened)

    def reset_can_took(self) -> None:
        """Forget which doors are in reach; done once per frame."""
        self.can_open = False
        self.can_close = False
        self.took_nearest.clear()

    def reset_is_door(self) -> None:
        """Forget which doors the last ray met; done after every column."""
        self.closed_seen.clear()
        self.open_seen.clear()

    def note_closed(
        self, orientation: Orientation, x: int, y: int, centre: bool
    ) -> None:
        """Record that a ray stopped on a closed door at map square (x, y)."""
        self.closed_seen.add(orientation)
        if centre:
            self.closed_candidates[orientation] = (x, y)

    def accept_closed(
        self,
        orientation: Orientation,
        distance: float,
        settings: Settings | None = None,
    ) -> bool:
        """Apply the chosen ray; return True when it ends on a closed door."""
        if orientation not in self.closed_seen:
            return False
        settings = settings or Settings()
        if distance <= settings.door_open_distance:
            self.can_open = True
            self.closed_target = self.closed_candidates.get(orientation, (0, 0))
        return True

    def note_open(
        self,
        orientation: Orientation,
        x: int,
        y: int,
        distance: float,
        centre: bool,
    ) -> None:
        """Record that a ray went through an open door at map square (x, y).

        Only the first open door met by the centre ray is kept, so doors
        hidden behind it are ignored until the next frame.
        """
        self.open_seen.add(orientation)
        if centre and orientation not in self.took_nearest:
            self.open_candidates[orientation] = (x, y, distance)
            self.took_nearest.add(orientation)

    def accept_open(
        self, orientation: Orientation, settings: Settings | None = None
    ) -> None:
        """Allow closing the recorded open door if it is near but not too near."""
        if orientation not in self.open_seen:
            return
        settings = settings or Settings()
        x, y, distance = self.open_candidates.get(orientation, (0, 0, 0.0))
        minimum = settings.player_size // 2 + settings.security_distance
        if minimum < distance <= settings.door_close_distance:
            self.can_close = True
            self.open_target = (x, y)