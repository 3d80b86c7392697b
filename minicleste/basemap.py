"""Rectangles, platforms and the fixed platform layouts of every level."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

SCALE = 5
"""Screen pixels per game pixel."""

EARTH_COLOR = (185, 122, 87)

Color = tuple[int, int, int]
Vector = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return min(self.x, self.x + self.width)

    @property
    def right(self) -> float:
        return max(self.x, self.x + self.width)

    @property
    def top(self) -> float:
        return min(self.y, self.y + self.height)

    @property
    def bottom(self) -> float:
        return max(self.y, self.y + self.height)

    def intersects(self, other: Rect) -> bool:
        """True if the two rectangles overlap with a non-empty area."""
        return (
            max(self.left, other.left) < min(self.right, other.right)
            and max(self.top, other.top) < min(self.bottom, other.bottom)
        )


@dataclass(frozen=True)
class Platform:
    """A solid block of level geometry."""

    rect: Rect
    color: Color = EARTH_COLOR


class TransferDirection(IntEnum):
    """Screen edge the player leaves through to reach the next level."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


_PX = 1 / SCALE

# (width, height, x, y[, color]) in game pixels.
_LAYOUTS: dict[int, list[tuple]] = {
    1: [
        (248, 8, 0, 0), (72, 8, 0, 8), (72, 8, 104, 8), (16, 56, 0, 16),
        (40, 40, 32, 16), (40, 8, 104, 16), (24, 24, 104, 24), (8, 16, 168, 16),
        (8, 72, 0, 72, (188, 122, 87)), (232, 16, 0, 168), (40, 24, 0, 144),
        (152, 8, 80, 160), (128, 8, 80, 152), (24, 24, 80, 128), (64, 24, 144, 128),
        (32, 48, 144, 80), (8, 184, 312, 0), (8, 152, 304, 0), (8, 144, 296, 0),
        (8, 128, 288, 0), (8, 80, 280, 16), (8, 40, 272, 56), (24, 24, 248, 56),
        (8, 8, 272, 32),
    ],
    2: [
        (272, 8, 0, 0), (80, 24, 0, 8), (72, 32, 0, 32), (16, 32, 0, 64),
        (8, 32, 112, 8), (144, 8, 128, 8), (40, 24, 160, 16), (32, 8, 168, 40),
        (24, 24, 168, 48), (56, 8, 216, 16), (40, 24, 232, 24), (16, 32, 256, 48),
        (8, 16, 264, 80), (8, 64, 0, 96), (128, 24, 0, 160), (16, 16, 112, 144),
        (8, 24, 160, 112), (24, 72, 168, 112), (8, 16, 192, 112), (16, 8, 192, 160),
        (128, 16, 192, 168), (96, 24, 224, 144), (64, 24, 256, 120), (16, 120, 304, 0),
    ],
    3: [
        (264, 16, 0, 0), (48, 16, 0, 16), (16, 16, 0, 32), (16, 16, 120, 16),
        (80, 8, 136, 16), (8, 16, 208, 24), (16, 8, 248, 16), (8, 8, 256, 24),
        (16, 16, 120, 16), (8, 104, 0, 48), (16, 32, 0, 152), (56, 16, 16, 168),
        (24, 56, 296, 0), (16, 40, 304, 56), (8, 56, 312, 96), (136, 24, 184, 160),
        (24, 24, 208, 136), (40, 16, 232, 144), (16, 8, 304, 152), (24, 16, 72, 64),
        (8, 24, 88, 80), (8, 16, 128, 96), (32, 24, 128, 112), (16, 16, 144, 136),
        (8, 8, 152, 152), (24, 24, 248, 64), (16, 24, 248, 88), (8, 8, 256, 112),
    ],
    4: [
        (168, 16, _PX, _PX), (96, 8, _PX, 17), (48, 8, _PX, 25), (40, 8, _PX, 33),
        (16, 144, _PX, 41), (8, 40, 17, 145), (8, 72, 17, 41), (64, 24, 25, 161),
        (24, 24, 145, 17), (8, 16, 161, 41), (120, 16, 201, _PX), (80, 8, 201, 17),
        (40, 8, 217, 25), (32, 24, 225, 33), (16, 8, 225, 57), (8, 32, 233, 65),
        (32, 24, 289, 17), (16, 64, 305, 41), (8, 80, 313, 105), (32, 8, 65, 73),
        (16, 16, 65, 81), (8, 32, 73, 97), (8, 16, 81, 113), (8, 8, 89, 113),
    ],
    5: [
        (176, 8, 0, 0), (112, 16, 208, 0), (48, 8, 0, 7), (24, 8, 152, 7),
        (32, 24, 0, 15), (16, 64, 0, 39), (8, 80, 0, 103), (24, 24, 8, 159),
        (8, 8, 24, 151), (176, 16, 32, 167), (16, 16, 112, 151), (32, 8, 288, 15),
        (16, 16, 304, 23), (8, 144, 312, 39), (16, 16, 144, 47), (8, 8, 152, 63),
        (48, 48, 160, 47), (24, 8, 184, 39), (24, 8, 184, 95), (16, 16, 184, 103),
        (8, 16, 192, 119),
    ],
    6: [
        (320, 20, 0, 160), (16, 8, 0, 152), (200, 28, 120, 152),
        (96, 36, 128, 144), (72, 44, 136, 136), (48, 52, 136, 128),
    ],
}


@dataclass
class BaseMap:
    """Static geometry of a level plus its spawn point and exit."""

    platforms: list[Platform] = field(default_factory=list)
    spawn_point: Vector = (0.0, 0.0)
    transfer_direction: TransferDirection = TransferDirection.NONE
    target_map_index: int = -1
    _layout_id: int | None = field(default=None, init=False, repr=False, compare=False)

    def load(self, map_id: int) -> None:
        """Replace the platforms with the layout of level `map_id`; unknown ids leave none."""
        self._build_platforms(map_id)

    def _build_platforms(self, map_id: int) -> None:
        self._layout_id = map_id
        self.platforms.clear()
        for width, height, x, y, *rest in _LAYOUTS.get(map_id, ()):
            color = rest[0] if rest else EARTH_COLOR
            self.add_platform(
                (width * SCALE, height * SCALE), (x * SCALE, y * SCALE), color
            )

    def reset(self) -> None:
        """Restore the platforms of the last loaded layout, if any was loaded."""
        if self._layout_id is not None:
            self._build_platforms(self._layout_id)

    def add_platform(self, size: Vector, position: Vector, color: Color) -> None:
        """Add a platform given its size and position in screen pixels."""
        width, height = size
        x, y = position
        self.platforms.append(
            Platform(Rect(float(x), float(y), float(width), float(height)), tuple(color))
        )

    def set_transfer(self, direction: int, target_map: int) -> None:
        """Set the edge that leads to level index `target_map`."""
        self.transfer_direction = TransferDirection(direction)
        self.target_map_index = target_map