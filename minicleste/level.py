"""A playable level: platforms plus spikes, springs, moving and crumbling blocks."""

from __future__ import annotations

from dataclasses import dataclass, field

from minicleste.basemap import SCALE, BaseMap, Rect, TransferDirection, Vector
from minicleste.crushblock import CrushBlock
from minicleste.mover import Mover

SPIKE_COLOR = (255, 0, 0)
SPRING_COLOR = (0, 255, 0)

# Per level: spawn point, optional exit, and entities, all in game pixels.
_SPAWNS: dict[int, Vector] = {
    1: (23, 144),
    2: (40, 150),
    3: (40, 150),
    4: (40, 150),
    5: (40, 150),
    6: (50, 150),
}

_TRANSFERS: dict[int, tuple[TransferDirection, int]] = {
    1: (TransferDirection.UP, 1),
    2: (TransferDirection.UP, 2),
    3: (TransferDirection.UP, 3),
    4: (TransferDirection.UP, 4),
    5: (TransferDirection.UP, 5),
}

# (width, height, x, y)
_SPIKES: dict[int, list[tuple[float, float, float, float]]] = {
    1: [
        (40, 2, 40, 166), (40, 2, 104, 150), (32, 2, 176, 126),
        (24, 2, 208, 158), (2, 16, 270, 80),
    ],
    2: [(40, 2, 160, 110), (16, 2, 192, 158), (16, 2, 208, 166)],
    3: [
        (24, 2, 184, 158), (24, 2, 208, 134), (40, 2, 232, 142),
        (32, 2, 272, 158), (8, 2, 304, 150),
    ],
    4: [(2, 32, 16, 112), (2, 32, 70, 96), (16, 2, 80, 110), (2, 32, 222, 32)],
}

_SPRINGS: dict[int, list[tuple[float, float, float, float]]] = {
    2: [(16, 4, 112, 142)],
}

# (width, height, start, end, speed); width and height in game pixels.
_MOVERS: dict[int, list[tuple[float, float, Vector, Vector, float]]] = {
    4: [(24, 16, (112, 80), (184, 72), 200.0)],
}

# (width, height, x, y)
_CRUSH_BLOCKS: dict[int, list[tuple[float, float, float, float]]] = {
    5: [(24, 8, 232, 152), (24, 8, 272, 128), (24, 8, 224, 104), (24, 8, 240, 64)],
}


def _scaled_rect(size: Vector, position: Vector) -> Rect:
    return Rect(float(position[0]), float(position[1]), float(size[0]), float(size[1]))


@dataclass
class Level(BaseMap):
    """Level geometry together with its hazards and moving parts."""

    spikes: list[Rect] = field(default_factory=list)
    springs: list[Rect] = field(default_factory=list)
    movers: list[Mover] = field(default_factory=list)
    crushes: list[CrushBlock] = field(default_factory=list)

    def load(self, map_id: int) -> None:
        """Load the platforms and entities of level `map_id`."""
        super().load(map_id)
        self.spikes.clear()
        self.springs.clear()
        self.movers.clear()
        self.crushes.clear()

        if map_id in _SPAWNS:
            x, y = _SPAWNS[map_id]
            self.spawn_point = (float(x), float(y))
        if map_id in _TRANSFERS:
            self.set_transfer(*_TRANSFERS[map_id])

        for width, height, x, y in _SPIKES.get(map_id, ()):
            self.add_spike((width * SCALE, height * SCALE), (x * SCALE, y * SCALE))
        for width, height, x, y in _SPRINGS.get(map_id, ()):
            self.add_spring((width * SCALE, height * SCALE), (x * SCALE, y * SCALE))
        for width, height, start, end, speed in _MOVERS.get(map_id, ()):
            self.add_mover((width * SCALE, height * SCALE), start, end, speed)
        for width, height, x, y in _CRUSH_BLOCKS.get(map_id, ()):
            self.add_crush_block((width * SCALE, height * SCALE), (x, y))

    def add_spike(self, size: Vector, position: Vector) -> None:
        """Add a deadly area; size and position in screen pixels."""
        self.spikes.append(_scaled_rect(size, position))

    def add_spring(self, size: Vector, position: Vector) -> None:
        """Add a spring; size and position in screen pixels."""
        self.springs.append(_scaled_rect(size, position))

    def add_mover(self, size: Vector, start: Vector, end: Vector, speed: float) -> None:
        """Add a moving block; size in screen pixels, start and end in game pixels."""
        self.movers.append(Mover(size, start, end, speed))

    def add_crush_block(self, size: Vector, position: Vector) -> None:
        """Add a crumbling block; size in screen pixels, position in game pixels."""
        self.crushes.append(CrushBlock((float(size[0]), float(size[1])), position))

    def update(self, dt: float) -> None:
        """Advance every moving and crumbling block by `dt` seconds."""
        for mover in self.movers:
            mover.update(dt)
        for crush in self.crushes:
            crush.update(dt)

    def reset(self) -> None:
        """Return moving and crumbling blocks to their initial state."""
        for mover in self.movers:
            mover.reset()
        for crush in self.crushes:
            crush.reset()

    def clear(self) -> None:
        """Remove all platforms and entities."""
        self.platforms.clear()
        self.spikes.clear()
        self.springs.clear()
        self.movers.clear()
        self.crushes.clear()