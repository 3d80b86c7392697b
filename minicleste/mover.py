"""Platform that carries the player to an end point and slowly returns."""

from __future__ import annotations

import math
from enum import Enum, auto

from minicleste.basemap import SCALE, Rect, Vector


class MoverState(Enum):
    IDLE = auto()
    MOVING = auto()
    RETURN = auto()


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Mover:
    """A moving block; `size` is in screen pixels, positions in game pixels."""

    MOVE_DELAY = 0.2
    RETURN_DELAY = 0.5
    RETURN_SPEED_FACTOR = 0.2

    def __init__(self, size: Vector, start: Vector, end: Vector, speed: float) -> None:
        self.size = (float(size[0]), float(size[1]))
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))
        self.speed = float(speed)
        self.state = MoverState.IDLE
        self.activated = False
        self.velocity: Vector = (0.0, 0.0)
        self.position: Vector = self.start
        self.last_position: Vector = (0.0, 0.0)
        self._move_delay_timer = 0.0
        self._return_delay_timer = 0.0
        self._move_pending = False
        self._return_pending = False
        self._remainder: Vector = (0.0, 0.0)

    @property
    def rect(self) -> Rect:
        x, y = self.position
        return Rect(x * SCALE, y * SCALE, self.size[0], self.size[1])

    @property
    def delta(self) -> Vector:
        """Displacement during the most recent update."""
        return (
            self.position[0] - self.last_position[0],
            self.position[1] - self.last_position[1],
        )

    def update(self, dt: float) -> None:
        """Advance the block by `dt` seconds, one whole game pixel at a time."""
        self.last_position = self.position
        cx, cy = self.position

        if self.activated and self.state is MoverState.IDLE:
            self.state = MoverState.MOVING
            if not self._move_pending:
                self._move_delay_timer = self.MOVE_DELAY
                self._move_pending = True

        if self._move_pending:
            self._move_delay_timer -= dt

        if self.state is MoverState.MOVING and self._move_delay_timer <= 0:
            target = self.end
            self._move_pending = False
        elif self.state is MoverState.RETURN:
            target = self.start
        else:
            self.velocity = (0.0, 0.0)
            return

        tx, ty = target
        dx, dy = tx - cx, ty - cy
        distance = math.hypot(dx, dy)
        factor = 1.0 if self.state is MoverState.MOVING else self.RETURN_SPEED_FACTOR
        ux, uy = (dx / distance, dy / distance) if distance > 0.001 else (0.0, 0.0)

        rx, ry = self._remainder
        mx = ux * (self.speed * factor * dt) + rx
        my = uy * (self.speed * factor * dt) + ry
        px, py = _round_half_away(mx), _round_half_away(my)
        self._remainder = (mx - px, my - py)

        steps = max(abs(px), abs(py))
        self.position = (cx + _sign(px) * abs(px), cy + _sign(py) * abs(py))
        x, y = self.position

        if abs(x - tx) < steps and abs(y - ty) < steps:
            self.velocity = (0.0, 0.0)
            self.position = target
            if self.state is MoverState.MOVING and not self._return_pending:
                self._return_delay_timer = self.RETURN_DELAY
                self._return_pending = True
            if self.state is MoverState.RETURN:
                self.state = MoverState.IDLE
            self.activated = False
        else:
            self.velocity = (ux * factor * self.speed, uy * factor * self.speed)

        if self._return_pending:
            self._return_delay_timer -= dt
            if self._return_delay_timer <= 0.0:
                if self.state is MoverState.MOVING:
                    self.state = MoverState.RETURN
                    self.activated = True
                self._return_pending = False

    def activate(self) -> None:
        """Start the block moving; ignored unless it is idle."""
        if self.state is MoverState.IDLE:
            self.activated = True

    def deactivate(self) -> None:
        self.activated = False

    def reset(self) -> None:
        """Put the block back at its start, idle."""
        self.position = self.start
        self.activated = False
        self.state = MoverState.IDLE
        self.velocity = (0.0, 0.0)
        self._move_delay_timer = 0.0
        self._return_delay_timer = 0.0
        self._move_pending = False
        self._return_pending = False