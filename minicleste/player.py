"""The player character: running, jumping, dashing, wall grabbing and climbing."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Optional

from minicleste.basemap import SCALE, Rect, Vector
from minicleste.mover import Mover, MoverState

if TYPE_CHECKING:
    from minicleste.level import Level

DEFAULT_HITBOX: Vector = (8.0 * SCALE, 11.0 * SCALE)
"""Width and height of the player's body in screen pixels."""


def _round_half_away(value: float) -> int:
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


class Player:
    """Player state and physics; positions are in game pixels.

    The body is a box of `hitbox` screen pixels whose bottom centre sits at
    the player's position scaled to the screen.
    """

    MAX_RUN = 90.0
    MAX_JUMP = -105.0
    MAX_FALL = 160.0
    RUN_ACCEL = 1000.0
    GROUND_DECEL = 1000.0
    AIR_DECEL = 650.0
    WALL_JUMP_DECEL = 260.0
    GRAVITY = 900.0
    SLIDE_GRAVITY = 114.0
    JUMP_BOOST = 40.0

    MAX_STAMINA = 110.0
    WALL_GRAB_COST = 10.0
    WALL_JUMP_COST = 27.5
    WALL_CLIMB_COST = 45.45
    CLIMB_SPEED = 45.0
    SLIDE_SPEED = 80.0
    MAX_SLIDE_SPEED = MAX_FALL
    WALL_JUMP_SPEED_Y = -105.0
    WALL_JUMP_SPEED_X = 130.0
    WALL_JUMP_DURATION = 0.2
    JUMP_DURATION = 0.2

    DASH_SPEED = 240.0
    DASH_DURATION = 0.15
    DASH_COOLDOWN = 0.2
    DASH_END_UP_SPEED = -120.0
    DASH_END_RUN_SPEED = 160.0

    SPRING_SPEED = -185.0
    MOVER_STICK_DURATION = 0.13
    GRAB_REACH = 5.0

    def __init__(
        self,
        hitbox: Vector = DEFAULT_HITBOX,
        on_death: Optional[Callable[[], None]] = None,
    ) -> None:
        self.hitbox = (float(hitbox[0]), float(hitbox[1]))
        self.on_death = on_death

        self._x, self._y = 20.0, 140.0
        self.vx, self.vy = 0.0, 0.0
        self._rx, self._ry = 0.0, 0.0
        self.attached_mover: Optional[Mover] = None
        self.was_mover: Optional[Mover] = None

        self.facing = 0
        self.last_facing = 1
        self.speed_facing = 0
        self.ducking = False
        self.on_ground = True
        self.can_jump = False
        self.jump_held = False
        self.on_mover = False

        self.is_dashing = False
        self.dash_charge = 1
        self.dash_timer = 0.0
        self.dash_cooldown_timer = 0.0
        self.dash_dir: Vector = (0.0, 0.0)

        self.can_grab = False
        self.is_grabbing = False
        self.is_sliding = False
        self.grab_allowed = True
        self.wall_grab_dir = 0
        self.stamina = self.MAX_STAMINA

        self.is_wall_jumping = False
        self.is_jumping_wall = False
        self.check_wall = False
        self.wall_jump_timer = 0.0

        self.is_jumping = False
        self.is_spring = False
        self.jump_timer = 0.0
        self.gravity_factor = 1.0

        self.mover_timer = 0.0

    # -- geometry ---------------------------------------------------------

    @property
    def position(self) -> Vector:
        return (self._x, self._y)

    @position.setter
    def position(self, value: Vector) -> None:
        self._x, self._y = float(value[0]), float(value[1])

    @property
    def velocity(self) -> Vector:
        return (self.vx, self.vy)

    @velocity.setter
    def velocity(self, value: Vector) -> None:
        self.vx, self.vy = float(value[0]), float(value[1])

    @property
    def rect(self) -> Rect:
        """The player's body in screen pixels."""
        width, height = self.hitbox
        return Rect(self._x * SCALE - width / 2, self._y * SCALE - height, width, height)

    @property
    def stamina_bar(self) -> tuple[Rect, Rect]:
        """Background and fill of the stamina gauge, in screen pixels."""
        background = Rect(5 * SCALE, 5 * SCALE, 55 * SCALE, 3 * SCALE)
        fill = Rect(5 * SCALE, 5 * SCALE, self.stamina / 2 * SCALE, 3 * SCALE)
        return background, fill

    def _solids(self, level: Level):
        yield from (platform.rect for platform in level.platforms)
        yield from (mover.rect for mover in level.movers)
        yield from (crush.rect for crush in level.crushes if crush.visible)

    def _collides(self, level: Level) -> bool:
        body = self.rect
        return any(body.intersects(solid) for solid in self._solids(level))

    # -- movement ---------------------------------------------------------

    def apply_gravity(self, dt: float) -> None:
        """Accelerate downwards when airborne and not in a dash or jump."""
        if not (self.on_ground or self.is_dashing or self.is_jumping or self.is_wall_jumping):
            self.vy = min(self.vy + self.GRAVITY * self.gravity_factor * dt, self.MAX_FALL)

    def move_x(self, facing: int, dt: float, level: Level) -> None:
        """Apply run acceleration or friction and move horizontally pixel by pixel."""
        decel = self.GROUND_DECEL if self.on_ground else self.AIR_DECEL
        if self.is_jumping_wall:
            decel = self.WALL_JUMP_DECEL

        if self.is_dashing:
            pass
        elif facing != 0:
            if abs(self.vx) >= self.MAX_RUN:
                self.vx -= self.speed_facing * dt * decel
                if abs(self.vx) <= self.MAX_RUN and facing * self.vx > 0:
                    self.vx = facing * self.MAX_RUN
            elif facing * self.vx > 0:
                self.vx += facing * self.RUN_ACCEL * dt
            else:
                self.vx += facing * decel * dt
        elif self.vx > 0:
            self.vx = max(self.vx - decel * dt, 0.0)
        elif self.vx < 0:
            self.vx = min(self.vx + decel * dt, 0.0)

        move = self.vx * dt + self._rx
        pixels = _round_half_away(move)
        self._rx = move - pixels
        step = 1 if pixels > 0 else -1
        while pixels != 0:
            self._x += step
            if self._collides(level):
                self._x -= step
                self.vx = 0.0
                self._rx = 0.0
                if self.is_dashing:
                    self.is_dashing = False
                    self.dash_cooldown_timer = self.DASH_COOLDOWN
                    self.vy = 0.0
                break
            pixels -= step

    def move_y(self, dt: float, level: Level) -> None:
        """Move vertically pixel by pixel, stopping at the first solid."""
        move = self.vy * dt + self._ry
        pixels = _round_half_away(move)
        self._ry = move - pixels
        step = 1 if pixels > 0 else -1
        while pixels != 0:
            self._y += step
            if self._collides(level):
                self._y -= step
                self.vy = 0.0
                self._ry = 0.0
                if self.is_dashing:
                    self.is_dashing = False
                    self.dash_cooldown_timer = self.DASH_COOLDOWN
                    self.vx = 0.0
                break
            pixels -= step

    # -- actions ----------------------------------------------------------

    def jump(self) -> None:
        """Jump from the ground, with a sideways boost while running."""
        if self.can_jump and not self.is_dashing:
            if self.facing != 0:
                self.vx += self.facing * self.JUMP_BOOST
            self.vy = self.MAX_JUMP
            self.can_jump = False
            self.is_jumping = True
            self.jump_timer = self.JUMP_DURATION

    def grab_wall_jump(self) -> None:
        """Jump straight up the wall being held, spending stamina."""
        if self.is_grabbing and self.stamina > 0:
            self.stamina = max(self.stamina - self.WALL_JUMP_COST, 0.0)
            self.is_grabbing = False
            self.can_grab = False
            self.check_wall = True
            self.is_wall_jumping = True
            self.wall_jump_timer = self.WALL_JUMP_DURATION
            self.vx = 0.0
            self.vy = self.WALL_JUMP_SPEED_Y

    def wall_jump(self) -> None:
        """Kick off the adjacent wall, away from it."""
        self.vx = -self.wall_grab_dir * self.WALL_JUMP_SPEED_X
        self.vy = self.MAX_JUMP
        self.is_jumping = True
        if self.facing != 0:
            self.is_jumping_wall = True
        self.jump_timer = self.JUMP_DURATION

    def dash(self, direction: Vector) -> None:
        """Dash along a unit direction; a zero direction dashes the way last faced."""
        if self.is_dashing or self.dash_cooldown_timer > 0.0 or self.dash_charge <= 0:
            return
        self.is_dashing = True
        self.dash_timer = self.DASH_DURATION
        self.dash_charge -= 1
        dx, dy = float(direction[0]), float(direction[1])
        if dx == 0.0 and dy == 0.0:
            dx = float(self.last_facing)
        self.dash_dir = (dx, dy)
        self.vx = dx * self.DASH_SPEED
        self.vy = dy * self.DASH_SPEED
        self._rx, self._ry = 0.0, 0.0

    def check_grab(self, level: Level) -> None:
        """Look for a wall within reach on either side and note which side it is on."""
        self.can_grab = False
        self.attached_mover = None
        if self.is_dashing:
            return

        body = self.rect
        reach = self.GRAB_REACH
        left = Rect(body.x - reach, body.y, reach, body.height)
        right = Rect(body.x + body.width, body.y, reach, body.height)

        for platform in level.platforms:
            if left.intersects(platform.rect):
                self.can_grab = True
                self.wall_grab_dir = -1
                break
            if right.intersects(platform.rect):
                self.can_grab = True
                self.wall_grab_dir = 1
                break
            self.wall_grab_dir = 0

        if self.wall_grab_dir == 0:
            for mover in level.movers:
                if left.intersects(mover.rect):
                    side = -1
                elif right.intersects(mover.rect):
                    side = 1
                else:
                    continue
                self.can_grab = True
                self.wall_grab_dir = side
                if self.is_grabbing and mover.state is MoverState.IDLE:
                    mover.activate()
                    self.attached_mover = mover
                break

    def die(self, spawn_point: Vector) -> None:
        """Respawn at `spawn_point` with movement state cleared."""
        self.position = spawn_point
        if self.on_death is not None:
            self.on_death()

        self.vx, self.vy = 0.0, 0.0
        self._rx, self._ry = 0.0, 0.0

        self.facing = 0
        self.last_facing = 1
        self.speed_facing = 0
        self.ducking = False
        self.can_jump = False
        self.jump_held = False

        self.is_dashing = False
        self.dash_charge = 1
        self.dash_timer = 0.0
        self.dash_cooldown_timer = 0.0

        self.can_grab = False
        self.is_grabbing = False
        self.is_sliding = False
        self.grab_allowed = True
        self.wall_grab_dir = 0
        self.stamina = self.MAX_STAMINA

        self.is_wall_jumping = False
        self.check_wall = False
        self.wall_jump_timer = 0.0

        self.is_jumping = False
        self.jump_timer = 0.0
        self.gravity_factor = 1.0

    # -- frame update -----------------------------------------------------

    def _tick_timers(self, dt: float) -> None:
        if self.dash_cooldown_timer > 0.0:
            self.dash_cooldown_timer = max(self.dash_cooldown_timer - dt, 0.0)

        if self.is_jumping:
            self.jump_timer -= dt
            if not self.is_spring:
                if self.jump_timer <= 0.0 or not self.jump_held:
                    self.is_jumping = False
                    self.is_jumping_wall = False
            elif self.jump_timer <= 0.0:
                self.is_jumping = False
                self.is_spring = False
            self.is_grabbing = False

        if self.is_wall_jumping:
            self.wall_jump_timer -= dt
            if self.wall_jump_timer <= 0.0 or not self.jump_held:
                self.is_wall_jumping = False

    def _update_dash(self, dt: float, level: Level) -> None:
        self.dash_timer -= dt
        if self.dash_timer <= 0.0:
            self.is_dashing = False
            self.dash_cooldown_timer = self.DASH_COOLDOWN
            dx, dy = self.dash_dir
            if dy < 0:
                self.vy = self.DASH_END_UP_SPEED
            if dx != 0:
                self.vx = _round_half_away(dx) * self.DASH_END_RUN_SPEED
        self.move_x(0, dt, level)
        self.move_y(dt, level)

    def _update_grab(self, dt: float, level: Level, up_held: bool, down_held: bool) -> None:
        self.vx = 0.0
        self._rx = 0.0
        self.can_jump = False
        self.stamina = max(self.stamina - self.WALL_GRAB_COST * dt, 0.0)

        if up_held:
            self.vy = -self.CLIMB_SPEED
            extra = (self.WALL_CLIMB_COST - self.WALL_GRAB_COST) * dt
            self.stamina = max(self.stamina - extra, 0.0)
        elif down_held:
            self.stamina += self.WALL_GRAB_COST * dt
            self.vy = self.SLIDE_SPEED
        else:
            if self.vy < 0.0 and self.check_wall:
                self.vy += self.GRAVITY * dt
            if self.vy >= 0.0:
                self.check_wall = False
            if not self.check_wall:
                self.vy = 0.0
                self._ry = 0.0
        self.move_y(dt, level)

    def _update_slide(self, dt: float, level: Level) -> None:
        if self.vy > 20.0 and not self.is_sliding:
            self.vy = 20.0
            self.is_sliding = True
        self.vy = min(self.vy + self.SLIDE_GRAVITY * dt, self.MAX_SLIDE_SPEED)
        self.vx = 0.0
        self.move_y(dt, level)

    def _check_ground(self, level: Level) -> None:
        self._y += 1.0
        body = self.rect
        grounded = False
        on_mover = False
        if any(body.intersects(platform.rect) for platform in level.platforms):
            grounded = True
        else:
            for mover in level.movers:
                if body.intersects(mover.rect):
                    grounded = True
                    on_mover = True
                    self.attached_mover = mover
                    if mover.state is MoverState.IDLE:
                        mover.activate()
                    break
            for crush in level.crushes:
                if body.intersects(crush.rect) and crush.visible:
                    grounded = True
                    crush.is_riding = True
                    break
                crush.is_riding = False
        self._y -= 1.0
        self.on_ground = grounded
        self.on_mover = on_mover

    def update(self, dt: float, level: Level, up_held: bool, down_held: bool) -> None:
        """Advance the player by `dt` seconds inside `level`."""
        self.attached_mover = None
        self._tick_timers(dt)

        if not self.is_wall_jumping:
            self.check_grab(level)
        else:
            self.can_grab = False

        if self.is_grabbing and self.stamina <= 0:
            self.grab_allowed = False
            self.is_grabbing = False
            self.vx, self.vy = 0.0, 0.0

        self.gravity_factor = 0.5 if abs(self.vy) <= 40.0 else 1.0

        facing_wall = (self.wall_grab_dir == 1 and self.facing == 1) or (
            self.wall_grab_dir == -1 and self.facing == -1
        )
        if self.is_dashing:
            self._update_dash(dt, level)
        elif self.is_grabbing:
            self._update_grab(dt, level, up_held, down_held)
        elif (
            self.can_grab
            and (self.stamina <= 0 or not self.is_grabbing)
            and facing_wall
            and self.vy >= 0
        ):
            self._update_slide(dt, level)
        else:
            self.is_sliding = False
            self.apply_gravity(dt)
            self.move_x(self.facing, dt, level)
            self.move_y(dt, level)

        self.speed_facing = 0 if self.vx == 0 else (1 if self.vx > 0 else -1)

        self._check_ground(level)

        if self.wall_grab_dir == 0:
            self.is_grabbing = False
        if self.stamina > 0:
            self.grab_allowed = True

        if self.on_ground:
            self.dash_charge = 1
            self.stamina = self.MAX_STAMINA
            self.can_jump = True
            self.is_grabbing = False
            self.vy = 0.0
            self._ry = 0.0
        else:
            self.can_jump = False

        body = self.rect
        if any(body.intersects(spring) for spring in level.springs):
            self.vx = 0.0
            self.vy = self.SPRING_SPEED
            self.dash_charge = 1
            self.is_jumping = True
            self.is_spring = True
            self.jump_timer = self.JUMP_DURATION

        if self.attached_mover is not None:
            self.mover_timer = self.MOVER_STICK_DURATION
            self.was_mover = self.attached_mover
        else:
            self.mover_timer -= dt
            if self.mover_timer < 0.0:
                self.was_mover = None

        carrier = self.attached_mover
        if carrier is None and self.mover_timer >= 0.0:
            carrier = self.was_mover
        if carrier is not None:
            dx, dy = carrier.delta
            self._x += dx
            self._y += dy