"""Platform that crumbles shortly after being stood on and then reappears."""

from __future__ import annotations

from dataclasses import dataclass

from minicleste.basemap import SCALE, Rect, Vector


@dataclass
class CrushBlock:
    """A crumbling block; `size` is in screen pixels, `position` in game pixels."""

    size: Vector
    position: Vector
    crush_timer: float = 0.0
    restore_timer: float = 0.0
    is_riding: bool = False
    visible: bool = True
    crush_timing: bool = False
    restore_timing: bool = False

    CRUSH_DURATION = 0.5
    RESTORE_DURATION = 1.0

    @property
    def rect(self) -> Rect:
        x, y = self.position
        width, height = self.size
        return Rect(x * SCALE, y * SCALE, width, height)

    def update(self, dt: float) -> None:
        """Advance the crumble and restore timers by `dt` seconds."""
        if self.crush_timing:
            self.crush_timer -= dt
            if self.crush_timer <= 0.0:
                self.crush_timing = False
                self.visible = False

        if self.restore_timing:
            self.restore_timer -= dt
            if self.restore_timer <= 0.0:
                self.restore_timing = False
                self.visible = True

        if self.is_riding and not self.crush_timing and self.visible:
            self.crush_timer = self.CRUSH_DURATION
            self.crush_timing = True

        if not self.visible and not self.restore_timing:
            self.restore_timer = self.RESTORE_DURATION
            self.restore_timing = True

    def reset(self) -> None:
        """Make the block solid again and clear its timers."""
        self.crush_timer = 0.0
        self.restore_timer = 0.0
        self.visible = True