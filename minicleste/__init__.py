"""A small precision platformer with dashing, wall grabbing, moving and crumbling platforms."""

__version__ = "0.1.0"

__all__ = ["app", "basemap", "clock", "crushblock", "game", "level", "mover", "player"]