# copchase/game/jumper.py
from __future__ import annotations
from dataclasses import dataclass
import pygame


@dataclass
class Entity:
    """Axis-aligned rectangle, top-left based, float pixels."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def rect(self) -> pygame.Rect:
        # Drawing only: collisions use the float bounds above
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


@dataclass
class Jumper(Entity):
    """
    Entity with a vertical velocity and a jump budget.
    - dy > 0 means falling (screen y grows downward)
    - jump_count counts jumps since the last landing (officers) or since
      the last restart (thief, which never resets it on landing)
    """
    dy: float = 0.0
    grounded: bool = False
    jump_count: int = 0
    reset_jumps_on_landing: bool = True

    def place_on_ground(self, ground_y: float, x: float | None = None):
        """Canonical resting pose used at (re)start."""
        if x is not None:
            self.x = float(x)
        self.y = ground_y - self.height
        self.dy = 0.0
        self.grounded = True
        self.jump_count = 0

    def can_jump(self, max_jumps: int) -> bool:
        return self.grounded or self.jump_count < max_jumps

    def launch(self, impulse: float):
        """Unconditional take-off, shared by the player jump and the thief AI."""
        self.dy = impulse
        self.grounded = False
        self.jump_count += 1

    def try_jump(self, max_jumps: int, impulse: float) -> bool:
        """Jump if grounded or the air budget isn't spent. Returns True if performed."""
        if self.can_jump(max_jumps):
            self.launch(impulse)
            return True
        return False

    def update_physics(self, gravity: float, ground_y: float):
        """Integrate first, then clamp to the ground line."""
        self.dy += gravity
        self.y += self.dy

        if self.bottom > ground_y:
            self.y = ground_y - self.height
            self.dy = 0.0
            self.grounded = True
            if self.reset_jumps_on_landing:
                self.jump_count = 0
        else:
            self.grounded = False
