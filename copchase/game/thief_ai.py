# copchase/game/thief_ai.py
from __future__ import annotations
from typing import Iterable, Optional

from .jumper import Jumper
from .obstacles import Obstacle


def upcoming_obstacle(thief: Jumper, obstacles: Iterable[Obstacle], look_ahead: float) -> Optional[Obstacle]:
    """First obstacle (spawn order) whose left edge is strictly inside (thief.x, thief.x + look_ahead)."""
    for obs in obstacles:
        if thief.x < obs.x < thief.x + look_ahead:
            return obs
    return None


def drive_thief(thief: Jumper, obstacles: Iterable[Obstacle], look_ahead: float, impulse: float) -> bool:
    """Single jump from the ground when something is coming. Returns True if the thief jumped."""
    if not thief.grounded:
        return False
    if upcoming_obstacle(thief, obstacles, look_ahead) is None:
        return False
    thief.launch(impulse)
    return True
