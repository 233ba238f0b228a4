# copchase/game/obstacles.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import ChaseConfig, DEFAULT_CONFIG
from .jumper import Entity

logger = logging.getLogger(__name__)


@dataclass
class Obstacle(Entity):
    """Ground obstacle. Scrolls at the field-wide speed, no velocity of its own."""


def overlaps_with_margin(a: Entity, b: Entity, margin: float) -> bool:
    """
    AABB test with both rectangles shrunk by `margin` on all four sides.
    Strict on both axes: touching shrunk edges is a miss.
    """
    return (
        a.x + margin < b.right - margin and
        a.right - margin > b.x + margin and
        a.y + margin < b.bottom - margin and
        a.bottom - margin > b.y + margin
    )


class ObstacleField:
    """
    Obstacles scrolling left toward the officers, plus the stochastic spawner
    feeding them in at the right edge of the field.
    """
    def __init__(self, seed: int | None, config: ChaseConfig = DEFAULT_CONFIG):
        self.config = config
        self.obstacles: List[Obstacle] = []
        self.spawn_timer_ms = 0.0
        self.next_spawn_ms = config.first_spawn_ms
        self.spawned = 0
        self.reseed(seed)

    def reseed(self, seed: int | None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def reset(self, seed: int | None = None):
        """Clear obstacles and timers. Keeps the RNG stream unless a seed is given."""
        self.obstacles.clear()
        self.spawn_timer_ms = 0.0
        self.next_spawn_ms = self.config.first_spawn_ms
        self.spawned = 0
        if seed is not None:
            self.reseed(seed)

    def clamp_dt(self, dt_ms: float) -> float:
        return min(max(0.0, float(dt_ms)), self.config.max_frame_ms)

    def _draw_interval(self) -> float:
        lo, hi = self.config.spawn_min_ms, self.config.spawn_max_ms
        return self.rng.random() * (hi - lo) + lo   # [lo, hi)

    def _draw_height(self) -> int:
        return self.rng.randint(self.config.obstacle_min_h, self.config.obstacle_max_h)

    def update_spawn(self, dt_ms: float) -> Optional[Obstacle]:
        """Advance the spawn timer; append and return a new obstacle when it fires."""
        self.spawn_timer_ms += self.clamp_dt(dt_ms)
        if self.spawn_timer_ms <= self.next_spawn_ms:
            return None

        self.spawn_timer_ms = 0.0
        self.next_spawn_ms = self._draw_interval()

        h = self._draw_height()
        obs = Obstacle(
            x=float(self.config.field_width),
            y=self.config.ground_y - h,
            width=self.config.obstacle_width,
            height=h,
        )
        self.obstacles.append(obs)
        self.spawned += 1
        logger.debug("spawned obstacle h=%d, next in %.0f ms", h, self.next_spawn_ms)
        return obs

    def sweep(self, officers: Entity) -> int:
        """
        Scroll every obstacle, resolve hits against the officers and prune
        what left the field. Reverse order so deletions don't skip entries.
        Returns the number of hits this step.
        """
        cfg = self.config
        hits = 0
        for i in range(len(self.obstacles) - 1, -1, -1):
            obs = self.obstacles[i]
            obs.x -= cfg.obstacle_speed

            if overlaps_with_margin(officers, obs, cfg.hit_margin):
                officers.x -= cfg.stumble_penalty
                del self.obstacles[i]
                hits += 1
                logger.debug("officers stumbled, pushed back to x=%.1f", officers.x)
                continue

            if obs.right < 0:
                del self.obstacles[i]
        return hits
