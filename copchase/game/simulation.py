# copchase/game/simulation.py
from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Callable, List, Optional

from .config import ChaseConfig, DEFAULT_CONFIG
from .jumper import Jumper
from .obstacles import Obstacle, ObstacleField
from .thief_ai import drive_thief

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    START = "START"
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


TERMINAL_STATES = (GameState.WON, GameState.LOST)

Listener = Callable[[GameState], None]


class ChaseSimulation:
    """
    Officers chasing the thief along a scrolling ground line.

    Single writer: the only mutations happen in start_or_reset(), jump() and
    step(). Everything else (officers, thief, obstacles, distance, state) is
    read by the presentation layer between frames.

    Frame order inside step():
      officers physics -> catch-up drift -> win/loss checks ->
      thief physics + AI -> spawn + sweep -> distance
    A win or a loss returns before the thief and the obstacles move.
    """
    def __init__(self, seed: int | None = None, config: ChaseConfig = DEFAULT_CONFIG):
        self.config = config
        self.officers = Jumper(x=config.officers_x, y=0.0,
                               width=config.officers_w, height=config.officers_h,
                               reset_jumps_on_landing=True)
        self.thief = Jumper(x=config.thief_x, y=0.0,
                            width=config.thief_w, height=config.thief_h,
                            reset_jumps_on_landing=False)
        self.field = ObstacleField(seed, config)
        self.state = GameState.START
        self.distance = 0
        self.frame = 0
        self.hits = 0
        self._listeners: List[Listener] = []
        self._place_entities()

    # -------------------- Observable state --------------------

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.field.obstacles

    @property
    def seed(self) -> int:
        return self.field.seed

    @property
    def outcome(self) -> Optional[GameState]:
        return self.state if self.state in TERMINAL_STATES else None

    def add_listener(self, fn: Listener):
        """fn(state) is called on every transition into PLAYING, WON or LOST."""
        self._listeners.append(fn)

    # -------------------- Commands --------------------

    def start_or_reset(self, seed: int | None = None) -> bool:
        """Full reset and enter PLAYING. Ignored while already PLAYING."""
        if self.state == GameState.PLAYING:
            return False
        self.field.reset(seed)
        self._place_entities()
        self.frame = 0
        self.hits = 0
        self._set_state(GameState.PLAYING)
        return True

    def jump(self) -> bool:
        """Officers jump (double jump allowed). Ignored outside PLAYING."""
        if self.state != GameState.PLAYING:
            return False
        return self.officers.try_jump(self.config.max_jumps, self.config.jump_force)

    def step(self, dt_ms: float) -> GameState:
        """Advance one frame. No-op unless PLAYING. Returns the resulting state."""
        if self.state != GameState.PLAYING:
            return self.state

        cfg = self.config
        officers, thief = self.officers, self.thief
        self.frame += 1

        officers.update_physics(cfg.gravity, cfg.ground_y)
        officers.x += cfg.catch_speed

        if officers.right >= thief.x:
            self._set_state(GameState.WON)
            return self.state
        if officers.right < 0:
            self._set_state(GameState.LOST)
            return self.state

        thief.update_physics(cfg.gravity, cfg.ground_y)
        drive_thief(thief, self.field.obstacles, cfg.look_ahead, cfg.jump_force)

        self.field.update_spawn(dt_ms)
        self.hits += self.field.sweep(officers)

        self.distance = int(math.floor(thief.x - officers.x))
        return self.state

    # -------------------- Helpers --------------------

    def _place_entities(self):
        cfg = self.config
        self.officers.place_on_ground(cfg.ground_y, x=cfg.officers_x)
        self.thief.place_on_ground(cfg.ground_y, x=cfg.thief_x)
        self.distance = int(math.floor(self.thief.x - self.officers.x))

    def _set_state(self, new_state: GameState):
        old = self.state
        self.state = new_state
        logger.info("chase %s -> %s (frame=%d distance=%d hits=%d)",
                    old.value, new_state.value, self.frame, self.distance, self.hits)
        for fn in list(self._listeners):
            fn(new_state)
