# copchase/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60

# --- World / Physics (per frame, not per second) ---
GRAVITY = 0.6               # added to dy every frame (px/frame^2)
JUMP_FORCE = -12.0          # dy set by a jump (negative = up)
GROUND_HEIGHT = 50          # ground strip thickness, ground line = HEIGHT - GROUND_HEIGHT
MAX_JUMPS = 2               # double jump for the officers
MAX_FRAME_MS = 50.0         # clamp stalls so the spawn timer doesn't burst

# --- Chase ---
CATCH_SPEED = 0.5           # officers drift right every frame (px/frame)
STUMBLE_PENALTY = 100.0     # push-back on obstacle hit (px)
HIT_MARGIN = 5.0            # both rects shrunk by this on every side before testing

# --- Officers (player, left) ---
OFFICERS_X = 50.0
OFFICERS_W = 60             # two officers side by side
OFFICERS_H = 60

# --- Thief (AI, right) ---
THIEF_X_FRAC = 0.8          # thief anchored at 80% of the field width
THIEF_W = 40
THIEF_H = 60
LOOK_AHEAD = 150.0          # thief jumps when an obstacle is this close ahead

# --- Obstacles ---
OBSTACLE_SPEED = 6.0        # px/frame, uniform for every obstacle
OBSTACLE_W = 30
OBSTACLE_MIN_H = 40         # inclusive
OBSTACLE_MAX_H = 80         # inclusive
SPAWN_MIN_MS = 1200.0
SPAWN_MAX_MS = 2000.0
FIRST_SPAWN_MS = 1500.0     # target interval at the start of each match
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_SKY_TOP = (30, 41, 59)
COLOR_SKY_BOT = (51, 65, 85)
COLOR_GROUND = (16, 185, 129)
COLOR_FG = (220, 232, 255)
COLOR_OFFICERS = (59, 130, 246)
COLOR_THIEF = (239, 68, 68)
COLOR_OBSTACLE = (120, 53, 15)
COLOR_DANGER = (255, 86, 110)
COLOR_WON_BG = (30, 58, 138)
COLOR_LOST_BG = (127, 29, 29)


@dataclass(frozen=True)
class ChaseConfig:
    """
    Every tunable of the chase as a named parameter.
    Defaults are the module constants; tests override single fields with
    dataclasses.replace(DEFAULT_CONFIG, ...).
    """
    field_width: float = WIDTH
    field_height: float = HEIGHT
    ground_height: float = GROUND_HEIGHT

    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    max_jumps: int = MAX_JUMPS
    max_frame_ms: float = MAX_FRAME_MS

    catch_speed: float = CATCH_SPEED
    stumble_penalty: float = STUMBLE_PENALTY
    hit_margin: float = HIT_MARGIN

    officers_x: float = OFFICERS_X
    officers_w: float = OFFICERS_W
    officers_h: float = OFFICERS_H

    thief_x_frac: float = THIEF_X_FRAC
    thief_w: float = THIEF_W
    thief_h: float = THIEF_H
    look_ahead: float = LOOK_AHEAD

    obstacle_speed: float = OBSTACLE_SPEED
    obstacle_width: float = OBSTACLE_W
    obstacle_min_h: int = OBSTACLE_MIN_H
    obstacle_max_h: int = OBSTACLE_MAX_H
    spawn_min_ms: float = SPAWN_MIN_MS
    spawn_max_ms: float = SPAWN_MAX_MS
    first_spawn_ms: float = FIRST_SPAWN_MS

    def __post_init__(self):
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError(f"field must be non-empty, got {self.field_width}x{self.field_height}")
        if not (0 <= self.ground_height < self.field_height):
            raise ValueError(f"ground_height {self.ground_height} outside the field")
        for name in ("officers_w", "officers_h", "thief_w", "thief_h", "obstacle_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.spawn_min_ms > self.spawn_max_ms:
            raise ValueError("spawn_min_ms must be <= spawn_max_ms")
        if self.obstacle_min_h > self.obstacle_max_h:
            raise ValueError("obstacle_min_h must be <= obstacle_max_h")
        if self.max_jumps < 1:
            raise ValueError("max_jumps must be >= 1")
        if self.max_frame_ms < 0:
            raise ValueError("max_frame_ms must be >= 0")

    @property
    def ground_y(self) -> float:
        """y of the ground line (top of the ground strip)."""
        return self.field_height - self.ground_height

    @property
    def thief_x(self) -> float:
        return self.field_width * self.thief_x_frac


DEFAULT_CONFIG = ChaseConfig()
