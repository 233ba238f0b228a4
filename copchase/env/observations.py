# copchase/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from copchase.game.simulation import ChaseSimulation

# Number of obstacles ahead of the officers encoded in the vector
N_OBSTACLES: int = 3
# dy is clipped to [-DY_SCALE, DY_SCALE] before scaling to [-1,1]
DY_SCALE: float = 24.0
OBS_DIM: int = 5 + 2 * N_OBSTACLES

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _obstacles_ahead(sim: ChaseSimulation, n: int) -> List[Tuple[float, float]]:
    """(dx, height) of the n nearest obstacles whose right edge is still ahead of the officers' left edge."""
    left = sim.officers.x
    ahead = [(o.x - sim.officers.right, float(o.height)) for o in sim.obstacles if o.right > left]
    ahead.sort(key=lambda t: t[0])
    return ahead[:n]

def build_observation(sim: ChaseSimulation, n_obstacles: int = N_OBSTACLES) -> np.ndarray:
    """
    Returns a fixed (5 + 2n,) float32 vector:
      [ y_norm, dy_norm, grounded, jumps_left_norm, gap_norm,
        dx@1, h@1, dx@2, h@2, dx@3, h@3 ]
    - y_norm in [0,1] over [0, ground_y - officers.height]
    - dy_norm in [-1,1]
    - grounded 0/1
    - jumps_left_norm = remaining air jumps / max_jumps
    - gap_norm = (thief.x - officers.right) / field_width, clipped
    - dx normalized by field_width, h by obstacle_max_h;
      sentinel: dx=1.0, h=0.0 when fewer than n obstacles are ahead
    """
    cfg = sim.config
    off = sim.officers

    y_norm = _clamp01(off.y / max(1.0, cfg.ground_y - off.height))
    dy = max(-DY_SCALE, min(off.dy, DY_SCALE))
    dy_norm = dy / DY_SCALE
    grounded = 1.0 if off.grounded else 0.0
    jumps_left = cfg.max_jumps if off.grounded else max(0, cfg.max_jumps - off.jump_count)
    jumps_norm = _clamp01(jumps_left / cfg.max_jumps)
    gap_norm = _clamp01((sim.thief.x - off.right) / cfg.field_width)

    feats: List[float] = [y_norm, dy_norm, grounded, jumps_norm, gap_norm]

    ahead = _obstacles_ahead(sim, n_obstacles)
    for i in range(n_obstacles):
        if i < len(ahead):
            dx, h = ahead[i]
            feats.extend([_clamp01(dx / cfg.field_width), _clamp01(h / cfg.obstacle_max_h)])
        else:
            feats.extend([1.0, 0.0])

    return np.asarray(feats, dtype=np.float32)
