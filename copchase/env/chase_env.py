# copchase/env/chase_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from copchase.game.config import WIDTH, HEIGHT
from copchase.game.simulation import ChaseSimulation, GameState
from copchase.game.game import draw_scene
from copchase.env.observations import build_observation, OBS_DIM


class ChaseEnv(gym.Env):
    """
    Cop Chase Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), dt fed to the spawner in milliseconds.
    - Agent controls the officers' jump every `frame_skip` frames.
    - Observation: shape (11,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    WIN_BONUS = 10.0
    LOSS_PENALTY = -10.0
    HIT_PENALTY = 0.5
    GAP_SCALE = 100.0           # reward per px of gap closed = 1/GAP_SCALE

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        # Internal sim timing
        self.sim_fps = 60
        self.dt_ms = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)

        # Observations: (11,) float32, dy_norm is the only signed feature
        low = np.zeros(OBS_DIM, dtype=np.float32)
        low[1] = -1.0
        high = np.ones(OBS_DIM, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[ChaseSimulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeded episodes are reproducible; unseeded ones draw from np_random
        sim_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))

        self.sim = ChaseSimulation(seed=sim_seed)
        self.sim.start_or_reset()

        self.timestep = 0
        self.current_seed = self.sim.seed

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"

        if int(action) == 1:
            self.sim.jump()

        prev_state = self.sim.state
        prev_distance = self.sim.distance
        prev_hits = self.sim.hits

        for _ in range(self.frame_skip):
            state = self.sim.step(self.dt_ms)
            if state != GameState.PLAYING:
                break

        reward = (prev_distance - self.sim.distance) / self.GAP_SCALE
        reward -= self.HIT_PENALTY * (self.sim.hits - prev_hits)
        # Outcome bonus only on the decision that ends the match
        if prev_state == GameState.PLAYING:
            if self.sim.state == GameState.WON:
                reward += self.WIN_BONUS
            elif self.sim.state == GameState.LOST:
                reward += self.LOSS_PENALTY

        self.timestep += 1
        terminated = self.sim.state != GameState.PLAYING
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim)

    def _get_info(self) -> Dict[str, Any]:
        assert self.sim is not None
        return {
            "distance": self.sim.distance,
            "state": self.sim.state.value,
            "hits": self.sim.hits,
            "grounded": self.sim.officers.grounded,
            "seed": self.current_seed,
            "timestep": self.timestep,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Cop Chase — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()

        draw_scene(self.screen, self.sim)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
