# copchase/game/assets.py
"""
Sprites and background music for the playable shell.

Both are optional: a sprite that fails to load is None and the scene falls
back to coloured rects; music that fails to load or play leaves the shell
muted. Neither ever touches the simulation.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from .simulation import GameState, TERMINAL_STATES

logger = logging.getLogger(__name__)

OFFICER_SPRITE = "officer.png"
THIEF_SPRITE = "thief.png"
MUSIC_TRACK = "bg-music.mp3"
OFFICER_SPRITE_SIZE = (40, 60)   # one officer; two are drawn side by side
MUSIC_VOLUME = 0.4


def load_sprite(path, size: Tuple[int, int]) -> Optional[pygame.Surface]:
    """Load and scale an image; None if it is missing or unreadable."""
    try:
        img = pygame.image.load(str(path))
        if pygame.display.get_surface() is not None:
            img = img.convert_alpha()
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("sprite %s unavailable, drawing rects: %s", path, e)
        return None
    return pygame.transform.scale(img, size)


def load_sprites(assets_dir, thief_size: Tuple[int, int]) -> Dict[str, pygame.Surface]:
    """{"officers": ..., "thief": ...}, only the ones that loaded."""
    base = Path(assets_dir)
    sprites = {
        "officers": load_sprite(base / OFFICER_SPRITE, OFFICER_SPRITE_SIZE),
        "thief": load_sprite(base / THIEF_SPRITE, thief_size),
    }
    return {k: v for k, v in sprites.items() if v is not None}


class ChaseMusic:
    """
    Looping background track driven by simulation transitions:
    restarted from the top on PLAYING, paused on WON/LOST.
    Register with sim.add_listener(music.on_state).
    """
    def __init__(self, path, volume: float = MUSIC_VOLUME):
        self.path = str(path)
        self.muted = False
        self.playing = False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(self.path)
            pygame.mixer.music.set_volume(volume)
        except (pygame.error, FileNotFoundError, NotImplementedError) as e:
            logger.warning("music %s unavailable, muted: %s", self.path, e)
            self.muted = True

    def on_state(self, state: GameState):
        if self.muted:
            return
        try:
            if state == GameState.PLAYING:
                pygame.mixer.music.play(loops=-1)
                self.playing = True
            elif state in TERMINAL_STATES:
                pygame.mixer.music.pause()
                self.playing = False
        except pygame.error as e:
            logger.warning("music playback failed, muted: %s", e)
            self.muted = True
            self.playing = False
