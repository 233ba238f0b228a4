# copchase/game/game.py
import sys, argparse, logging
from pathlib import Path
from typing import Dict, Optional
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT,
    COLOR_SKY_TOP, COLOR_SKY_BOT, COLOR_GROUND, COLOR_FG,
    COLOR_OFFICERS, COLOR_THIEF, COLOR_OBSTACLE, COLOR_DANGER,
    COLOR_WON_BG, COLOR_LOST_BG,
)
from .simulation import ChaseSimulation, GameState
from .assets import load_sprites, ChaseMusic, MUSIC_TRACK

logger = logging.getLogger(__name__)

CLOSE_DISTANCE_PX = 200     # HUD turns red under this gap

OVERLAYS = {
    GameState.START: ("COP CHASE", "Catch the thief before the getaway!", "SPACE to start", (0, 0, 0)),
    GameState.WON: ("BUSTED!", "Target apprehended", "SPACE to chase again", COLOR_WON_BG),
    GameState.LOST: ("ESCAPED!", "Target got away", "SPACE to retry", COLOR_LOST_BG),
}

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--assets-dir", type=str, default="assets",
                   help="Folder with officer.png, thief.png and bg-music.mp3 (all optional).")
    return p.parse_args()

def _draw_sky(surf: pygame.Surface):
    h = surf.get_height()
    for y in range(h):
        t = y / max(1, h - 1)
        col = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOT))
        pygame.draw.line(surf, col, (0, y), (surf.get_width(), y))

def draw_scene(surf: pygame.Surface, sim: ChaseSimulation, sprites: Optional[Dict[str, pygame.Surface]] = None):
    """Sky, ground, obstacles, officers, thief. Reads the simulation, never writes it.
    Entities without a sprite in `sprites` are drawn as coloured rects."""
    sprites = sprites or {}
    cfg = sim.config
    _draw_sky(surf)
    ground_y = int(cfg.ground_y)
    pygame.draw.rect(surf, COLOR_GROUND, (0, ground_y, surf.get_width(), surf.get_height() - ground_y))

    for obs in sim.obstacles:
        pygame.draw.rect(surf, COLOR_OBSTACLE, obs.rect)

    # Two officers slightly offset inside the shared hitbox
    o = sim.officers.rect
    officer_img = sprites.get("officers")
    if officer_img is not None:
        surf.blit(officer_img, (o.x, o.y))
        surf.blit(officer_img, (o.x + o.w // 3, o.y))
    else:
        half = pygame.Rect(o.x, o.y, o.w * 2 // 3, o.h)
        pygame.draw.rect(surf, COLOR_OFFICERS, half)
        pygame.draw.rect(surf, COLOR_OFFICERS, half.move(o.w // 3, 0), width=2)

    thief_img = sprites.get("thief")
    if thief_img is not None:
        surf.blit(thief_img, sim.thief.rect.topleft)
    else:
        pygame.draw.rect(surf, COLOR_THIEF, sim.thief.rect)

def draw_hud(surf: pygame.Surface, sim: ChaseSimulation, font: pygame.font.Font):
    color = COLOR_DANGER if sim.distance < CLOSE_DISTANCE_PX else COLOR_FG
    txt = font.render(f"Distance to target: {sim.distance} px", True, color)
    surf.blit(txt, (surf.get_width() // 2 - txt.get_width() // 2, 14))
    sub = f"Seed: {sim.seed}   Hits: {sim.hits}   {sim.state.value}"
    surf.blit(font.render(sub, True, (160, 180, 210)), (12, 40))
    surf.blit(font.render("SPACE/UP jump (x2) | ESC quit", True, (160, 180, 210)), (12, 62))

def draw_overlay(surf: pygame.Surface, state: GameState, big: pygame.font.Font, font: pygame.font.Font):
    if state not in OVERLAYS:
        return
    title, line, hint, bg = OVERLAYS[state]
    panel = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    panel.fill((*bg, 170))
    surf.blit(panel, (0, 0))
    cx, cy = surf.get_width() // 2, surf.get_height() // 2
    for i, (f, msg) in enumerate(((big, title), (font, line), (font, hint))):
        t = f.render(msg, True, COLOR_FG)
        surf.blit(t, (cx - t.get_width() // 2, cy - 60 + i * 50))

def run():
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Cop Chase")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)
    big = pygame.font.SysFont("jetbrainsmono", 56, bold=True)

    sim = ChaseSimulation(seed=launch_seed)
    sim.add_listener(lambda state: logger.info("state=%s seed=%s", state.value, sim.seed))
    logger.info("launch seed=%s", sim.seed)

    # Optional assets: missing sprites fall back to rects, missing music to silence
    sprites = load_sprites(args.assets_dir, (int(sim.thief.width), int(sim.thief.height)))
    music = ChaseMusic(Path(args.assets_dir) / MUSIC_TRACK)
    sim.add_listener(music.on_state)

    def press():
        if sim.state == GameState.PLAYING:
            sim.jump()
        else:
            sim.start_or_reset()

    while True:
        dt_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    press()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                press()

        sim.step(dt_ms)

        draw_scene(screen, sim, sprites)
        draw_hud(screen, sim, font)
        draw_overlay(screen, sim.state, big, font)
        pygame.display.flip()

if __name__ == "__main__":
    run()
