import logging
import math
import sys

import pygame

from game_config import load_config
from super_env import SuperPacEnv
from tile_map import TileKind


BLACK = (10, 10, 15)
WHITE = (240, 240, 240)
YELLOW = (250, 215, 70)
GRAY = (130, 130, 130)
RED = (220, 60, 60)
PINK = (255, 105, 180)
CYAN = (80, 220, 220)
ORANGE = (255, 165, 60)
SKY_BLUE = (102, 191, 255)
DARK_PURPLE = (112, 31, 126)
GOLD = (255, 203, 0)
MAIZE_COLOR = (240, 200, 90)
FRUIT_COLOR = (230, 41, 55)
VULNERABLE_COLOR = (40, 60, 200)
FLATTENED_COLOR = (160, 160, 200)

GHOST_COLORS = [RED, PINK, CYAN, ORANGE]
SYMBOLS = ["A", "B", "C", "D", "E", "F"]
SYMBOL_BOXES = [(9, 7), (10, 7)]

# Later entries win when several arrows are held.
KEY_PRIORITY = [
    (pygame.K_RIGHT, (1, 0)),
    (pygame.K_LEFT, (-1, 0)),
    (pygame.K_DOWN, (0, 1)),
    (pygame.K_UP, (0, -1)),
]


def get_input_dir(keys):
    desired = (0, 0)
    for key, d in KEY_PRIORITY:
        if keys[key]:
            desired = d
    return desired


def star_points(cx, cy, outer, inner):
    pts = []
    for i in range(10):
        r = outer if i % 2 == 0 else inner
        a = math.radians(-90 + i * 36)
        pts.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return pts


def draw_tile(screen, kind, x, y, tile):
    rect = pygame.Rect(x * tile, y * tile, tile, tile)
    center = rect.center
    if kind == TileKind.WALL:
        pygame.draw.rect(screen, DARK_PURPLE, rect)
    elif kind == TileKind.DOOR:
        pygame.draw.rect(screen, PINK, rect)
    elif kind == TileKind.KEY:
        pygame.draw.circle(screen, GOLD, (center[0], center[1] - tile // 6), tile // 6, 3)
        pygame.draw.line(screen, GOLD, center, (center[0], center[1] + tile // 3), 3)
    elif kind == TileKind.MAIZE:
        pygame.draw.ellipse(screen, MAIZE_COLOR, rect.inflate(-tile // 2, -tile // 4))
    elif kind == TileKind.POWER_PELLET:
        pygame.draw.circle(screen, SKY_BLUE, center, tile // 4)
    elif kind == TileKind.STAR:
        pygame.draw.polygon(screen, YELLOW, star_points(center[0], center[1], tile // 3, tile // 7))
    elif kind == TileKind.SUPER_PELLET:
        pygame.draw.circle(screen, ORANGE, center, tile // 3)
    elif kind == TileKind.FRUIT:
        pygame.draw.circle(screen, FRUIT_COLOR, (center[0], center[1] + 2), tile // 4)
        pygame.draw.line(screen, (60, 160, 120), center, (center[0] + 4, center[1] - tile // 3), 2)


def draw_player(screen, player, t):
    cx, cy = int(player.x), int(player.y)
    radius = int(player.radius)
    pygame.draw.circle(screen, YELLOW, (cx, cy), radius)
    mouth = abs(45.0 * math.sin(t * 10))
    if mouth < 1:
        return
    facing = math.degrees(math.atan2(player.dir[1], player.dir[0]))
    pts = [(cx, cy)]
    for i in range(9):
        a = math.radians(facing - mouth + (2 * mouth) * i / 8)
        pts.append((cx + (radius + 1) * math.cos(a), cy + (radius + 1) * math.sin(a)))
    pygame.draw.polygon(screen, BLACK, pts)


def draw_ghost(screen, ghost):
    r = int(ghost.radius)
    x, y = int(ghost.x), int(ghost.y)
    if ghost.vulnerable:
        color = VULNERABLE_COLOR
    elif ghost.flattened:
        color = FLATTENED_COLOR
    else:
        color = GHOST_COLORS[ghost.sprite_index % len(GHOST_COLORS)]

    if ghost.flattened and not ghost.vulnerable:
        pygame.draw.ellipse(screen, color, pygame.Rect(x - r, y, 2 * r, r))
        return
    body_rect = pygame.Rect(x - r, y - r, 2 * r, 2 * r)
    pygame.draw.rect(screen, color, body_rect, border_radius=r // 2)
    eye = r // 2
    pygame.draw.circle(screen, WHITE, (x - eye, y - eye // 2), max(2, r // 4))
    pygame.draw.circle(screen, WHITE, (x + eye, y - eye // 2), max(2, r // 4))
    pygame.draw.circle(screen, BLACK, (x - eye + 1, y - eye // 2), max(1, r // 8))
    pygame.draw.circle(screen, BLACK, (x + eye + 1, y - eye // 2), max(1, r // 8))


def draw(screen, env, fonts, t):
    tile = env.tile
    width = env.grid_w * tile
    height = env.grid_h * tile
    screen.fill(BLACK)

    for y in range(env.grid_h):
        for x in range(env.grid_w):
            draw_tile(screen, env.tile_map.get(x, y), x, y, tile)

    for (bx, by), symbol in zip(SYMBOL_BOXES, env.symbols):
        pygame.draw.rect(screen, GRAY, pygame.Rect(bx * tile, by * tile, tile, tile))
        glyph = fonts["symbol"].render(SYMBOLS[symbol % len(SYMBOLS)], True, RED)
        screen.blit(glyph, (bx * tile + tile // 4, by * tile + tile // 4))

    draw_player(screen, env.player, t)
    for ghost in env.ghosts:
        draw_ghost(screen, ghost)

    score = fonts["hud"].render(f"SCORE: {env.score}", True, WHITE)
    screen.blit(score, (10, 10))
    high = fonts["hud"].render("HIGH SCORE: 30000", True, WHITE)
    screen.blit(high, (width - high.get_width() - 10, 10))
    for i in range(env.lives):
        pygame.draw.circle(screen, YELLOW, (20 + i * 30, height - 20), 10)

    if env.tile_map.load_error:
        warn = fonts["hud"].render(env.tile_map.load_error, True, WHITE)
        screen.blit(warn, (10, height // 2))


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    cfg = load_config()
    env = SuperPacEnv(cfg)

    pygame.init()
    screen = pygame.display.set_mode((env.grid_w * env.tile, env.grid_h * env.tile))
    pygame.display.set_caption("Super Pac-Man")
    clock = pygame.time.Clock()
    fonts = {
        "hud": pygame.font.SysFont("Arial", 20),
        "symbol": pygame.font.SysFont("Arial", env.tile // 2),
    }
    fps = int(cfg["fps"])

    running = True
    while running:
        dt = clock.tick(fps)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False

        env.step(get_input_dir(pygame.key.get_pressed()), dt_ms=dt)
        draw(screen, env, fonts, pygame.time.get_ticks() / 1000.0)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
