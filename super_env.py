import logging
import random

from entities import Ghost, Player, circles_overlap, random_horizontal_dir
from game_config import resolve_path
from tile_map import TileKind, TileMap


ITEM_SCORES = {
    TileKind.MAIZE: 100,
    TileKind.KEY: 500,
    TileKind.POWER_PELLET: 50,
    TileKind.SUPER_PELLET: 100,
    TileKind.FRUIT: 1000,
    TileKind.DOOR: 0,
}
GHOST_SCORE = 200
STAR_MISMATCH_SCORE = 500
STAR_MATCH_SCORE = 2000
STAR_MATCH_IN_MAZE_SCORE = 5000


def star_bonus(symbols, tile_map):
    """Points for collecting a Star given the two center-box symbols.

    Equal symbols are looked up in the maze by reading the symbol index as a
    TileKind value. Keep that lookup here so the rule can change in one place.
    """
    first, second = symbols
    if first != second:
        return STAR_MISMATCH_SCORE
    if tile_map.any(first):
        return STAR_MATCH_IN_MAZE_SCORE
    return STAR_MATCH_SCORE


class SuperPacEnv:
    def __init__(self, config, base_maze=None, seed=None):
        self.logger = logging.getLogger(__name__)
        self.config = config
        self.tile = int(config["tile_size"])
        self.grid_w = int(config["map_width"])
        self.grid_h = int(config["map_height"])
        self.normal_speed = float(config["normal_speed"])
        self.super_speed = float(config["super_speed"])
        self.ghost_speed = float(config["ghost_speed"])
        self.ghost_count = int(config["ghost_count"])
        self.start_lives = int(config["start_lives"])
        self.max_lives = int(config["max_lives"])
        self.bonus_life_score = int(config["bonus_life_score"])
        self.power_pellet_ms = int(config["power_pellet_ms"])
        self.super_pellet_ms = int(config["super_pellet_ms"])
        self.star_interval_ms = int(config["star_interval_ms"])
        self.star_region = tuple(int(v) for v in config["star_region"])
        self.symbol_interval_ms = int(config["symbol_interval_ms"])
        self.symbol_count = int(config["symbol_count"])
        self.super_pellets_per_round = int(config["super_pellets_per_round"])
        gate = config.get("fruit_gate")
        self.fruit_gate = (int(gate[0]), int(gate[1])) if gate else None

        self.base_maze = base_maze
        self.maze_path = resolve_path(config["maze_path"])
        self.rng = random.Random(seed)

        self.frame = 0
        self.full_resets = 0
        self.ghosts_eaten = 0
        self.reset_all()

    @property
    def normal_radius(self):
        return self.tile / 3.0

    @property
    def super_radius(self):
        return self.tile / 2.0

    def load_maze(self):
        self.tile_map = TileMap(self.grid_w, self.grid_h)
        if self.base_maze is not None:
            self.tile_map.load(self.base_maze)
        else:
            self.tile_map.load_file(self.maze_path)

    def draw_symbols(self):
        return [self.rng.randint(0, self.symbol_count - 1) for _ in range(2)]

    def reset_all(self):
        self.load_maze()
        px, py = self.config["player_start"]
        self.player = Player(px * self.tile, py * self.tile, self.normal_speed, self.normal_radius)
        gx, gy = self.config["ghost_start"]
        self.ghosts = [
            Ghost((gx + i) * self.tile, gy * self.tile, self.ghost_speed, self.normal_radius, i, self.rng)
            for i in range(self.ghost_count)
        ]
        self.score = 0
        self.lives = self.start_lives
        self.star_timer = 0
        self.symbol_timer = 0
        self.symbols = self.draw_symbols()
        self.place_fruit_gate()
        self.place_super_pellets(self.super_pellets_per_round)
        self.logger.info("New round: lives=%d symbols=%s", self.lives, self.symbols)

    def reset_positions(self):
        p = self.player
        p.x, p.y = p.start
        p.dir = (1, 0)
        p.powered_up = False
        p.power_timer = 0
        p.speed = self.normal_speed
        p.radius = self.normal_radius
        for g in self.ghosts:
            g.x, g.y = g.start
            g.dir = random_horizontal_dir(self.rng)
            g.vulnerable = False
            g.flattened = False
        self.logger.info("Positions reset, lives left: %d", self.lives)

    def place_super_pellets(self, count):
        if count <= 0:
            return
        x0, x1 = 1, self.grid_w - 2
        y0, y1 = 1, self.grid_h - 2
        free = sum(
            1
            for y in range(y0, y1 + 1)
            for x in range(x0, x1 + 1)
            if self.tile_map.get(x, y) == TileKind.EMPTY
        )
        if free < count:
            raise RuntimeError(f"Need {count} empty cells for super pellets, found {free}")
        placed = 0
        while placed < count:
            x = self.rng.randint(x0, x1)
            y = self.rng.randint(y0, y1)
            if self.tile_map.get(x, y) == TileKind.EMPTY:
                self.tile_map.set(x, y, TileKind.SUPER_PELLET)
                placed += 1

    def place_fruit_gate(self):
        if self.fruit_gate is None:
            return
        x, y = self.fruit_gate
        for dx, kind in ((0, TileKind.DOOR), (1, TileKind.FRUIT), (2, TileKind.DOOR)):
            if self.tile_map.in_bounds(x + dx, y):
                self.tile_map.set(x + dx, y, kind)

    def power_up(self, duration_ms):
        self.player.powered_up = True
        self.player.power_timer = duration_ms
        self.logger.debug("Power-up for %d ms", duration_ms)

    def collect(self, tx, ty):
        kind = self.tile_map.get(tx, ty)
        if kind != TileKind.STAR and kind not in ITEM_SCORES:
            return None
        self.tile_map.set(tx, ty, TileKind.EMPTY)
        if kind == TileKind.STAR:
            points = star_bonus(self.symbols, self.tile_map)
        else:
            points = ITEM_SCORES[kind]

        if kind == TileKind.POWER_PELLET:
            self.power_up(self.power_pellet_ms)
            for g in self.ghosts:
                g.vulnerable = True
        elif kind == TileKind.SUPER_PELLET:
            self.power_up(self.super_pellet_ms)
            self.player.speed = self.super_speed
            self.player.radius = self.super_radius
            for g in self.ghosts:
                g.flattened = True

        self.score += points
        return kind

    def update_power(self, dt_ms):
        p = self.player
        if not p.powered_up:
            return
        p.power_timer -= dt_ms
        if p.power_timer > 0:
            return
        p.powered_up = False
        p.power_timer = 0
        p.radius = self.normal_radius
        p.speed = self.normal_speed
        for g in self.ghosts:
            g.vulnerable = False
            g.flattened = False
        self.logger.debug("Power-up expired")

    def resolve_encounter(self, ghost):
        p = self.player
        if not circles_overlap(p.x, p.y, p.radius, ghost.x, ghost.y, ghost.radius):
            return None
        if p.powered_up and ghost.vulnerable:
            ghost.send_home()
            self.score += GHOST_SCORE
            self.ghosts_eaten += 1
            self.logger.debug("Ghost %d eaten", ghost.sprite_index)
            return "ghost_eaten"
        if not p.powered_up and not ghost.flattened:
            self.lose_life()
            return "life_lost"
        return None

    def lose_life(self):
        self.lives -= 1
        if self.lives > 0:
            self.reset_positions()
            return
        self.full_resets += 1
        self.logger.info("Out of lives at score %d, restarting", self.score)
        self.reset_all()

    def update_ghosts(self):
        outcomes = []
        # A restart replaces self.ghosts; later iterations index the new list.
        for i in range(len(self.ghosts)):
            ghost = self.ghosts[i]
            ghost.update(self)
            outcome = self.resolve_encounter(ghost)
            if outcome:
                outcomes.append(outcome)
        return outcomes

    def spawn_star(self):
        x0, x1, y0, y1 = self.star_region
        x = self.rng.randint(x0, x1)
        y = self.rng.randint(y0, y1)
        if self.tile_map.in_bounds(x, y) and self.tile_map.get(x, y) == TileKind.EMPTY:
            self.tile_map.set(x, y, TileKind.STAR)
            self.logger.debug("Star spawned at (%d, %d)", x, y)

    def update_spawners(self, dt_ms):
        self.star_timer += dt_ms
        if self.star_timer >= self.star_interval_ms:
            self.star_timer = 0
            self.spawn_star()
        self.symbol_timer += dt_ms
        if self.symbol_timer >= self.symbol_interval_ms:
            self.symbol_timer = 0
            self.symbols = self.draw_symbols()

    def apply_bonus_life(self):
        if self.score >= self.bonus_life_score and self.lives < self.max_lives:
            self.lives += 1
            self.score -= self.bonus_life_score
            self.logger.info("Bonus life, lives now %d", self.lives)

    def step(self, move_dir, dt_ms=16):
        prev_score = self.score
        prev_lives = self.lives
        prev_resets = self.full_resets
        self.frame += 1

        collected = None
        entered = self.player.update(self, move_dir)
        if entered is not None:
            collected = self.collect(*entered)
        self.update_power(dt_ms)
        outcomes = self.update_ghosts()
        self.update_spawners(dt_ms)
        self.apply_bonus_life()

        return {
            "collected": collected,
            "encounters": outcomes,
            "score_delta": self.score - prev_score,
            "lives_delta": self.lives - prev_lives,
            "restarted": self.full_resets != prev_resets,
        }

    def get_state(self):
        return {
            "grid_w": self.grid_w,
            "grid_h": self.grid_h,
            "tile": self.tile,
            "grid": self.tile_map.to_lists(),
            "score": self.score,
            "lives": self.lives,
            "symbols": list(self.symbols),
            "star_timer": self.star_timer,
            "symbol_timer": self.symbol_timer,
            "player": self.player.to_dict(),
            "ghosts": [g.to_dict() for g in self.ghosts],
            "load_error": self.tile_map.load_error,
        }
