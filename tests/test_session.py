import json

import pytest

from game_config import DEFAULT_CONFIG, load_config
from super_env import SuperPacEnv
from tile_map import TileKind

OPEN_MAZE = ["####", "#..#", "####"]


def test_bonus_life_exchanges_points(make_env):
    env = make_env(maze=OPEN_MAZE)
    env.score = 10500
    env.apply_bonus_life()
    assert env.lives == 4
    assert env.score == 500


def test_bonus_life_capped_at_max(make_env):
    env = make_env(maze=OPEN_MAZE)
    env.lives = 5
    env.score = 12000
    env.apply_bonus_life()
    assert env.lives == 5
    assert env.score == 12000


def test_bonus_life_fires_once_per_frame(make_env):
    env = make_env(maze=OPEN_MAZE)
    env.score = 25000
    env.step((0, 0))
    assert (env.lives, env.score) == (4, 15000)
    env.step((0, 0))
    assert (env.lives, env.score) == (5, 5000)


def test_bonus_life_not_granted_below_threshold(make_env):
    env = make_env(maze=OPEN_MAZE)
    env.score = 9999
    env.step((0, 0))
    assert env.lives == 3
    assert env.score == 9999


def test_star_spawns_in_region_on_interval(make_env):
    env = make_env(maze=OPEN_MAZE)
    env.update_spawners(9999)
    assert not env.tile_map.any(TileKind.STAR)
    env.update_spawners(1)
    stars = env.tile_map.cells(TileKind.STAR)
    assert len(stars) == 1
    x, y = stars[0]
    assert 9 <= x <= 10 and 6 <= y <= 8
    assert env.star_timer == 0


def test_star_spawn_skips_occupied_cells(make_env):
    walls = ["#" * 20 for _ in range(15)]
    env = make_env(maze=walls)
    env.update_spawners(10000)
    assert not env.tile_map.any(TileKind.STAR)
    assert env.star_timer == 0


def test_symbols_redrawn_on_interval(make_env, monkeypatch):
    env = make_env(maze=OPEN_MAZE)
    monkeypatch.setattr(env, "draw_symbols", lambda: [4, 4])
    env.update_spawners(999)
    assert env.symbol_timer == 999
    env.update_spawners(1)
    assert env.symbols == [4, 4]
    assert env.symbol_timer == 0


def test_symbols_stay_in_alphabet(make_env):
    env = make_env(maze=OPEN_MAZE)
    for _ in range(50):
        env.update_spawners(1000)
        assert all(0 <= s < 6 for s in env.symbols)


def test_super_pellets_need_empty_cells(make_env):
    walls = ["#" * 20 for _ in range(15)]
    with pytest.raises(RuntimeError):
        make_env(maze=walls, super_pellets_per_round=2)


def test_default_round_setup(make_env):
    env = make_env(maze=OPEN_MAZE, ghost_count=4, super_pellets_per_round=2, fruit_gate=[9, 7])
    assert env.score == 0
    assert env.lives == 3
    assert env.tile_map.count(TileKind.SUPER_PELLET) == 2
    assert [(g.x, g.y) for g in env.ghosts] == [(400, 320), (440, 320), (480, 320), (520, 320)]
    assert [g.sprite_index for g in env.ghosts] == [0, 1, 2, 3]
    assert all(g.dir in {(1, 0), (-1, 0)} for g in env.ghosts)
    assert (env.player.x, env.player.y) == (60, 60)
    assert env.player.dir == (1, 0)
    assert env.player.radius == pytest.approx(40 / 3.0)


def test_same_seed_same_round(make_env):
    a = make_env(maze=OPEN_MAZE, ghost_count=4, super_pellets_per_round=2, seed=11)
    b = make_env(maze=OPEN_MAZE, ghost_count=4, super_pellets_per_round=2, seed=11)
    for _ in range(120):
        a.step((1, 0))
        b.step((1, 0))
    assert a.get_state() == b.get_state()


def test_state_snapshot_is_detached(make_env):
    env = make_env(maze=OPEN_MAZE, ghost_count=1)
    state = env.get_state()
    assert state["grid"][0][0] == int(TileKind.WALL)
    state["grid"][0][0] = int(TileKind.EMPTY)
    state["player"]["x"] = -1
    assert env.tile_map.get(0, 0) == TileKind.WALL
    assert env.player.x == 60
    assert set(state["ghosts"][0]) >= {"x", "y", "vulnerable", "flattened", "sprite_index"}
    assert state["lives"] == 3


def test_missing_maze_file_degrades_to_empty_grid(tmp_path):
    cfg = dict(DEFAULT_CONFIG)
    cfg.update(maze_path=str(tmp_path / "nope.txt"), super_pellets_per_round=0, fruit_gate=None)
    env = SuperPacEnv(cfg, seed=1)
    assert env.tile_map.load_error
    assert env.tile_map.count(TileKind.EMPTY) == env.grid_w * env.grid_h


def test_default_maze_file_loads():
    env = SuperPacEnv(dict(DEFAULT_CONFIG), seed=1)
    assert env.tile_map.load_error == ""
    assert env.tile_map.any(TileKind.WALL)
    assert env.tile_map.count(TileKind.SUPER_PELLET) == 2
    assert env.tile_map.get(10, 7) == TileKind.FRUIT


def test_load_config_overrides_known_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"start_lives": 5, "bogus": 1}), encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg["start_lives"] == 5
    assert "bogus" not in cfg
    assert cfg["tile_size"] == 40


def test_load_config_ignores_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == DEFAULT_CONFIG
    assert load_config(str(tmp_path / "absent.json")) == DEFAULT_CONFIG
