import json
import os


DEFAULT_CONFIG = {
    "tile_size": 40,
    "map_width": 20,
    "map_height": 15,
    "fps": 60,
    "maze_path": "maze.txt",
    "player_start": [1.5, 1.5],
    "normal_speed": 2.0,
    "super_speed": 3.0,
    "ghost_count": 4,
    "ghost_start": [10, 8],
    "ghost_speed": 1.5,
    "start_lives": 3,
    "max_lives": 5,
    "bonus_life_score": 10000,
    "power_pellet_ms": 10000,
    "super_pellet_ms": 15000,
    "star_interval_ms": 10000,
    "star_region": [9, 10, 6, 8],
    "symbol_interval_ms": 1000,
    "symbol_count": 6,
    "super_pellets_per_round": 2,
    "fruit_gate": [9, 7],
}

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_PATH = os.path.join(BASE_DIR, "config.json")


def load_config(path=CONFIG_PATH):
    cfg = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                for k in cfg.keys():
                    if k in data:
                        cfg[k] = data[k]
    except FileNotFoundError:
        pass
    except json.JSONDecodeError:
        pass
    return cfg


def resolve_path(path):
    if os.path.isabs(path):
        return path
    return os.path.join(BASE_DIR, path)
