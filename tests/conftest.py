import pytest

from game_config import DEFAULT_CONFIG
from super_env import SuperPacEnv


# Column/row reference (tile 40): cell (c, r) spans x in [40c, 40c+40).
ITEM_MAZE = [
    "##########",
    "#..MKPUFS#",
    "#.#D######",
    "....",
]


@pytest.fixture
def make_env():
    def _make(maze=ITEM_MAZE, seed=7, **overrides):
        cfg = dict(DEFAULT_CONFIG)
        cfg.update(ghost_count=0, super_pellets_per_round=0, fruit_gate=None)
        cfg.update(overrides)
        return SuperPacEnv(cfg, base_maze=maze, seed=seed)

    return _make
