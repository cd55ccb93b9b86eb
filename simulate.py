import argparse
import json
import logging
import os
import random
import time

import numpy as np

from game_config import load_config
from super_env import SuperPacEnv

LOG_PATH = os.path.join(os.path.dirname(__file__), "sim_log.jsonl")
MOVES = [(1, 0), (-1, 0), (0, 1), (0, -1), (0, 0)]


def random_policy(rng, min_hold=10, max_hold=60):
    """Yield directions, each held for a random number of frames."""
    while True:
        d = rng.choice(MOVES)
        for _ in range(rng.randint(min_hold, max_hold)):
            yield d


def run_episode(config, frames, dt_ms, seed=None):
    env = SuperPacEnv(config, seed=seed)
    policy = random_policy(random.Random(seed))
    best_score = 0
    lives_lost = 0
    for _ in range(frames):
        info = env.step(next(policy), dt_ms=dt_ms)
        lives_lost += info["encounters"].count("life_lost")
        best_score = max(best_score, env.score)
    return {
        "frames": frames,
        "score": env.score,
        "best_score": best_score,
        "lives": env.lives,
        "lives_lost": lives_lost,
        "resets": env.full_resets,
        "ghosts_eaten": env.ghosts_eaten,
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=5)
    parser.add_argument("--frames", type=int, default=3600)
    parser.add_argument("--dt-ms", type=int, default=16)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log", default=LOG_PATH)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = load_config()
    rng = random.Random(args.seed)
    scores = []
    for episode in range(args.episodes):
        seed = rng.randint(0, 1_000_000) if args.seed is not None else None
        result = run_episode(cfg, args.frames, args.dt_ms, seed=seed)
        scores.append(result["best_score"])
        with open(args.log, "a", encoding="utf-8") as f:
            f.write(json.dumps({"ts": time.time(), "episode": episode, **result}) + "\n")
        print(
            f"episode={episode} frames={result['frames']} score={result['score']} best={result['best_score']} "
            f"lives={result['lives']} lost={result['lives_lost']} resets={result['resets']} eaten={result['ghosts_eaten']}"
        )

    if scores:
        arr = np.asarray(scores, dtype=np.float64)
        print(f"Episodes: {len(arr)} | best score avg: {arr.mean():.1f} | max: {arr.max():.0f} | std: {arr.std():.1f}")


if __name__ == "__main__":
    main()
