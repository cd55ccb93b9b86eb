import json
import statistics
from pathlib import Path

import matplotlib.pyplot as plt

LOG_PATH = Path(__file__).resolve().parent / "sim_log.jsonl"
OUT_PATH = Path(__file__).resolve().parent / "sim_progress.png"


def load_rows(path):
    if not path.exists():
        raise FileNotFoundError(f"Log not found: {path}")
    rows = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line:
            continue
        rows.append(json.loads(line))
    return rows


def rolling_avg(values, window):
    if window <= 1:
        return values
    out = []
    for i in range(len(values)):
        start = max(0, i - window + 1)
        chunk = values[start : i + 1]
        out.append(sum(chunk) / len(chunk))
    return out


def main():
    rows = load_rows(LOG_PATH)
    if not rows:
        print("No data yet in sim_log.jsonl")
        return

    scores = [r["best_score"] for r in rows]
    eaten = [r["ghosts_eaten"] for r in rows]
    runs = list(range(1, len(rows) + 1))

    fig, ax1 = plt.subplots(figsize=(10, 5))
    ax1.set_title("Headless Simulation Runs")
    ax1.set_xlabel("Run")
    ax1.set_ylabel("Best score", color="tab:blue")
    ax1.plot(runs, scores, color="tab:blue", alpha=0.3, label="Best score")
    ax1.plot(runs, rolling_avg(scores, window=10), color="tab:blue", label="Best score (avg 10)")
    ax1.tick_params(axis="y", labelcolor="tab:blue")

    ax2 = ax1.twinx()
    ax2.set_ylabel("Ghosts eaten", color="tab:green")
    ax2.bar(runs, eaten, color="tab:green", alpha=0.3, label="Ghosts eaten")
    ax2.tick_params(axis="y", labelcolor="tab:green")

    lines, labels = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines + lines2, labels + labels2, loc="upper left")

    fig.tight_layout()
    fig.savefig(OUT_PATH, dpi=150)
    print(f"Saved plot to {OUT_PATH}")
    print(f"Runs: {len(scores)} | best score avg: {statistics.mean(scores):.1f} | max: {max(scores)}")


if __name__ == "__main__":
    main()
