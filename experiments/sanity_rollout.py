# /experiments/sanity_rollout.py
"""
Baseline policies on ChaseEnv: how often do they catch the thief?

Plays every policy on the same seeds, appends one row per episode to
<out-dir>/episodes.csv and prints win/loss rate and mean hits per policy.
With --traces, each episode's actions go to <out-dir>/traces/<policy>/<seed>.npy
(replayable with the same seed and frame skip).

  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies lookahead --episodes 50 --traces
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from copchase.env.chase_env import ChaseEnv

Policy = Callable[[np.ndarray], int]


# ------------------------ Policies ------------------------

def idle_policy(_seed: int) -> Policy:
    """Never jumps: the drift alone against every obstacle."""
    return lambda _obs: 0

def random_policy(seed: int, jump_prob: float = 0.1) -> Policy:
    rng = np.random.default_rng(10_000 + seed)
    return lambda _obs: int(rng.random() < jump_prob)

def lookahead_policy(_seed: int, trigger_dx: float = 0.06) -> Policy:
    """Jump from the ground once the nearest obstacle is within trigger_dx of the field width."""
    def act(obs: np.ndarray) -> int:
        grounded, dx, h = obs[2] > 0.5, obs[5], obs[6]
        return int(grounded and h > 0.0 and dx < trigger_dx)
    return act

POLICIES: Dict[str, Callable[[int], Policy]] = {
    "idle": idle_policy,
    "random": random_policy,
    "lookahead": lookahead_policy,
}


# ------------------------ Episodes ------------------------

@dataclass
class EpisodeResult:
    policy: str
    seed: int
    outcome: str            # WON | LOST | PLAYING (truncated)
    hits: int
    decisions: int
    jumps: int
    final_distance: int
    total_reward: float

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int = 4,
                    time_limit_seconds: Optional[float] = 60.0,
                    trace_dir: Optional[Path] = None) -> EpisodeResult:
    """Play one seeded match; optionally save the action sequence as int8 .npy."""
    policy = POLICIES[policy_name](seed)
    env = ChaseEnv(frame_skip=frame_skip, time_limit_seconds=time_limit_seconds)
    actions: List[int] = []
    total = 0.0
    try:
        obs, info = env.reset(seed=seed)
        done = False
        while not done:
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            total += r
            done = term or trunc
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}.npy", np.asarray(actions, dtype=np.int8))

    return EpisodeResult(
        policy=policy_name,
        seed=seed,
        outcome=info["state"],
        hits=info["hits"],
        decisions=len(actions),
        jumps=sum(actions),
        final_distance=info["distance"],
        total_reward=round(total, 3),
    )


# ------------------------ Reporting ------------------------

def append_results(csv_path: Path, results: List[EpisodeResult]):
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=[fl.name for fl in fields(EpisodeResult)])
        if new_file:
            w.writeheader()
        w.writerows(asdict(r) for r in results)

def summarize(results: List[EpisodeResult]) -> Dict[str, Dict[str, float]]:
    """Per policy: episodes, win_rate, loss_rate, mean_hits, mean_decisions."""
    summary: Dict[str, Dict[str, float]] = {}
    for name in dict.fromkeys(r.policy for r in results):
        rs = [r for r in results if r.policy == name]
        outcomes = np.array([r.outcome for r in rs])
        summary[name] = {
            "episodes": len(rs),
            "win_rate": float(np.mean(outcomes == "WON")),
            "loss_rate": float(np.mean(outcomes == "LOST")),
            "mean_hits": float(np.mean([r.hits for r in rs])),
            "mean_decisions": float(np.mean([r.decisions for r in rs])),
        }
    return summary


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", nargs="+", default=list(POLICIES), choices=list(POLICIES))
    ap.add_argument("--episodes", type=int, default=20, help="Seeds first-seed .. first-seed+episodes-1")
    ap.add_argument("--first-seed", type=int, default=101)
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--traces", action="store_true", help="Save per-episode actions")
    args = ap.parse_args()

    args.out_dir.mkdir(parents=True, exist_ok=True)
    seeds = range(args.first_seed, args.first_seed + args.episodes)

    results: List[EpisodeResult] = []
    for name in args.policies:
        trace_dir = args.out_dir / "traces" / name if args.traces else None
        for seed in seeds:
            res = run_one_episode(name, seed, frame_skip=args.frame_skip, trace_dir=trace_dir)
            results.append(res)
            print(f"[{name}] seed={seed}  {res.outcome:<7} hits={res.hits}  "
                  f"decisions={res.decisions}  jumps={res.jumps}  ret={res.total_reward:.2f}")

    append_results(args.out_dir / "episodes.csv", results)

    print()
    for name, s in summarize(results).items():
        print(f"{name:<10} won {s['win_rate']:.0%}  lost {s['loss_rate']:.0%}  "
              f"hits/ep {s['mean_hits']:.2f}  decisions/ep {s['mean_decisions']:.0f}")


if __name__ == "__main__":
    main()
