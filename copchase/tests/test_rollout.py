# copchase/tests/test_rollout.py
"""
Baseline rollout script: episode rows, action traces and per-policy summary.

Usage (from repo root):
  pytest copchase/tests/test_rollout.py
"""
import csv

import numpy as np
import pytest

from experiments.sanity_rollout import (
    EpisodeResult, POLICIES, append_results, run_one_episode, summarize,
)

SHORT_LIMIT_S = 2.0     # 30 decisions at frame_skip=4


@pytest.mark.parametrize("policy", sorted(POLICIES))
def test_episode_writes_row_and_trace(tmp_path, policy):
    res = run_one_episode(policy, seed=7, time_limit_seconds=SHORT_LIMIT_S, trace_dir=tmp_path / "traces")

    assert 0 < res.decisions <= 30
    assert res.outcome in ("PLAYING", "WON", "LOST")
    trace = np.load(tmp_path / "traces" / "7.npy")
    assert trace.dtype == np.int8
    assert len(trace) == res.decisions
    assert int(trace.sum()) == res.jumps

    csv_path = tmp_path / "episodes.csv"
    append_results(csv_path, [res])
    with csv_path.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["policy"] == policy
    assert rows[0]["seed"] == "7"
    assert int(rows[0]["decisions"]) == res.decisions
    assert rows[0]["outcome"] == res.outcome


def test_idle_policy_never_jumps(tmp_path):
    res = run_one_episode("idle", seed=3, time_limit_seconds=SHORT_LIMIT_S)
    assert res.jumps == 0
    assert not list(tmp_path.iterdir())


def test_same_seed_same_episode():
    a = run_one_episode("random", seed=11, time_limit_seconds=SHORT_LIMIT_S)
    b = run_one_episode("random", seed=11, time_limit_seconds=SHORT_LIMIT_S)
    assert a == b


def test_csv_header_written_once(tmp_path):
    csv_path = tmp_path / "episodes.csv"
    row = EpisodeResult("idle", 1, "LOST", 2, 40, 0, -5, -10.5)
    append_results(csv_path, [row])
    append_results(csv_path, [row, row])
    lines = csv_path.read_text().splitlines()
    assert lines[0].startswith("policy,seed,outcome")
    assert len(lines) == 4


def test_summary_rates_per_policy():
    results = [
        EpisodeResult("lookahead", 1, "WON", 0, 100, 5, 0, 12.0),
        EpisodeResult("lookahead", 2, "LOST", 3, 60, 4, -2, -9.0),
        EpisodeResult("lookahead", 3, "WON", 1, 80, 6, 0, 11.0),
        EpisodeResult("idle", 1, "PLAYING", 2, 50, 0, 300, 0.5),
    ]
    s = summarize(results)
    assert list(s) == ["lookahead", "idle"]
    assert s["lookahead"]["episodes"] == 3
    assert s["lookahead"]["win_rate"] == pytest.approx(2 / 3)
    assert s["lookahead"]["loss_rate"] == pytest.approx(1 / 3)
    assert s["lookahead"]["mean_hits"] == pytest.approx(4 / 3)
    assert s["lookahead"]["mean_decisions"] == pytest.approx(80.0)
    assert s["idle"]["win_rate"] == 0.0 and s["idle"]["loss_rate"] == 0.0
