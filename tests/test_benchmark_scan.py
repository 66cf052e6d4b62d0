from __future__ import annotations

import random

from benchmarks.benchmark_scan import build_synthetic_source, run_once


def test_scan_benchmark_run_once_small():
    res = run_once(blocks=50, runs=2, seed=7)

    for key in ["benchmark", "blocks", "lines", "runs", "mean_ms", "median_ms", "p95_ms", "counts"]:
        assert key in res, f"missing key: {key}"

    assert res["benchmark"] == "scan"
    assert res["runs"] == 2
    counts = res["counts"]
    assert counts["lines"] == res["lines"]
    assert counts["unchanged"] + counts["deleted"] + counts["replaced"] == counts["lines"]
    assert counts["replaced"] > 0


def test_synthetic_source_is_deterministic():
    a = build_synthetic_source(random.Random(3), 20)
    b = build_synthetic_source(random.Random(3), 20)
    assert a == b
