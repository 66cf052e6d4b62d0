"""
Benchmark: line classifier throughput (stdlib only)

Purpose:
- Micro-benchmark LinkScanner.scan on a synthetic source file mixing every link
  shape the rules handle, with one PatternRegistry shared across all runs.

Example usage:
- python benchmarks/benchmark_scan.py --blocks 2000 --runs 5

Notes:
- Deterministic via --seed.
"""
from __future__ import annotations
import argparse
import json
import math
import random
import sys
import time
from typing import Dict, List, Sequence
from doclinks_core.classifier import LinkScanner
from doclinks_core.patterns import PatternRegistry
from doclinks_pipeline.render import summarize

# One block per template; "{n}" is replaced with a running index
_TEMPLATES: Sequence[Sequence[str]] = (
    ("/// Docs for Item{n}.", "///", "/// [`Item{n}`]: ../../struct.Item{n}.html", "pub struct Item{n};"),
    ("//! [fmt]: std/fmt/index.html", "//! [Vec]: alloc/vec/struct.Vec.html#method.push"),
    ("impl Item{n} {", "    /// [go]: #method.go{n}", "    pub fn go{n}(&self) {}", "}"),
    ("/// [ext]: https://example.org/std/struct.Ext{n}.html", "///", "///", "fn f{n}() {}"),
    ("/// [Local{n}]: ./struct.Local{n}.html", "// plain comment {n}", "let x{n} = {n};"),
)


def _mean(xs: Sequence[float]) -> float:
    return (sum(xs) / float(len(xs))) if xs else 0.0


def _median(xs: Sequence[float]) -> float:
    if not xs:
        return 0.0
    xs_sorted = sorted(xs)
    n = len(xs_sorted)
    mid = n // 2
    if n % 2 == 1:
        return float(xs_sorted[mid])
    return 0.5 * (xs_sorted[mid - 1] + xs_sorted[mid])


def _percentile(xs: Sequence[float], p: float) -> float:
    if not xs:
        return 0.0
    xs_sorted = sorted(xs)
    rank = max(1, int(math.ceil(p * len(xs_sorted))))
    return float(xs_sorted[rank - 1])


def build_synthetic_source(rng: random.Random, blocks: int) -> List[str]:
    lines: List[str] = []
    for n in range(int(blocks)):
        tpl = _TEMPLATES[rng.randrange(len(_TEMPLATES))]
        lines.extend(t.replace("{n}", str(n)) for t in tpl)
    return lines


def run_once(blocks: int = 100, runs: int = 1, seed: int = 123, krate: str = "bench") -> Dict[str, object]:
    rng = random.Random(int(seed))
    lines = build_synthetic_source(rng, blocks)
    registry = PatternRegistry.build()

    durations_ms: List[float] = []
    actions = []
    for _ in range(max(1, int(runs))):
        t0 = time.perf_counter()
        actions = LinkScanner(registry, krate).scan(lines)
        t1 = time.perf_counter()
        durations_ms.append((t1 - t0) * 1000.0)

    return {
        "benchmark": "scan",
        "blocks": int(blocks),
        "lines": len(lines),
        "runs": len(durations_ms),
        "mean_ms": _mean(durations_ms),
        "median_ms": _median(durations_ms),
        "p95_ms": _percentile(durations_ms, 0.95),
        "counts": summarize(actions),
        "seed": int(seed),
    }


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="benchmark_scan",
        description="Micro-benchmark the doc-link line classifier on a synthetic source file.",
    )
    parser.add_argument("--blocks", type=int, default=2000, help="Number of synthetic blocks (default: 2000)")
    parser.add_argument("--runs", type=int, default=5, help="Number of repeated scans (default: 5)")
    parser.add_argument("--seed", type=int, default=123, help="RNG seed (default: 123)")
    args = parser.parse_args(argv)

    result = run_once(blocks=args.blocks, runs=args.runs, seed=args.seed)
    print(json.dumps(result, sort_keys=True))
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        # structured error without traceback spam
        err = {"error": f"{type(e).__name__}: {e}"}
        print(json.dumps(err, sort_keys=True))
        sys.exit(1)
