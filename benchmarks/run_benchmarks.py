#!/usr/bin/env python3
"""Benchmark suite for pyskiplist, optionally comparing against sortedcontainers."""

import argparse
import json
import logging
import random
import time
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np
import plotly.graph_objects as go
try:
    from sortedcontainers import SortedDict
    HAS_SORTEDCONTAINERS = True
except ImportError:
    HAS_SORTEDCONTAINERS = False
    print("sortedcontainers not available, skipping SortedDict benchmarks")
from tqdm import tqdm

from pyskiplist import SkipList, SkipListConfig

logger = logging.getLogger("benchmarks")

SEED = 0
OPERATIONS = [
    "Get",
    "Before",
    "After",
    "AtOrBefore",
    "AtOrAfter",
    "RemoveAndSet",
    "Set (existing)",
    "Set (new) + RemoveFirst",
]


class Metrics:
    def __init__(self):
        self.latencies: Dict[str, List[float]] = {op: [] for op in OPERATIONS}

    def to_dict(self) -> Dict:
        return {
            op: {
                "p50": float(np.percentile(lat, 50)),
                "p95": float(np.percentile(lat, 95)),
                "p99": float(np.percentile(lat, 99)),
                "mean": float(np.mean(lat)),
            }
            for op, lat in self.latencies.items()
            if lat
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for op, lat in self.latencies.items():
            if lat:
                fig.add_trace(go.Box(y=lat, name=op, boxpoints="outliers"))
        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )
        fig.write_html(output_path)


class BenchmarkSuite:
    """Times every list operation on ``num_entries`` even keys.

    Queries use keys shifted by -1, 0 or +1 so that both exact hits and
    nearest-key misses are exercised.
    """

    def __init__(self, num_entries: int, ops: int, hash_index: bool):
        rng = random.Random(SEED)
        self.num_entries = num_entries
        self.ops = ops
        self.hash_index = hash_index
        self._keys = [2 * i for i in range(num_entries)]
        self._shuffled = self._keys[:]
        rng.shuffle(self._shuffled)
        self._shifted = [k + rng.randint(-1, 1) for k in self._shuffled]

    def _time(self, metrics: Metrics, op: str, fn: Callable[[int], object], keys: List[int]):
        lat = metrics.latencies[op]
        for i in tqdm(range(self.ops), desc=f"{op} ({self.num_entries})", leave=False):
            k = keys[i % self.num_entries]
            start = time.perf_counter()
            fn(k)
            lat.append((time.perf_counter() - start) * 1e6)

    def run_skiplist_benchmark(self) -> Metrics:
        sl = SkipList[int, int](SkipListConfig(seed=SEED, hash_index=self.hash_index))
        for k in self._keys:
            sl.set(k, k)
        metrics = Metrics()

        self._time(metrics, "Get", sl.get, self._shifted)
        self._time(metrics, "Before", sl.before, self._shifted)
        self._time(metrics, "After", sl.after, self._shifted)
        self._time(metrics, "AtOrBefore", sl.at_or_before, self._shifted)
        self._time(metrics, "AtOrAfter", sl.at_or_after, self._shifted)

        def remove_and_set(k):
            sl.remove(k)
            sl.set(k, k)

        def set_new(k):
            sl.set(k + 1, k + 1)
            sl.remove_first()

        self._time(metrics, "RemoveAndSet", remove_and_set, self._shuffled)
        self._time(metrics, "Set (existing)", lambda k: sl.set(k, k), self._shuffled)
        self._time(metrics, "Set (new) + RemoveFirst", set_new, self._shuffled)
        return metrics

    def run_sortedcontainers_benchmark(self) -> Metrics:
        sd = SortedDict((k, k) for k in self._keys)
        metrics = Metrics()

        def before(k):
            i = sd.bisect_left(k)
            return sd.peekitem(i - 1) if i else None

        def after(k):
            i = sd.bisect_right(k)
            return sd.peekitem(i) if i < len(sd) else None

        def at_or_before(k):
            i = sd.bisect_right(k)
            return sd.peekitem(i - 1) if i else None

        def at_or_after(k):
            i = sd.bisect_left(k)
            return sd.peekitem(i) if i < len(sd) else None

        def remove_and_set(k):
            sd.pop(k, None)
            sd[k] = k

        def set_existing(k):
            sd[k] = k

        def set_new(k):
            sd[k + 1] = k + 1
            sd.popitem(0)

        self._time(metrics, "Get", sd.get, self._shifted)
        self._time(metrics, "Before", before, self._shifted)
        self._time(metrics, "After", after, self._shifted)
        self._time(metrics, "AtOrBefore", at_or_before, self._shifted)
        self._time(metrics, "AtOrAfter", at_or_after, self._shifted)
        self._time(metrics, "RemoveAndSet", remove_and_set, self._shuffled)
        self._time(metrics, "Set (existing)", set_existing, self._shuffled)
        self._time(metrics, "Set (new) + RemoveFirst", set_new, self._shuffled)
        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--shifts", type=int, nargs="+", default=[4, 8, 12, 16],
                        help="Benchmark lists of 2**shift entries")
    parser.add_argument("--ops", type=int, default=20000, help="Timed calls per operation")
    parser.add_argument("--no-hash-index", action="store_true", help="Disable the exact-key index")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log list construction")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    args.output.mkdir(parents=True, exist_ok=True)

    results: Dict[str, Dict] = {}
    for shift in args.shifts:
        n = 1 << shift
        suite = BenchmarkSuite(n, args.ops, hash_index=not args.no_hash_index)
        logger.info("benchmarking %d elements", n)

        skiplist_metrics = suite.run_skiplist_benchmark()
        skiplist_metrics.plot_latencies(
            f"pyskiplist latency distribution ({n} elements)",
            args.output / f"skiplist_{n}_latencies.html",
        )
        sorted_metrics = suite.run_sortedcontainers_benchmark() if HAS_SORTEDCONTAINERS else None

        results[str(n)] = {
            "pyskiplist": skiplist_metrics.to_dict(),
            "sortedcontainers": sorted_metrics.to_dict() if sorted_metrics else None,
        }

    with open(args.output / "metrics.json", "w") as f:
        json.dump(results, f, indent=2)
    logger.info("results written to %s", args.output)


if __name__ == "__main__":
    main()
