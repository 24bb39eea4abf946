# Jacob Mitchell, Kyle Axtell
# CS 456 - Optimal Binary Search Trees
# experiments.py
# 3/6/26

"""
Experiments: Knuth O(n^2) OBST vs naive O(n^3) OBST vs frequency-blind balanced BST

Runs MANY experiments, with repeated runs, to produce data for the report

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (presentation charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 7 --exp1_keys 256 --exp2_max_n 1024
  python experiments.py --outdir results --runs 5 --exp1_generators uniform,zipf,skewed90,english_like

Notes:
  The naive builder is cubic, so experiment 2 only runs it up to --exp2_naive_max_n keys.
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Optional, Callable

import matplotlib.pyplot as plt

import obst


METHODS = ("knuth", "naive", "balanced")


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def build_balanced(keys: List, probabilities: List[float]) -> Optional[obst.OBSTNode]:
    """
    Baseline: median-split BST that ignores the frequencies entirely
    """
    def build(i: int, j: int) -> Optional[obst.OBSTNode]:
        if i > j:
            return None
        mid = (i + j) // 2
        node = obst.OBSTNode(keys[mid], weight=probabilities[mid])
        node.left = build(i, mid - 1)
        node.right = build(mid + 1, j)
        return node

    return build(0, len(keys) - 1)


def build_tree(probabilities: List[float], keys: List, method: str) -> Tuple[Optional[obst.OBSTNode], Optional[obst.RangeTables]]:
    """
    Returns (root, tables); tables is None for the balanced baseline
    """
    if method == "balanced":
        return build_balanced(keys, probabilities), None
    if method == "knuth":
        tables = obst.build_tables(probabilities)
    elif method == "naive":
        tables = obst.build_tables_naive(probabilities)
    else:
        raise ValueError(f"method must be one of {', '.join(METHODS)}, got {method!r}")
    return obst.reconstruct(tables, keys, probabilities=probabilities), tables


# Synthetic frequency generators (one positive weight per key)

def gen_uniform(n: int, seed: int = 0) -> List[float]:
    rng = random.Random(seed)
    return [rng.uniform(0.5, 1.5) for _ in range(n)]

def gen_skewed(n: int, dom_frac: float = 0.90, seed: int = 0) -> List[float]:
    """
    One dominant key (random position) carries dom_frac of the mass, the rest is spread uniformly
    """
    rng = random.Random(seed)
    if n <= 1:
        return [1.0] * n
    dominant = rng.randrange(n)
    rest = [rng.random() + 1e-3 for _ in range(n - 1)]
    rest_total = sum(rest)
    out = [(1.0 - dom_frac) * r / rest_total for r in rest]
    out.insert(dominant, dom_frac)
    return out

def gen_zipf_like(n: int, s: float = 1.2, seed: int = 0) -> List[float]:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(n)]
    # Popular keys land at random positions in key order
    rng.shuffle(weights)
    total = sum(weights) or 1.0
    return [w / total for w in weights]

def gen_english_like(n: int, seed: int = 0) -> List[float]:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for i in range(n):
        ch = chars[i % len(chars)]
        if ch == ' ':
            w = 13.0
        elif ch == '\n':
            w = 1.5
        elif ch.lower() in "etaoinshrdlu":
            w = 6.0
        elif ch.lower() in "cmfwgypbvk":
            w = 2.5
        else:
            w = 1.2
        weights.append(w * rng.uniform(0.9, 1.1))
    total = sum(weights) or 1.0
    return [w / total for w in weights]

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], List[float]]] = {
    "uniform": lambda n, seed: gen_uniform(n, seed=seed),
    "zipf": lambda n, seed: gen_zipf_like(n, s=1.2, seed=seed),
    "zipf2": lambda n, seed: gen_zipf_like(n, s=2.0, seed=seed),
    "skewed90": lambda n, seed: gen_skewed(n, dom_frac=0.90, seed=seed),
    "skewed99": lambda n, seed: gen_skewed(n, dom_frac=0.99, seed=seed),
    "english_like": lambda n, seed: gen_english_like(n, seed=seed),
}

def generate_frequencies(name: str, n: int, seed: int) -> Tuple[str, List[float]]:
    """
    Helper: if a generator name is not recognized, we fall back to uniform
    so the run does not fail completely
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform", gen_uniform(n, seed=seed)
    return name, fn(n, seed)



# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    n_keys: int
    run_id: int
    method: str  # "knuth", "naive" or "balanced"

    build_ms: float

    weighted_cost: float
    expected_comparisons: float  # weighted_cost / total frequency

    lookups: int
    lookup_comparisons_total: int
    lookup_comparisons_per_search: float
    correctness_ok: int  # 1 or 0


def run_one(probabilities: List[float], method: str, lookups: int = 1000, seed: int = 0) -> MetricRow:
    n = len(probabilities)
    keys = list(range(n))

    t0 = now_ns()
    root, tables = build_tree(probabilities, keys, method)
    t1 = now_ns()
    build_ms = ns_to_ms(t1 - t0)

    cost = obst.weighted_cost(root)
    total = sum(probabilities)
    expected = cost / total if total > 0 else 0.0

    # Search for keys drawn from the same distribution the tree was built for
    comparisons_total = 0
    if n > 0 and lookups > 0:
        rng = random.Random(seed)
        for key in rng.choices(keys, weights=probabilities, k=lookups):
            _, comps = obst.obst_search(root, key)
            comparisons_total += comps

    ok = obst.inorder_keys(root) == keys
    if tables is not None and n > 0:
        ok = ok and math.isclose(cost, tables.cost(1, n), rel_tol=1e-9, abs_tol=1e-12)

    return MetricRow(
        exp_name="",
        dataset_name="",
        n_keys=n,
        run_id=0,
        method=method,
        build_ms=build_ms,
        weighted_cost=cost,
        expected_comparisons=expected,
        lookups=lookups,
        lookup_comparisons_total=comparisons_total,
        lookup_comparisons_per_search=comparisons_total / max(1, lookups),
        correctness_ok=1 if ok else 0
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


SUMMARY_FIELDS = [
    "exp_name","dataset_name","n_keys","method","n_runs",
    "build_ms_mean","build_ms_stdev",
    "expected_comparisons_mean","expected_comparisons_stdev",
    "lookup_comparisons_per_search_mean","lookup_comparisons_per_search_stdev",
    "correctness_ok_rate"
]


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, n_keys, method and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.n_keys, r.method)
        key_to.setdefault(key, []).append(r)

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, n_keys, method = key

            bm_m, bm_s = mean_stdev([x.build_ms for x in items])
            ec_m, ec_s = mean_stdev([x.expected_comparisons for x in items])
            lc_m, lc_s = mean_stdev([x.lookup_comparisons_per_search for x in items])
            ok_rate = sum(x.correctness_ok for x in items) / len(items)

            w.writerow({
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "n_keys": n_keys,
                "method": method,
                "n_runs": len(items),
                "build_ms_mean": bm_m,
                "build_ms_stdev": bm_s,
                "expected_comparisons_mean": ec_m,
                "expected_comparisons_stdev": ec_s,
                "lookup_comparisons_per_search_mean": lc_m,
                "lookup_comparisons_per_search_stdev": lc_s,
                "correctness_ok_rate": ok_rate,
            })



# Plotting

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    methods = [m for m in METHODS if any(r.method == m for r in exp_rows)]

    def mean_for(dataset: str, method: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset and r.method == method]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))

    plt.figure()
    for m in methods:
        y = [mean_for(d, m, "expected_comparisons") for d in datasets]
        plt.plot(x, y, marker="o", label=m)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Expected Comparisons per Search")
    plt.title("Experiment 1: Search Cost by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_expected_comparisons.png", dpi=200)
    plt.close()

    plt.figure()
    for m in methods:
        y = [mean_for(d, m, "lookup_comparisons_per_search") for d in datasets]
        plt.plot(x, y, marker="o", label=m)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Measured Comparisons per Search (avg)")
    plt.title("Experiment 1: Sampled Lookup Cost by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_lookup_cost.png", dpi=200)
    plt.close()

    plt.figure()
    for m in methods:
        y = [mean_for(d, m, "build_ms") for d in datasets]
        plt.plot(x, y, marker="o", label=m)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Build Time (ms)")
    plt.title("Experiment 1: Build Time by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_build_time.png", dpi=200)
    plt.close()


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    distributions = sorted(set(r.dataset_name for r in exp_rows))

    for dist in distributions:
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]

        def mean_size(n: int, method: str, field: str) -> float:
            vals = [getattr(r, field) for r in dist_rows if r.n_keys == n and r.method == method]
            return statistics.mean(vals) if vals else float("nan")

        plt.figure()
        for m in ("knuth", "naive"):
            sizes = sorted(set(r.n_keys for r in dist_rows if r.method == m))
            if not sizes:
                continue
            y = [mean_size(n, m, "build_ms") for n in sizes]
            plt.plot(sizes, y, marker="o", label=m)
        plt.xscale("log", base=2)
        plt.yscale("log")
        plt.xlabel("Number of Keys")
        plt.ylabel("Build Time (ms)")
        plt.title(f"Experiment 2: Build Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_build_time_{dist}.png", dpi=200)
        plt.close()

        plt.figure()
        for m in ("knuth", "balanced"):
            sizes = sorted(set(r.n_keys for r in dist_rows if r.method == m))
            if not sizes:
                continue
            y = [mean_size(n, m, "expected_comparisons") for n in sizes]
            plt.plot(sizes, y, marker="o", label=m)
        plt.xscale("log", base=2)
        plt.xlabel("Number of Keys")
        plt.ylabel("Expected Comparisons per Search")
        plt.title(f"Experiment 2: Search Cost vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_search_cost_{dist}.png", dpi=200)
        plt.close()





# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--lookups", type=int, default=10_000, help="Sampled searches per built tree")
    ap.add_argument("--no_plots", action="store_true", help="Only write the CSV files")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")

    # Experiment 1 controls
    ap.add_argument("--exp1_keys", type=int, default=128, help="Experiment 1 fixed number of keys")
    ap.add_argument("--exp1_generators", type=str, default="uniform,zipf,skewed90,english_like",
                    help="Comma-separated frequency generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_n", type=int, default=8, help="Experiment 2 min number of keys (power-of-two growth)")
    ap.add_argument("--exp2_max_n", type=int, default=512, help="Experiment 2 max number of keys (power-of-two growth)")
    ap.add_argument("--exp2_naive_max_n", type=int, default=256, help="Largest key count the naive O(n^3) builder runs on")
    ap.add_argument("--exp2_generators", type=str, default="uniform,zipf",
                    help="Comma-separated frequency generator names for experiment 2")

    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed number of keys)
    if not args.no_exp1:
        n = max(1, args.exp1_keys)
        gen_names = parse_csv_list(args.exp1_generators)

        for gen_name in gen_names:
            for run_id in range(1, args.runs + 1):
                dataset_name, freqs = generate_frequencies(gen_name, n, args.seed + run_id)
                for method in METHODS:
                    row = run_one(freqs, method, lookups=args.lookups, seed=args.seed + run_id)
                    row.exp_name = "exp1_distribution"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)
            print(f"exp1: {gen_name} done ({args.runs} runs, {n} keys)")

    # Experiment 2: size scaling (multiple sizes, powers of 2)
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.exp2_min_n)
        while s <= args.exp2_max_n:
            sizes.append(s)
            s *= 2

        gen_names = parse_csv_list(args.exp2_generators)

        for gen_name in gen_names:
            for n in sizes:
                methods = [m for m in METHODS if m != "naive" or n <= args.exp2_naive_max_n]
                for run_id in range(1, args.runs + 1):
                    dataset_name, freqs = generate_frequencies(gen_name, n, args.seed + 10_000 + n + run_id)
                    for method in methods:
                        row = run_one(freqs, method, lookups=args.lookups, seed=args.seed + run_id)
                        row.exp_name = "exp2_size_scaling"
                        row.dataset_name = dataset_name
                        row.run_id = run_id
                        rows.append(row)
                print(f"exp2: {gen_name} n={n} done ({', '.join(methods)})")

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    # Plots
    if not args.no_plots:
        plot_experiment_1(rows, outdir)
        plot_experiment_2(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
