"""
Benchmark: static Huffman containers over synthetic data

Compresses and decompresses generated data sets, checks the round trip,
and compares the payload against the Shannon entropy of the input.

Outputs (in --outdir):
  - metrics.csv     (raw row per run per data set)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --size_kb 1024 --max_mb 16
  python experiments.py --outdir results --generators uniform256,zipf128,single_symbol
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt

import container
import huffman as huff


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def shannon_entropy(ft: Dict[int, int]) -> float:
    """Bits per symbol; the lower bound on any prefix code's average length."""
    total = sum(ft.values())
    return -sum((c / total) * math.log2(c / total) for c in ft.values())


# Synthetic dataset generators

def _sample(rng: random.Random, symbols: Sequence[int], weights: Sequence[float], size: int) -> bytes:
    return bytes(rng.choices(symbols, weights=weights, k=size))

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [i for i in range(256) if i != dominant]
    return _sample(rng, [dominant] + others, [dom_frac] + [(1.0 - dom_frac) / len(others)] * len(others), size)

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return _sample(rng, range(alphabet), [1.0 / ((i + 1) ** s) for i in range(alphabet)], size)

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    chars = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ\n"

    def weight(ch: str) -> float:
        if ch == ' ':
            return 13.0
        if ch == '\n':
            return 1.5
        if ch.lower() in "etaoinshrdlu":
            return 6.0
        if ch.lower() in "cmfwgypbvk":
            return 2.5
        return 1.2

    return _sample(rng, [ord(c) for c in chars], [weight(c) for c in chars], size)

def gen_single_symbol(size: int, seed: int = 0) -> bytes:
    return bytes([ord('A')]) * size

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "single_symbol": lambda size, seed: gen_single_symbol(size, seed=seed),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> bytes:
    try:
        fn = GENERATOR_REGISTRY[name]
    except KeyError:
        raise ValueError(f"unknown generator {name!r}; choose from {', '.join(GENERATOR_REGISTRY)}") from None
    return fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    header_bytes: int
    payload_bytes: int
    container_bytes: int
    pad_bits: int
    compression_ratio: float

    entropy_bits_per_symbol: float
    code_bits_per_symbol: float
    correctness_ok: int  # 1 or 0


def run_one(data: bytes, exp_name: str, dataset_name: str, run_id: int) -> MetricRow:
    ft = huff.frequency_table(data)

    t0 = now_ns()
    code_map = huff.build_code_table(data)
    t1 = now_ns()
    packed, pad_bits = container.pack_bits_from_codes(data, code_map)
    blob = container.Container(codes=code_map, pad_bits=pad_bits, payload=packed).to_bytes()
    t2 = now_ns()
    decoded = container.decompress(blob)
    t3 = now_ns()

    return MetricRow(
        exp_name=exp_name,
        dataset_name=dataset_name,
        file_size_bytes=len(data),
        run_id=run_id,
        unique_symbols=len(ft),
        build_ms=ns_to_ms(t1 - t0),
        encode_ms=ns_to_ms(t2 - t1),
        decode_ms=ns_to_ms(t3 - t2),
        total_ms=ns_to_ms(t3 - t0),
        header_bytes=len(blob) - len(packed),
        payload_bytes=len(packed),
        container_bytes=len(blob),
        pad_bits=pad_bits,
        compression_ratio=len(blob) / max(1, len(data)),
        entropy_bits_per_symbol=shannon_entropy(ft),
        code_bits_per_symbol=huff.weighted_code_length(ft, code_map) / len(data),
        correctness_ok=1 if decoded == data else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    names = [f.name for f in fields(MetricRow)]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=names)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in names})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


SUMMARY_METRICS = ("compression_ratio", "code_bits_per_symbol", "encode_ms", "decode_ms", "total_ms")

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key_to.setdefault((r.exp_name, r.dataset_name, r.file_size_bytes), []).append(r)

    summary_fields = ["exp_name", "dataset_name", "file_size_bytes", "n_runs", "entropy_bits_per_symbol"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for (exp_name, dataset_name, size_b), items in sorted(key_to.items()):
            row = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "n_runs": len(items),
                "entropy_bits_per_symbol": statistics.mean(x.entropy_bits_per_symbol for x in items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                row[f"{m}_mean"], row[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(row)


# Plotting

def _mean_where(rows: List[MetricRow], field: str, **match) -> float:
    vals = [getattr(r, field) for r in rows if all(getattr(r, k) == v for k, v in match.items())]
    return statistics.mean(vals) if vals else float("nan")


def plot_distribution(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    plt.figure()
    for field, label in (("code_bits_per_symbol", "Huffman code"), ("entropy_bits_per_symbol", "Entropy bound")):
        plt.plot(x, [_mean_where(exp_rows, field, dataset_name=d) for d in datasets], marker="o", label=label)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Experiment 1: Average Code Length vs Entropy")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_bits_per_symbol.png", dpi=200)
    plt.close()

    plt.figure()
    plt.bar(x, [_mean_where(exp_rows, "compression_ratio", dataset_name=d) for d in datasets])
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Container Bytes / Original Bytes")
    plt.title("Experiment 1: Compression Ratio by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "exp1_compression_ratio.png", dpi=200)
    plt.close()


def plot_size_scaling(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))

        plt.figure()
        for field, label in (("encode_ms", "encode"), ("decode_ms", "decode")):
            plt.plot(sizes, [_mean_where(dist_rows, field, file_size_bytes=s) for s in sizes], marker="o", label=label)
        plt.xscale("log", base=2)
        plt.xlabel("File Size (bytes)")
        plt.ylabel("Time (ms)")
        plt.title(f"Experiment 2: Runtime vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_time_{dist}.png", dpi=200)
        plt.close()

        plt.figure()
        plt.plot(sizes, [_mean_where(dist_rows, "compression_ratio", file_size_bytes=s) for s in sizes], marker="o")
        plt.xscale("log", base=2)
        plt.xlabel("File Size (bytes)")
        plt.ylabel("Container Bytes / Original Bytes")
        plt.title(f"Experiment 2: Header Overhead vs Size ({dist})")
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_compression_ratio_{dist}.png", dpi=200)
        plt.close()


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")

    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")

    ap.add_argument("--size_kb", type=int, default=256, help="Experiment 1 fixed file size in KB")
    ap.add_argument("--generators", type=str, default="uniform256,zipf128,repetitive90,english_like,single_symbol",
                    help="Comma-separated dataset generator names for experiment 1")
    ap.add_argument("--min_kb", type=int, default=1, help="Experiment 2 min size in KB (power-of-two growth)")
    ap.add_argument("--max_mb", type=int, default=4, help="Experiment 2 max size in MB (power-of-two growth)")
    ap.add_argument("--scaling_generators", type=str, default="uniform256,english_like",
                    help="Comma-separated dataset generator names for experiment 2")

    args = ap.parse_args()

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.size_kb) * 1024
        for gen_name in parse_csv_list(args.generators):
            for run_id in range(1, args.runs + 1):
                data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                rows.append(run_one(data, "exp1_distribution", gen_name, run_id))

    # Experiment 2: size scaling (multiple sizes, powers of 2)
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.min_kb) * 1024
        while s <= max(1, args.max_mb) * 1024 * 1024:
            sizes.append(s)
            s *= 2

        for gen_name in parse_csv_list(args.scaling_generators):
            for size_b in sizes:
                for run_id in range(1, args.runs + 1):
                    data = generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id)
                    rows.append(run_one(data, "exp2_size_scaling", gen_name, run_id))

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    plot_distribution(rows, outdir)
    plot_size_scaling(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Round-trip correctness across all runs: {ok_rate:.3f}")
    print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
