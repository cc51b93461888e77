"""
rxlite vs RxPY Performance Benchmark Suite

This benchmark suite covers:
1. Core operations (creation, subscription, synchronous chains)
2. Fan-in operators (merge_all, flat_map, zip)
3. Aggregation and filtering (reduce, take_until, distinct_until_changed)
4. Time-based operators on a virtual clock (throttle vs debounce)

Run with the benchmark extra installed:

    poetry install --extras benchmark
    python scripts/benchmarks/rxpy.py --time-limit 0.5
"""

import argparse

# Ensure we use the local rxlite package, not the installed one
import os
import sys
from datetime import timedelta

script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(script_dir, "../.."))
sys.path.insert(0, project_root)

import rx
from rich.console import Console
from rx import operators as ops
from rx.scheduler import HistoricalScheduler
from rx.subject import Subject as RxSubject
from utils import CONFIG, REGISTRY, BenchmarkComparison, benchmark

import rxlite
from rxlite import Subject, VirtualTimeScheduler, from_iterable, of

# ============================================================================
# CORE OPERATIONS
# ============================================================================


@benchmark("Observable Creation", category="Core Operations")
def bench_creation_rxlite(n):
    return [of(i) for i in range(n)]


@benchmark("Observable Creation", library="rxpy", category="Core Operations")
def bench_creation_rxpy(n):
    return [rx.of(i) for i in range(n)]


@benchmark("Subscribe and Complete", category="Core Operations")
def bench_subscribe_rxlite(n):
    values = []
    for i in range(n):
        of(i).subscribe(values.append)
    return values


@benchmark("Subscribe and Complete", library="rxpy", category="Core Operations")
def bench_subscribe_rxpy(n):
    values = []
    for i in range(n):
        rx.of(i).subscribe(values.append)
    return values


@benchmark("Map/Filter Chain", category="Core Operations", operations_counter=lambda x: x)
def bench_chain_rxlite(n):
    source = Subject()
    results = []
    source.map(lambda x: x * 2).filter(lambda x: x % 3 == 0).map(lambda x: x + 1).subscribe(
        results.append
    )
    for i in range(n):
        source.on_next(i)
    return n


@benchmark(
    "Map/Filter Chain",
    library="rxpy",
    category="Core Operations",
    operations_counter=lambda x: x,
)
def bench_chain_rxpy(n):
    source = RxSubject()
    results = []
    source.pipe(
        ops.map(lambda x: x * 2),
        ops.filter(lambda x: x % 3 == 0),
        ops.map(lambda x: x + 1),
    ).subscribe(results.append)
    for i in range(n):
        source.on_next(i)
    return n


# ============================================================================
# FAN-IN
# ============================================================================


@benchmark("Merge All", category="Fan-In", operations_counter=lambda x: x)
def bench_merge_all_rxlite(n):
    results = []
    from_iterable(of(i, -i) for i in range(n)).merge_all().subscribe(results.append)
    return len(results)


@benchmark("Merge All", library="rxpy", category="Fan-In", operations_counter=lambda x: x)
def bench_merge_all_rxpy(n):
    results = []
    rx.from_iterable(rx.of(i, -i) for i in range(n)).pipe(ops.merge_all()).subscribe(
        results.append
    )
    return len(results)


@benchmark("Flat Map", category="Fan-In", operations_counter=lambda x: x)
def bench_flat_map_rxlite(n):
    results = []
    from_iterable(range(n)).flat_map(lambda i: of(i, i + 1)).subscribe(results.append)
    return len(results)


@benchmark("Flat Map", library="rxpy", category="Fan-In", operations_counter=lambda x: x)
def bench_flat_map_rxpy(n):
    results = []
    rx.from_iterable(range(n)).pipe(ops.flat_map(lambda i: rx.of(i, i + 1))).subscribe(
        results.append
    )
    return len(results)


@benchmark("Zip Live Streams", category="Fan-In", operations_counter=lambda x: x)
def bench_zip_rxlite(n):
    left, right = Subject(), Subject()
    results = []
    rxlite.zip(lambda a, b: a + b, left, right).subscribe(results.append)
    for i in range(n):
        left.on_next(i)
        right.on_next(i)
    return len(results)


@benchmark(
    "Zip Live Streams", library="rxpy", category="Fan-In", operations_counter=lambda x: x
)
def bench_zip_rxpy(n):
    left, right = RxSubject(), RxSubject()
    results = []
    rx.zip(left, right).pipe(ops.map(lambda pair: pair[0] + pair[1])).subscribe(
        results.append
    )
    for i in range(n):
        left.on_next(i)
        right.on_next(i)
    return len(results)


# ============================================================================
# AGGREGATION AND FILTERING
# ============================================================================


@benchmark("Reduce", category="Aggregation", operations_counter=lambda x: x)
def bench_reduce_rxlite(n):
    totals = []
    from_iterable(range(n)).reduce(lambda acc, x: acc + x, 0).subscribe(totals.append)
    return n


@benchmark("Reduce", library="rxpy", category="Aggregation", operations_counter=lambda x: x)
def bench_reduce_rxpy(n):
    totals = []
    rx.from_iterable(range(n)).pipe(ops.reduce(lambda acc, x: acc + x, 0)).subscribe(
        totals.append
    )
    return n


@benchmark("Take Until", category="Aggregation", operations_counter=lambda x: x)
def bench_take_until_rxlite(n):
    source, stop = Subject(), Subject()
    results = []
    source.take_until(stop).subscribe(results.append)
    for i in range(n):
        source.on_next(i)
    stop.on_next(True)
    return n


@benchmark(
    "Take Until", library="rxpy", category="Aggregation", operations_counter=lambda x: x
)
def bench_take_until_rxpy(n):
    source, stop = RxSubject(), RxSubject()
    results = []
    source.pipe(ops.take_until(stop)).subscribe(results.append)
    for i in range(n):
        source.on_next(i)
    stop.on_next(True)
    return n


@benchmark("Distinct Until Changed", category="Aggregation", operations_counter=lambda x: x)
def bench_distinct_rxlite(n):
    source = Subject()
    results = []
    source.distinct_until_changed().subscribe(results.append)
    for i in range(n):
        source.on_next(i // 3)
    return n


@benchmark(
    "Distinct Until Changed",
    library="rxpy",
    category="Aggregation",
    operations_counter=lambda x: x,
)
def bench_distinct_rxpy(n):
    source = RxSubject()
    results = []
    source.pipe(ops.distinct_until_changed()).subscribe(results.append)
    for i in range(n):
        source.on_next(i // 3)
    return n


# ============================================================================
# TIME-BASED OPERATORS (virtual clocks)
# ============================================================================


def _gap(i):
    # Bursts of four values one tick apart, then a gap wider than the window
    return 6 if i % 4 == 3 else 1


@benchmark("Throttle Bursts", category="Time-Based", operations_counter=lambda x: x)
def bench_throttle_rxlite(n):
    scheduler = VirtualTimeScheduler()
    source = Subject()
    results = []
    source.throttle(5, scheduler).subscribe(results.append)
    for i in range(n):
        source.on_next(i)
        scheduler.advance_by(_gap(i))
    return n


@benchmark(
    "Throttle Bursts", library="rxpy", category="Time-Based", operations_counter=lambda x: x
)
def bench_throttle_rxpy(n):
    scheduler = HistoricalScheduler()
    source = RxSubject()
    results = []
    source.pipe(ops.debounce(timedelta(milliseconds=5), scheduler=scheduler)).subscribe(
        results.append
    )
    for i in range(n):
        source.on_next(i)
        scheduler.advance_by(timedelta(milliseconds=_gap(i)))
    return n


# ============================================================================
# CLI
# ============================================================================


def main():
    parser = argparse.ArgumentParser(description="rxlite vs RxPY Performance Comparison")
    parser.add_argument("--list", action="store_true", help="List available benchmarks")
    parser.add_argument("--benchmarks", nargs="+", help="Run specific benchmarks")
    parser.add_argument("--profile", action="store_true", help="Enable cProfile")
    parser.add_argument("--time-limit", type=float, help="Time limit per benchmark")
    parser.add_argument("--iterations", type=int, help="Number of iterations")
    parser.add_argument("--category", help="Run only benchmarks in this category")

    args = parser.parse_args()
    console = Console()

    if args.list:
        console.print("\n[bold]Available Benchmarks:[/bold]")

        categories = {}
        for name in REGISTRY.list_benchmarks():
            categories.setdefault(REGISTRY.get_category(name), []).append(name)

        for category in sorted(categories.keys()):
            console.print(f"\n[cyan]{category}:[/cyan]")
            for name in sorted(categories[category]):
                console.print(f"  - {name}")
        return

    if args.time_limit:
        CONFIG.time_limit = args.time_limit
    if args.iterations:
        CONFIG.num_iterations = args.iterations
    if args.profile:
        CONFIG.profile_enabled = True

    benchmark_names = args.benchmarks
    if args.category:
        benchmark_names = [
            name
            for name in REGISTRY.complete_pairs()
            if REGISTRY.get_category(name) == args.category
        ]

    comparison = BenchmarkComparison(CONFIG, console)
    comparison.run(REGISTRY, benchmark_names=benchmark_names)


if __name__ == "__main__":
    main()
