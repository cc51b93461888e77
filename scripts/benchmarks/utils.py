#!/usr/bin/env python3
"""
Benchmark Harness - rxlite vs RxPY

Adaptive benchmark utilities: each benchmark is scaled until one run takes
close to the time limit, then repeated and profiled for time, memory and GC
pressure. Results are summarised with numpy and rendered with rich.
"""

import cProfile
import gc
import pstats
import time
import tracemalloc
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar

import numpy as np
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

T = TypeVar("T")

LIBRARIES = ("rxlite", "rxpy")


# ============================================================================
# Configuration
# ============================================================================


@dataclass
class BenchmarkConfig:
    """Benchmark configuration parameters."""

    time_limit: float = 1.0
    starting_n: int = 10
    scale_factor: float = 1.5
    num_iterations: int = 5
    max_n: int = 10_000_000
    profile_enabled: bool = False


CONFIG = BenchmarkConfig()


# ============================================================================
# Metrics
# ============================================================================


@dataclass
class BenchmarkMetrics:
    """Benchmark execution metrics, summarised over every iteration."""

    library: str
    operation: str
    max_n: int

    # Time
    mean_time: float
    median_time: float
    p95_time: float
    operations_per_second: float

    # Memory
    memory_peak_kb: int
    memory_allocated_kb: int

    # GC
    gc_total_collections: int
    objects_delta: int

    is_dnf: bool = False
    run_times: List[float] = field(default_factory=list)

    @classmethod
    def did_not_finish(cls, library: str, operation: str, n: int) -> "BenchmarkMetrics":
        return cls(
            library=library,
            operation=operation,
            max_n=n,
            mean_time=float("inf"),
            median_time=float("inf"),
            p95_time=float("inf"),
            operations_per_second=0.0,
            memory_peak_kb=0,
            memory_allocated_kb=0,
            gc_total_collections=0,
            objects_delta=0,
            is_dnf=True,
        )


@dataclass
class RunSample:
    """Raw measurements from one profiled run."""

    elapsed: float
    operations: int
    memory_peak: int
    memory_allocated: int
    gc_collections: int
    objects_delta: int


class BenchmarkProfiler:
    """Performance profiling context manager."""

    def __init__(self, enable_profiler: bool = False):
        self.enable_profiler = enable_profiler
        self.profiler: Optional[cProfile.Profile] = None
        self.start_time = 0.0
        self.end_time = 0.0
        self.gc_stats_before = (0, 0, 0)
        self.gc_stats_after = (0, 0, 0)
        self.memory_start = 0
        self.memory_end = 0
        self.memory_peak = 0
        self.objects_before = 0
        self.objects_after = 0

    def __enter__(self):
        gc.collect()
        gc.collect()
        gc.collect()

        if self.enable_profiler:
            self.profiler = cProfile.Profile()
            self.profiler.enable()

        tracemalloc.start()
        self.memory_start, _ = tracemalloc.get_traced_memory()

        self.gc_stats_before = gc.get_count()
        self.objects_before = len(gc.get_objects())

        self.start_time = time.perf_counter()

        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()

        if self.profiler:
            self.profiler.disable()

        self.gc_stats_after = gc.get_count()
        self.objects_after = len(gc.get_objects())

        self.memory_end, self.memory_peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

    def sample(self, operations_performed: int) -> RunSample:
        collections = sum(
            max(0, after - before)
            for before, after in zip(self.gc_stats_before, self.gc_stats_after)
        )
        return RunSample(
            elapsed=self.end_time - self.start_time,
            operations=operations_performed,
            memory_peak=self.memory_peak,
            memory_allocated=self.memory_end - self.memory_start,
            gc_collections=collections,
            objects_delta=self.objects_after - self.objects_before,
        )

    def print_hotspots(self, console: Console, limit: int = 10) -> None:
        if self.profiler is None:
            return
        stats = pstats.Stats(self.profiler)
        stats.sort_stats("cumulative")
        console.print(f"[dim]Top {limit} functions by cumulative time:[/dim]")
        stats.print_stats(limit)


def summarise(library: str, operation: str, n: int, samples: List[RunSample]) -> BenchmarkMetrics:
    """Collapse repeated runs into mean / median / p95 figures."""
    if not samples:
        raise ValueError("No samples to summarise")

    times = np.array([s.elapsed for s in samples])
    operations = np.array([s.operations for s in samples])
    mean_time = float(times.mean())

    return BenchmarkMetrics(
        library=library,
        operation=operation,
        max_n=n,
        mean_time=mean_time,
        median_time=float(np.median(times)),
        p95_time=float(np.percentile(times, 95)),
        operations_per_second=float(operations.mean() / mean_time) if mean_time > 0 else 0.0,
        memory_peak_kb=int(np.mean([s.memory_peak for s in samples])) // 1024,
        memory_allocated_kb=int(np.mean([s.memory_allocated for s in samples])) // 1024,
        gc_total_collections=int(np.mean([s.gc_collections for s in samples])),
        objects_delta=int(np.mean([s.objects_delta for s in samples])),
        run_times=times.tolist(),
    )


# ============================================================================
# Registry
# ============================================================================


class BenchmarkRegistry:
    """Benchmark function registry, keyed by name then library."""

    def __init__(self):
        self.benchmarks: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.categories: Dict[str, str] = {}

    def register(
        self,
        name: str,
        library: str,
        func: Callable,
        category: Optional[str] = None,
        operations_counter: Optional[Callable] = None,
    ):
        self.benchmarks.setdefault(name, {})[library] = {
            "func": func,
            "operations_counter": operations_counter or len,
        }
        if category:
            self.categories[name] = category

    def get_benchmark(self, name: str, library: str) -> Optional[Dict[str, Any]]:
        return self.benchmarks.get(name, {}).get(library)

    def list_benchmarks(self) -> List[str]:
        return list(self.benchmarks.keys())

    def get_category(self, name: str) -> str:
        return self.categories.get(name, "General")

    def complete_pairs(self) -> List[str]:
        """Names registered for every library."""
        return [
            name
            for name, libraries in self.benchmarks.items()
            if all(library in libraries for library in LIBRARIES)
        ]


REGISTRY = BenchmarkRegistry()


def benchmark(
    name: str,
    *,
    library: str = "rxlite",
    category: Optional[str] = None,
    operations_counter: Optional[Callable[[Any], int]] = None,
):
    """Register a benchmark function taking the workload size ``n``."""

    def decorator(func: Callable) -> Callable:
        REGISTRY.register(
            name=name,
            library=library,
            func=func,
            category=category,
            operations_counter=operations_counter,
        )

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# ============================================================================
# Adaptive Benchmark Runner
# ============================================================================


def run_adaptive_benchmark(
    library: str,
    operation: str,
    operation_func: Callable[[int], T],
    operations_counter: Callable[[T], int],
    config: BenchmarkConfig,
    console: Optional[Console] = None,
) -> BenchmarkMetrics:
    """
    Adaptive benchmark runner that scales workload to target time.
    """
    n = config.starting_n

    # Find a workload that takes most of the time limit
    for _ in range(40):
        start = time.perf_counter()
        result = operation_func(n)
        elapsed = time.perf_counter() - start

        if elapsed >= config.time_limit and operations_counter(result) == 0:
            return BenchmarkMetrics.did_not_finish(library, operation, n)
        if elapsed >= config.time_limit * 0.8:
            break

        n = int(n * config.scale_factor) + 1
        if n > config.max_n:
            break

    samples = []
    for _ in range(config.num_iterations):
        with BenchmarkProfiler(config.profile_enabled) as profiler:
            result = operation_func(n)
        samples.append(profiler.sample(operations_counter(result)))
        if console is not None and config.profile_enabled:
            profiler.print_hotspots(console)

    return summarise(library, operation, n, samples)


# ============================================================================
# Comparison Report
# ============================================================================


class BenchmarkComparison:
    """Runs registered benchmark pairs and renders rich tables."""

    def __init__(self, config: Optional[BenchmarkConfig] = None, console: Optional[Console] = None):
        self.config = config or BenchmarkConfig()
        self.console = console or Console()
        self.results: Dict[str, Dict[str, BenchmarkMetrics]] = {}

    def run(self, registry: BenchmarkRegistry, benchmark_names: Optional[List[str]] = None):
        started = time.time()
        names = benchmark_names or registry.complete_pairs()

        self.console.print(
            Panel(
                f"rxlite vs RxPY\n{self.config.num_iterations} iterations per benchmark, "
                f"{self.config.time_limit:.1f}s target per run",
                title="Library Comparison",
                border_style="blue",
            )
        )

        for name in names:
            self._run_pair(name, registry)

        self._display_performance()
        self._display_memory()
        self._display_summary()
        self.console.print(f"\n[dim]Comparison completed in {time.time() - started:.2f} seconds[/dim]")

    def _run_pair(self, name: str, registry: BenchmarkRegistry):
        self.console.print(f"[yellow]Running {name}...[/yellow]")
        pair = {}
        for library in LIBRARIES:
            entry = registry.get_benchmark(name, library)
            if entry is None:
                continue
            try:
                pair[library] = run_adaptive_benchmark(
                    library,
                    name,
                    entry["func"],
                    entry["operations_counter"],
                    self.config,
                    self.console,
                )
            except RecursionError:
                pair[library] = BenchmarkMetrics.did_not_finish(library, name, 0)
        self.results[name] = pair

        if len(pair) == len(LIBRARIES):
            self.console.print(f"[green]done[/green] {name}: {self._verdict(pair)}")

    @staticmethod
    def _verdict(pair: Dict[str, BenchmarkMetrics]) -> str:
        ours = pair["rxlite"].operations_per_second
        theirs = pair["rxpy"].operations_per_second
        if ours > 0 and theirs > 0:
            if ours >= theirs:
                return f"rxlite {ours / theirs:.2f}x faster"
            return f"RxPY {theirs / ours:.2f}x faster"
        return "no comparison (DNF)"

    def _display_performance(self):
        self.console.print()
        table = Table(title="Performance Comparison")
        table.add_column("Operation", style="cyan")
        table.add_column("Category", style="white")
        table.add_column("rxlite ops/sec", style="green", justify="right")
        table.add_column("RxPY ops/sec", style="blue", justify="right")
        table.add_column("rxlite p95", style="green", justify="right")
        table.add_column("RxPY p95", style="blue", justify="right")
        table.add_column("Verdict", style="magenta")

        for name, pair in self.results.items():
            if len(pair) != len(LIBRARIES):
                continue
            ours, theirs = pair["rxlite"], pair["rxpy"]
            table.add_row(
                name,
                REGISTRY.get_category(name),
                "DNF" if ours.is_dnf else f"{ours.operations_per_second:,.0f}",
                "DNF" if theirs.is_dnf else f"{theirs.operations_per_second:,.0f}",
                f"{ours.p95_time * 1000:.2f} ms",
                f"{theirs.p95_time * 1000:.2f} ms",
                self._verdict(pair),
            )

        self.console.print(table)

    def _display_memory(self):
        self.console.print()
        table = Table(title="Memory and GC")
        table.add_column("Operation", style="cyan")
        table.add_column("Library", style="white")
        table.add_column("Peak Memory", style="yellow", justify="right")
        table.add_column("Allocated", style="green", justify="right")
        table.add_column("GCs", style="red", justify="right")
        table.add_column("Object delta", style="blue", justify="right")

        for name, pair in self.results.items():
            for index, library in enumerate(LIBRARIES):
                metrics = pair.get(library)
                if metrics is None:
                    continue
                table.add_row(
                    name if index == 0 else "",
                    library,
                    f"{metrics.memory_peak_kb:,} KB",
                    f"{metrics.memory_allocated_kb:,} KB",
                    str(metrics.gc_total_collections),
                    f"{metrics.objects_delta:,}",
                )

        self.console.print(table)

    def _display_summary(self):
        self.console.print()
        ours_wins = theirs_wins = 0
        for pair in self.results.values():
            if len(pair) != len(LIBRARIES):
                continue
            if pair["rxlite"].operations_per_second > pair["rxpy"].operations_per_second:
                ours_wins += 1
            else:
                theirs_wins += 1

        if ours_wins == theirs_wins:
            winner, color = "Tie", "yellow"
        elif ours_wins > theirs_wins:
            winner, color = "rxlite", "green"
        else:
            winner, color = "RxPY", "blue"

        self.console.print(
            Panel(
                f"Overall Winner: {winner}\nrxlite wins: {ours_wins}\nRxPY wins: {theirs_wins}",
                title="Performance Summary",
                border_style=color,
            )
        )
