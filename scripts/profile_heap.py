"""
Profiling script for Fibonacci heap performance analysis.

This script times the heap operations whose amortized cost the structure is
known for, and the Dijkstra calculator built on top of it.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from fibheap import Calculator, FibonacciHeap


def random_keys(n):
    """Create n random integer keys."""
    np.random.seed(42)
    return np.random.randint(1, 10_000, size=n).tolist()


def create_graph(n_nodes, n_edges):
    """Create a random graph with n nodes and approximately n_edges edges."""
    edges = []
    np.random.seed(42)
    for _ in range(n_edges):
        source = int(np.random.randint(0, n_nodes))
        target = int(np.random.randint(0, n_nodes))
        if source != target:
            edges.append((source, target, float(np.random.uniform(1, 10))))
    return edges


def profile_inserts():
    """Profile 100k inserts."""
    heap = FibonacciHeap()
    for k in random_keys(100_000):
        heap.insert(k)


def profile_extracts():
    """Profile 10k inserts followed by draining the heap."""
    heap = FibonacciHeap()
    for k in random_keys(10_000):
        heap.insert(k)
    while not heap.is_empty():
        heap.extract_min()


def profile_decrease_keys():
    """Profile 10k decrease-keys interleaved with extracts."""
    heap = FibonacciHeap()
    handles = [heap.insert(k) for k in random_keys(20_000)]
    heap.extract_min()
    np.random.seed(7)
    for i in np.random.permutation(len(handles))[:10_000]:
        h = handles[int(i)]
        if h.alive:
            heap.decrease_key(h, h.key - 5_000)
        if i % 10 == 0:
            heap.extract_min()


def profile_dijkstra():
    """Profile all-pairs shortest paths (200 nodes, 1000 edges)."""
    edges = create_graph(200, 1000)
    calc = Calculator(200, edges, lambda e: e[0], lambda e: e[1], lambda e: e[2])
    calc.distance_matrix()


def show_structure():
    """Print the heap after the operations of a small walk-through."""
    heap = FibonacciHeap()
    handles = {k: heap.insert(k) for k in [5, 3, 8, 1, 10, 7, 2, 9]}
    print(f"inserted:      {heap}  (min {heap.minimum()}, size {heap.size()})")
    heap.extract_min()
    print(f"extract_min:   {heap}  (min {heap.minimum()}, size {heap.size()})")
    heap.decrease_key(handles[9], 0)
    print(f"9 -> 0:        {heap}  (min {heap.minimum()}, size {heap.size()})")
    heap.delete(handles[5])
    print(f"delete 5:      {heap}  (min {heap.minimum()}, size {heap.size()})")


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    profiler = cProfile.Profile()

    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(15)

    print("\nTop 15 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    print("fibheap Performance Profiling")
    print("=" * 60)
    show_structure()

    scenarios = [
        ("Insert (100k keys)", profile_inserts),
        ("Extract (10k keys)", profile_extracts),
        ("Decrease key (10k of 20k keys)", profile_decrease_keys),
        ("Dijkstra (200 nodes, 1000 edges)", profile_dijkstra),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '').replace(',', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")


if __name__ == "__main__":
    main()
