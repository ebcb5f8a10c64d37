"""
Benchmark script for the layout engine.
Measures placement and collision resolution time on boards of growing size.
"""

import argparse
import logging
import random
import statistics
import sys
import time
from pathlib import Path

# Add src to path so we can import dashboard_builder
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from dashboard_builder.board import DashboardBoard  # noqa: E402
from dashboard_builder.core.models import BlockType, CanvasBounds  # noqa: E402

# Engine logging is noisy at INFO for hundreds of operations
logging.basicConfig(level=logging.WARNING, format='%(message)s')
logger = logging.getLogger("benchmark")


def _report(times):
    print(f"Average: {statistics.mean(times) * 1000:.3f}ms")
    print(f"Min: {min(times) * 1000:.3f}ms")
    print(f"Max: {max(times) * 1000:.3f}ms")


def benchmark_placement(block_count: int, width: int, iterations: int = 3):
    """Time filling an empty board with ``block_count`` default blocks."""
    print(f"\n--- Benchmarking Placement (x{iterations}) ---")
    print(f"Blocks: {block_count}, canvas width: {width}")

    times = []
    for i in range(iterations):
        board = DashboardBoard(bounds=CanvasBounds(width, 800))
        start = time.perf_counter()
        for _ in range(block_count):
            board.add_block(BlockType.IMAGE)
        duration = time.perf_counter() - start
        times.append(duration / block_count)
        print(f"Run {i+1}: {duration:.4f}s (canvas grew to {board.bounds.height}px)")

    _report(times)
    return statistics.mean(times)


def benchmark_moves(block_count: int, width: int, moves: int = 200, seed: int = 12345):
    """Time random drags on a filled board."""
    print(f"\n--- Benchmarking Moves (x{moves}) ---")
    board = DashboardBoard(bounds=CanvasBounds(width, 800))
    for _ in range(block_count):
        board.add_block(BlockType.DIAGRAM)

    rng = random.Random(seed)
    ids = [b.id for b in board.blocks]
    gap = board.config.gap
    times = []
    displaced = 0
    residual = 0
    for _ in range(moves):
        block_id = rng.choice(ids)
        x = rng.randrange(gap, max(gap + 1, width - 300), gap)
        y = rng.randrange(gap, max(gap + 1, board.bounds.height - 200), gap)
        start = time.perf_counter()
        result = board.move_block(block_id, x, y)
        times.append(time.perf_counter() - start)
        displaced += len(result.displaced)
        residual += len(result.residual_overlaps)

    print(f"Displaced: {displaced} total, residual overlaps: {residual}")
    _report(times)
    return statistics.mean(times)


def benchmark_resizes(block_count: int, width: int, resizes: int = 200, seed: int = 54321):
    """Time random resizes on a filled board."""
    print(f"\n--- Benchmarking Resizes (x{resizes}) ---")
    board = DashboardBoard(bounds=CanvasBounds(width, 800))
    for _ in range(block_count):
        board.add_block(BlockType.IMAGE)

    rng = random.Random(seed)
    ids = [b.id for b in board.blocks]
    gap = board.config.gap
    times = []
    for _ in range(resizes):
        block_id = rng.choice(ids)
        w = rng.randrange(gap * 5, 600, gap)
        h = rng.randrange(gap * 5, 500, gap)
        start = time.perf_counter()
        board.resize_block(block_id, w, h)
        times.append(time.perf_counter() - start)

    _report(times)
    return statistics.mean(times)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Benchmark the dashboard layout engine")
    parser.add_argument("--blocks", type=int, nargs="+", default=[10, 50, 100],
                        help="Board sizes to benchmark")
    parser.add_argument("--width", type=int, default=1200, help="Canvas width in px")
    parser.add_argument("--ops", type=int, default=200, help="Moves/resizes per board size")

    args = parser.parse_args()

    for count in args.blocks:
        print(f"\n===== {count} blocks =====")
        benchmark_placement(count, args.width)
        benchmark_moves(count, args.width, args.ops)
        benchmark_resizes(count, args.width, args.ops)
