"""Example: How to trace a tour search and dump the steps to CSV."""

from pathlib import Path
from typing import Optional

from solver import find_tour
from src.tour.model import SearchConfig, SearchResult
from src.utils.trace import enable_tracing, get_tracer, reset_tracer


def solve_and_trace(config: SearchConfig, output_trace_csv: Optional[Path] = None) -> SearchResult:
    """
    Search a board and log all steps to a trace file.

    Args:
        config: Board size, move table, start and pruning switch
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The search result
    """
    # Reset tracer for this search
    reset_tracer()
    enable_tracing(True)
    tracer = get_tracer()

    result = find_tour(config, tracer=tracer)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Search Summary:")
    print(f"  Found: {result.found}")
    print(f"  Iterations: {result.iterations}")
    print(f"  Placements: {summary['num_placements']}")
    print(f"  Prunes: {summary['num_prunes']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return result


if __name__ == "__main__":
    trace_output = Path("traces/knight_5x5.csv")
    result = solve_and_trace(SearchConfig(width=5, height=5), trace_output)
    print(result.board.format())
