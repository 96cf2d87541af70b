"""CLI entrypoint: build search job(s), run the tour search, and report results."""

import argparse
import csv
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import find_tour
from src.tour.loader import load_jobs
from src.tour.model import KNIGHT_MOVES, MoveTable, SearchResult
from src.utils.io import load_json, save_json
from src.utils.trace import enable_tracing, get_tracer, reset_tracer

JOBS_ENV_VAR = "KNIGHT_TOUR_JOBS"


def parse_start(value: str) -> List[int]:
    try:
        x, y = value.split(",", 1)
        return [int(x), int(y)]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Start must look like X,Y, got {value!r}") from None


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Search for an open knight's tour by backtracking")
    parser.add_argument("--width", type=int, default=None, help="Board width (default 10)")
    parser.add_argument("--height", type=int, default=None, help="Board height (default 10)")
    parser.add_argument("--start", type=parse_start, default=[0, 0], help="Starting cell as X,Y")
    parser.add_argument("--no-prune", action="store_true", help="Disable the blocked-cell look-ahead")
    parser.add_argument("--moves", type=Path, default=None, help="JSON file with a list of [dx, dy] moves")
    parser.add_argument("--reverse-moves", action="store_true", help="Try moves in reverse table order")
    parser.add_argument(
        "--strategy",
        choices=["auto", "recursive", "iterative"],
        default="auto",
        help="Recursive search or explicit stack (auto picks by board size)",
    )
    parser.add_argument(
        "--jobs",
        type=Path,
        default=None,
        help=f"Job file (.json, .jsonl, .csv, .parquet); falls back to ${JOBS_ENV_VAR}",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results CSV")
    parser.add_argument("--dump-json", type=Path, default=None, help="Optional path to write results JSON")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the search trace CSV")
    return parser.parse_args(argv)


def build_jobs(args) -> List[Dict[str, Any]]:
    jobs_path = args.jobs
    if jobs_path is None and args.width is None and args.height is None:
        env_path = os.environ.get(JOBS_ENV_VAR)
        if env_path and os.path.exists(env_path):
            jobs_path = Path(env_path)

    if jobs_path is not None:
        return load_jobs(str(jobs_path))

    job: Dict[str, Any] = {
        "id": "cli",
        "width": args.width if args.width is not None else 10,
        "height": args.height if args.height is not None else 10,
        "start": args.start,
        "prune": not args.no_prune,
        "strategy": args.strategy,
    }
    if args.moves is not None:
        job["moves"] = load_json(args.moves)
    return [job]


def reverse_job_moves(job: Dict[str, Any]) -> Dict[str, Any]:
    moves = MoveTable.from_pairs(job["moves"]) if job.get("moves") else KNIGHT_MOVES
    return {**job, "moves": [list(offset) for offset in moves.reversed()]}


def format_result(result: SearchResult, field_width: int = 5) -> str:
    lines = []
    if result.found:
        if result.board.total_cells:
            lines.append(result.board.format(field_width))
    else:
        lines.append("No path found.")
    lines.append(f"Calculation completed after {result.iterations} iterations.")
    return "\n".join(lines)


def _trace_path(base: Path, job_id: str, multiple: bool) -> Path:
    if not multiple:
        return base
    return base.with_name(f"{base.stem}-{job_id}{base.suffix}")


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "found", "iterations", "grid"])

        for r in results:
            writer.writerow([
                r["id"],
                r["found"],
                r["iterations"],
                json.dumps(r["grid"], separators=(",", ":")),
            ])


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    jobs = build_jobs(args)
    results = []
    multiple = len(jobs) > 1

    for job in jobs:
        job_id = str(job.get("id", "unknown"))
        reset_tracer()
        enable_tracing(args.trace is not None)
        tracer = get_tracer()

        try:
            if args.reverse_moves:
                job = reverse_job_moves(job)
            result = find_tour(job, tracer=tracer)

            if multiple:
                print(f"== {job_id}")
            print(format_result(result))

            results.append({
                "id": job_id,
                "found": result.found,
                "iterations": result.iterations,
                "grid": result.board.rows() if result.found else [],
            })
            if args.trace is not None:
                tracer.to_csv(_trace_path(args.trace, job_id, multiple))
        except Exception as e:
            print(f"ERROR: Failed to solve job {job_id}: {e}")
            results.append({
                "id": job_id,
                "found": False,
                "iterations": -1,
                "grid": [],
            })

    if args.output:
        write_results_csv(results, args.output)
    if args.dump_json:
        save_json(args.dump_json, results)
    return results


if __name__ == "__main__":
    main()
