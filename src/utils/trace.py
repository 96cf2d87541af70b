"""Tracing module: logs tour search steps and writes to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TraceStep:
    """A single step in the search."""

    timestamp: float
    step_number: int
    action_type: str  # 'attempt', 'place', 'prune', 'backtrack', 'progress', 'tour_found'
    x: Optional[int] = None
    y: Optional[int] = None
    move_number: Optional[int] = None
    iteration: Optional[int] = None
    percent: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records search steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, pos: Optional[Tuple[int, int]] = None, **fields: Any) -> None:
        self.step_counter += 1
        x, y = pos if pos is not None else (None, None)
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            x=x,
            y=y,
            **fields,
        ))

    def log_attempt(self, pos: Tuple[int, int], iteration: int, move_number: int):
        """Log one recursive step trying to occupy `pos`."""
        if not self.enabled:
            return
        self._record('attempt', pos, iteration=iteration, move_number=move_number)

    def log_place(self, pos: Tuple[int, int], move_number: int):
        """Log a cell being marked with its move number."""
        if not self.enabled:
            return
        self._record('place', pos, move_number=move_number)

    def log_prune(self, pos: Tuple[int, int], move_number: int, orphan: Tuple[int, int]):
        """Log a placement rejected because it isolates a neighbouring cell."""
        if not self.enabled:
            return
        self._record(
            'prune',
            pos,
            move_number=move_number,
            reason=f"Cell {orphan} would have no exit",
        )

    def log_backtrack(self, pos: Tuple[int, int], move_number: int, reason: str = "No extension found"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', pos, move_number=move_number, reason=reason)

    def log_progress(self, percent: int, iteration: int):
        """Log the estimated share of the search space crossing a new percent."""
        if not self.enabled:
            return
        self._record('progress', percent=percent, iteration=iteration)

    def log_tour_found(self, move_number: int, iteration: int):
        """Log when a full tour is found."""
        if not self.enabled:
            return
        self._record('tour_found', move_number=move_number, iteration=iteration)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'x', 'y',
            'move_number', 'iteration', 'percent', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_attempts': action_counts.get('attempt', 0),
            'num_placements': action_counts.get('place', 0),
            'num_prunes': action_counts.get('prune', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer. Disabled until `enable_tracing` is called."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=False)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
