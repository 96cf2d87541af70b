"""Test to verify trace.py works and captures search steps."""

from src.tour.model import SearchConfig
from src.utils.trace import Tracer, get_tracer, reset_tracer
from trace_example import solve_and_trace


def test_tracer_captures_steps(tmp_path):
    """
    Verifies the tracer logs steps correctly without running a search.
    """
    tracer = Tracer()

    tracer.log_attempt((0, 0), iteration=1, move_number=1)
    tracer.log_place((0, 0), move_number=1)
    tracer.log_prune((1, 2), move_number=2, orphan=(0, 4))
    tracer.log_progress(12, iteration=3)
    tracer.log_backtrack((0, 0), move_number=1)
    tracer.log_tour_found(move_number=25, iteration=4)

    summary = tracer.summary()
    assert summary["total_steps"] == 6
    assert summary["num_attempts"] == 1
    assert summary["num_prunes"] == 1
    assert summary["action_counts"]["progress"] == 1
    assert tracer.steps[2].reason == "Cell (0, 4) would have no exit"
    assert [s.step_number for s in tracer.steps] == [1, 2, 3, 4, 5, 6]

    output_path = tmp_path / "trace.csv"
    tracer.to_csv(output_path)
    lines = output_path.read_text().splitlines()
    assert lines[0].startswith("timestamp,step_number,action_type,x,y")
    assert len(lines) == 7


def test_disabled_tracer_records_nothing():
    tracer = Tracer(enabled=False)
    tracer.log_attempt((0, 0), iteration=1, move_number=1)
    assert tracer.steps == []


def test_global_tracer_starts_disabled():
    reset_tracer()
    assert get_tracer().enabled is False
    assert get_tracer() is get_tracer()


def test_solve_and_trace_writes_csv(tmp_path, capsys):
    output_path = tmp_path / "traces" / "3x4.csv"
    result = solve_and_trace(SearchConfig(width=3, height=4), output_path)

    assert output_path.exists()
    assert "Search Summary:" in capsys.readouterr().out
    assert get_tracer().summary()["num_attempts"] == result.iterations
    reset_tracer()
