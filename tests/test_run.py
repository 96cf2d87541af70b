import csv
import json

from run import build_jobs, format_result, main, parse_args, reverse_job_moves
from solver import find_tour


def test_format_result_prints_grid_and_iterations():
    result = find_tour({"width": 3, "height": 1, "moves": [[1, 0]]})
    text = format_result(result)
    assert text.splitlines() == [
        "    1    2    3",
        f"Calculation completed after {result.iterations} iterations.",
    ]


def test_format_result_reports_missing_path():
    result = find_tour({"width": 4, "height": 4})
    lines = format_result(result).splitlines()
    assert lines[0] == "No path found."
    assert lines[1].startswith("Calculation completed after ")


def test_build_jobs_defaults_to_ten_by_ten(monkeypatch):
    monkeypatch.delenv("KNIGHT_TOUR_JOBS", raising=False)
    jobs = build_jobs(parse_args([]))
    assert jobs == [{
        "id": "cli",
        "width": 10,
        "height": 10,
        "start": [0, 0],
        "prune": True,
        "strategy": "auto",
    }]


def test_build_jobs_reads_env_fallback(monkeypatch, tmp_path):
    jobs_file = tmp_path / "env_jobs.json"
    jobs_file.write_text(json.dumps([{"id": "from-env", "width": 3, "height": 3}]))
    monkeypatch.setenv("KNIGHT_TOUR_JOBS", str(jobs_file))

    assert [j["id"] for j in build_jobs(parse_args([]))] == ["from-env"]
    # Explicit dimensions win over the environment.
    assert build_jobs(parse_args(["--width", "5", "--height", "5"]))[0]["id"] == "cli"


def test_reverse_job_moves_defaults_to_knight_table():
    job = reverse_job_moves({"id": "r"})
    assert job["moves"][0] == [-2, -1]
    assert job["moves"][-1] == [1, 2]


def test_main_single_board(capsys):
    results = main(["--width", "5", "--height", "5", "--start", "0,0"])
    out = capsys.readouterr().out.splitlines()

    assert results[0]["found"] is True
    assert len(out) == 6
    assert out[0].split()[0] == "1"
    assert out[-1] == f"Calculation completed after {results[0]['iterations']} iterations."


def test_main_no_path(capsys):
    results = main(["--width", "4", "--height", "4", "--no-prune", "--strategy", "iterative"])
    out = capsys.readouterr().out

    assert "No path found." in out
    assert results[0]["grid"] == []


def test_main_moves_file_and_reverse(tmp_path, capsys):
    moves_file = tmp_path / "moves.json"
    moves_file.write_text(json.dumps([[1, 0], [-1, 0]]))

    results = main([
        "--width", "3", "--height", "1", "--start", "2,0",
        "--moves", str(moves_file), "--reverse-moves",
    ])

    assert results[0]["grid"] == [[3, 2, 1]]
    assert "    3    2    1" in capsys.readouterr().out


def test_main_jobs_file_with_outputs(tmp_path, capsys):
    jobs_file = tmp_path / "jobs.json"
    jobs_file.write_text(json.dumps([
        {"id": "ok", "width": 5, "height": 5},
        {"id": "bad", "width": 3, "height": 3, "moves": []},
    ]))
    output_path = tmp_path / "results.csv"
    json_path = tmp_path / "out" / "results.json"
    trace_path = tmp_path / "trace.csv"

    main([
        "--jobs", str(jobs_file),
        "--output", str(output_path),
        "--dump-json", str(json_path),
        "--trace", str(trace_path),
    ])
    out = capsys.readouterr().out

    assert "== ok" in out
    assert "ERROR: Failed to solve job bad" in out

    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["id"] for r in rows] == ["ok", "bad"]
    assert rows[0]["found"] == "True"
    assert len(json.loads(rows[0]["grid"])) == 5
    assert rows[1]["iterations"] == "-1"

    dumped = json.loads(json_path.read_text())
    assert dumped[0]["iterations"] == int(rows[0]["iterations"])

    trace_file = tmp_path / "trace-ok.csv"
    assert trace_file.exists()
    assert "attempt" in trace_file.read_text()
