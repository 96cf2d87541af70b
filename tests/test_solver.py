"""Integration-style tests for the top-level tour search."""

import pytest

from solver import find_tour
from src.tour.model import SearchConfig, validate_tour


def test_find_tour_accepts_config():
    result = find_tour(SearchConfig(width=5, height=5))

    assert result.found, "A 5x5 board has a tour from the corner"
    assert validate_tour(result.board)
    assert result.iterations > 25


def test_find_tour_accepts_raw_job_dict():
    result = find_tour({"id": "small", "width": 4, "height": 4, "start": [1, 2]})

    assert not result.found
    assert result.board.is_empty()
    assert result.as_tuple() == (False, result.iterations)


def test_find_tour_honours_move_table_and_start():
    result = find_tour({"width": 3, "height": 1, "moves": [[1, 0], [-1, 0]], "start": [0, 0]})

    assert result.found
    assert result.path() == [(0, 0), (1, 0), (2, 0)]


def test_find_tour_rejects_other_inputs():
    with pytest.raises(TypeError):
        find_tour("5x5")


def test_find_tour_rejects_empty_move_table():
    with pytest.raises(ValueError):
        find_tour({"width": 3, "height": 3, "moves": []})
