"""
Property-based tests for the sonar sweep using Hypothesis.
"""

import io
import os
import sys

import pytest
from hypothesis import given, strategies as st
from hypothesis.strategies import integers, lists

from day_1.software_reference.sonar_sweep import (
    annotate, count_increases, count_window_increases, main, read_input, window_sums,
)


EXAMPLE_FILE = os.path.join(os.path.dirname(__file__), "..", "testcases", "example_input.txt")

depths_strategy = lists(integers(min_value=0, max_value=10000), min_size=0, max_size=200)


@given(depths_strategy)
def test_increases_bounded(depths):
    """
    Property: At most len - 1 values can increase.
    """
    assert 0 <= count_increases(depths) <= max(len(depths) - 1, 0)


@given(lists(integers(), min_size=1, max_size=50, unique=True))
def test_sorted_always_increases(depths):
    """
    Property: Strictly ascending depths increase at every step.
    """
    ordered = sorted(depths)
    assert count_increases(ordered) == len(ordered) - 1
    assert count_increases(ordered[::-1]) == 0


@given(depths_strategy, integers(min_value=1, max_value=10))
def test_window_count(depths, size):
    """
    Property: There is one sum per full window.
    """
    assert len(window_sums(depths, size)) == max(len(depths) - size + 1, 0)


@given(depths_strategy)
def test_window_of_one_is_identity(depths):
    assert window_sums(depths, 1) == depths
    assert count_window_increases(depths, 1) == count_increases(depths)


@given(depths_strategy)
def test_window_increase_compares_dropped_values(depths):
    """
    Property: Consecutive 3-windows share two values, so the sum increases
    exactly when the entering value beats the leaving one.
    """
    expected = sum(1 for i in range(3, len(depths)) if depths[i] > depths[i - 3])
    assert count_window_increases(depths) == expected


@given(depths_strategy)
def test_annotation_counts(depths):
    lines = list(annotate(depths))
    assert len(lines) == len(depths)
    assert sum(1 for line in lines if line.endswith("(increased)")) == count_increases(depths)


def test_example():
    depths = read_input(EXAMPLE_FILE)

    assert len(depths) == 10
    assert count_increases(depths) == 7
    assert count_window_increases(depths) == 5


def test_example_window_sums():
    depths = read_input(EXAMPLE_FILE)
    assert window_sums(depths) == [607, 618, 618, 617, 647, 716, 769, 792]


def test_example_annotations():
    sums = window_sums(read_input(EXAMPLE_FILE))
    assert list(annotate(sums, "sum"))[:4] == [
        "607 (N/A - no previous sum)",
        "618 (increased)",
        "618 (no change)",
        "617 (decreased)",
    ]


def test_invalid_window():
    with pytest.raises(ValueError):
        window_sums([1, 2, 3], 0)


# Command-line interface
def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["sonar_sweep", *args])
    return main()


def test_cli_example(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE) == 0

    out, err = capsys.readouterr()
    assert out == "7\n5\n"
    assert err == ""


def test_cli_verbose_on_stderr(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--verbose") == 0

    out, err = capsys.readouterr()
    assert out == "7\n5\n"
    assert "199 (N/A - no previous measurement)" in err
    assert "607 (N/A - no previous sum)" in err


def test_cli_window_size(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--window", "1") == 0
    assert capsys.readouterr().out == "7\n7\n"


def test_cli_invalid_depth(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("199\nabc\n"))

    assert run_main(monkeypatch) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error:")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
