"""
Property-based tests for the binary diagnostic using Hypothesis.
"""

import io
import os
import sys

import pytest
from hypothesis import given, strategies as st

from day_3.software_reference.binary_diagnostic import (
    bit_counts, co2_scrubber_rating, gamma_epsilon, least_common_bit, life_support_rating,
    main, most_common_bit, oxygen_generator_rating, parse_report, power_consumption, read_input,
)


EXAMPLE_FILE = os.path.join(os.path.dirname(__file__), "..", "testcases", "example_input.txt")


@st.composite
def diagnostic_report(draw, unique=False):
    """Generate a non-empty list of equal-width binary strings."""
    width = draw(st.integers(min_value=1, max_value=12))
    numbers = draw(st.lists(st.integers(min_value=0, max_value=(1 << width) - 1),
                            min_size=1, max_size=64, unique=unique))
    return [format(number, f"0{width}b") for number in numbers]


@given(diagnostic_report())
def test_epsilon_is_complement(reports):
    """
    Property: gamma and epsilon together set every bit exactly once.
    """
    width = len(reports[0])
    gamma, epsilon = gamma_epsilon(reports)

    assert gamma & epsilon == 0
    assert gamma | epsilon == (1 << width) - 1


@given(diagnostic_report())
def test_bit_counts_sum(reports):
    for position in range(len(reports[0])):
        zeros, ones = bit_counts(reports, position)
        assert zeros + ones == len(reports)


@given(diagnostic_report())
def test_common_bits_differ(reports):
    """
    Property: Most and least common bits differ, ties included.
    """
    for position in range(len(reports[0])):
        assert most_common_bit(reports, position) != least_common_bit(reports, position)


@given(diagnostic_report(unique=True))
def test_ratings_come_from_report(reports):
    """
    Property: Both ratings are numbers taken from the report.
    """
    values = {int(report, 2) for report in reports}

    assert oxygen_generator_rating(reports) in values
    assert co2_scrubber_rating(reports) in values


@given(diagnostic_report(unique=True))
def test_single_number_rates_itself(reports):
    single = reports[:1]
    value = int(single[0], 2)

    assert oxygen_generator_rating(single) == value
    assert co2_scrubber_rating(single) == value


def test_example_part_one():
    reports = read_input(EXAMPLE_FILE)

    assert gamma_epsilon(reports) == (22, 9)
    assert power_consumption(reports) == 198


def test_example_part_two():
    reports = read_input(EXAMPLE_FILE)

    assert oxygen_generator_rating(reports) == 23
    assert co2_scrubber_rating(reports) == 10
    assert life_support_rating(reports) == 230


def test_tie_breaks():
    reports = ["10", "01"]

    assert most_common_bit(reports, 0) == "1"
    assert least_common_bit(reports, 0) == "0"
    assert oxygen_generator_rating(reports) == 2
    assert co2_scrubber_rating(reports) == 1


@pytest.mark.parametrize("lines", [
    [],
    ["\n"],
    ["0101", "012"],
    ["0101", "011"],
])
def test_invalid_report(lines):
    with pytest.raises(ValueError):
        parse_report(lines)


def test_parse_strips_lines():
    assert parse_report(["0101\n", "\n", "1100\n"]) == ["0101", "1100"]


# Command-line interface
def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["binary_diagnostic", *args])
    return main()


def test_cli_example(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE) == 0

    out, err = capsys.readouterr()
    assert out == "198\n230\n"
    assert err == ""


def test_cli_verbose_on_stderr(monkeypatch, capsys):
    assert run_main(monkeypatch, EXAMPLE_FILE, "--verbose") == 0

    out, err = capsys.readouterr()
    assert out == "198\n230\n"
    assert "Gamma rate: 22" in err
    assert "CO2 scrubber rating: 10" in err


def test_cli_invalid_report(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("0101\n0102\n"))

    assert run_main(monkeypatch) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err == "Error: Line 2 is not a binary number: '0102'\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
