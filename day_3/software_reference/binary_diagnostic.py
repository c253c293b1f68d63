#!/usr/bin/env python3
"""
Binary Diagnostic - Power Consumption and Life Support Rating

The diagnostic report is a list of equal-width binary numbers.

Part one:
    gamma rate   = most common bit in each position
    epsilon rate = least common bit in each position (complement of gamma)
    power consumption = gamma * epsilon

Part two filters the report position by position, keeping the numbers
that match a bit criteria, until a single number remains:
    oxygen generator rating: most common bit, ties keep '1'
    CO2 scrubber rating:     least common bit, ties keep '0'
    life support rating = oxygen * CO2
"""

import sys


def parse_report(lines):
    """
    Validate diagnostic report lines.

    Returns:
        list: Stripped binary strings, all of the same width

    Raises:
        ValueError: On an empty report, a non-binary line or mismatched widths
    """
    reports = [line.strip() for line in lines if line.strip()]
    if not reports:
        raise ValueError("Diagnostic report is empty")

    width = len(reports[0])
    for line_number, report in enumerate(reports, start=1):
        if set(report) - {"0", "1"}:
            raise ValueError(f"Line {line_number} is not a binary number: {report!r}")
        if len(report) != width:
            raise ValueError(f"Line {line_number} has {len(report)} bits, expected {width}")

    return reports


def read_input(filename):
    """
    Read input file containing one binary number per line.

    Args:
        filename: Path to input file

    Returns:
        list: Binary numbers as strings
    """
    with open(filename) as f:
        return parse_report(f)


def bit_counts(reports, position):
    """Return (zeros, ones) at the given bit position."""
    ones = sum(1 for report in reports if report[position] == "1")
    return len(reports) - ones, ones


def most_common_bit(reports, position, tie="1"):
    zeros, ones = bit_counts(reports, position)
    if zeros == ones:
        return tie
    return "1" if ones > zeros else "0"


def least_common_bit(reports, position, tie="0"):
    zeros, ones = bit_counts(reports, position)
    if zeros == ones:
        return tie
    return "1" if ones < zeros else "0"


def gamma_epsilon(reports):
    """
    Compute the gamma and epsilon rates.

    Returns:
        tuple: (gamma, epsilon) as integers
    """
    width = len(reports[0])
    gamma = "".join(most_common_bit(reports, position) for position in range(width))
    epsilon = int(gamma, 2) ^ ((1 << width) - 1)
    return int(gamma, 2), epsilon


def power_consumption(reports):
    gamma, epsilon = gamma_epsilon(reports)
    return gamma * epsilon


def filter_rating(reports, bit_criteria):
    """
    Filter the report down to a single number.

    Args:
        reports: List of binary strings
        bit_criteria: Function (reports, position) -> bit to keep

    Returns:
        int: The remaining number

    Algorithm:
        For each bit position from the left, keep only the numbers whose
        bit matches bit_criteria over the numbers still remaining. Stop
        as soon as one number is left. Duplicate numbers can never be
        told apart and raise ValueError.
    """
    remaining = list(reports)
    for position in range(len(reports[0])):
        if len(remaining) == 1:
            break
        keep = bit_criteria(remaining, position)
        matching = [report for report in remaining if report[position] == keep]
        # A position where every number agrees does not split the report
        if matching:
            remaining = matching

    if len(remaining) != 1:
        raise ValueError(f"Bit criteria left {len(remaining)} numbers instead of one")

    return int(remaining[0], 2)


def oxygen_generator_rating(reports):
    return filter_rating(reports, most_common_bit)


def co2_scrubber_rating(reports):
    return filter_rating(reports, least_common_bit)


def life_support_rating(reports):
    return oxygen_generator_rating(reports) * co2_scrubber_rating(reports)


def main():
    """Command-line interface for the binary diagnostic."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Decode the submarine diagnostic report'
    )
    parser.add_argument('input_file', nargs='?', type=argparse.FileType('r'),
                        default=sys.stdin,
                        help='Input file with one binary number per line (default: stdin)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print the intermediate rates')
    args = parser.parse_args()

    try:
        reports = parse_report(args.input_file)
        gamma, epsilon = gamma_epsilon(reports)
        oxygen = oxygen_generator_rating(reports)
        co2 = co2_scrubber_rating(reports)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(gamma * epsilon)
    print(oxygen * co2)

    if args.verbose:
        print(f"\nReport: {len(reports)} numbers of {len(reports[0])} bits", file=sys.stderr)
        print(f"  Gamma rate: {gamma}", file=sys.stderr)
        print(f"  Epsilon rate: {epsilon}", file=sys.stderr)
        print(f"  Oxygen generator rating: {oxygen}", file=sys.stderr)
        print(f"  CO2 scrubber rating: {co2}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
