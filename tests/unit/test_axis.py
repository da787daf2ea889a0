"""Unit tests for chart axis scaling"""

import pytest
from econ_gauge.indicators.axis import build_axis, format_tick, tick_values


def test_build_axis_empty_input():
    """Test no axis for empty or all-invalid input"""
    assert build_axis([]) is None
    assert build_axis([float("nan"), "abc", None]) is None


def test_build_axis_flat_series_is_deterministic():
    """Test flat series padding and repeatability"""
    first = build_axis([100], 4)
    second = build_axis([100], 4)

    assert first == second
    assert first.min == 99.0
    assert first.max == 101.0
    assert first.step == 0.5
    assert first.section_count == 4
    assert first.tick_labels == ("101.00", "100.50", "100.00", "99.50", "99.00")


def test_build_axis_flat_series_large_value():
    """Test flat pad is 1% of the value when that exceeds 1"""
    axis = build_axis([1300.0, 1300.0], 2)

    assert axis.min == 1287.0
    assert axis.max == 1313.0
    assert axis.step == 13.0


def test_build_axis_exchange_rates():
    """Test range padding and thousands separators"""
    axis = build_axis([1290.0, 1310.0, 1350.0], 5)

    assert axis.min == 1284.0
    assert axis.max == 1356.0
    assert axis.step == 14.4
    assert axis.tick_labels == (
        "1,356.00",
        "1,341.60",
        "1,327.20",
        "1,312.80",
        "1,298.40",
        "1,284.00",
    )


def test_build_axis_minimum_pad_of_one():
    """Test narrow ranges still get one unit of padding"""
    axis = build_axis([3.25, 3.5], 5)

    assert axis.min == 2.25
    assert axis.max == 4.5


def test_build_axis_floors_at_zero():
    """Test the minimum never goes below zero"""
    axis = build_axis([0.5, 1.0], 5)

    assert axis.min == 0.0
    assert axis.max == 2.0
    assert axis.tick_labels[-1] == "0.00"


@pytest.mark.parametrize("requested,expected", [(0, 2), (1, 2), (2, 2), (5, 5), (6, 6), (10, 6)])
def test_build_axis_clamps_sections(requested, expected):
    """Test section count is clamped to [2, 6]"""
    axis = build_axis([1.0, 5.0], requested)

    assert axis.section_count == expected
    assert len(axis.tick_labels) == expected + 1


@pytest.mark.parametrize(
    "values",
    [
        [0.0],
        [0.0, 0.0, 0.0],
        [3.5, 3.25, 3.0, 2.75],
        [1320.5, 1377.2, 1401.9],
        [102.31, 113.9, 98.0, 120.44],
        [0.01, 9999.99],
    ],
)
def test_build_axis_contains_all_values(values):
    """Test min <= every value <= max and min >= 0"""
    axis = build_axis(values, 5)

    assert axis.min <= min(values)
    assert axis.max >= max(values)
    assert axis.min >= 0


def test_tick_values_match_labels():
    """Test numeric ticks line up with the labels"""
    axis = build_axis([1290.0, 1310.0, 1350.0], 5)

    assert [format_tick(v) for v in tick_values(axis)] == list(axis.tick_labels)


def test_format_tick_no_negative_zero():
    """Test tiny negatives do not render as -0.00"""
    assert format_tick(-0.001) == "0.00"
    assert format_tick(1234567.891, "%") == "1,234,567.89%"
