import pytest

from qbreakout.numformat import format_number


def test_grouping_of_large_number():
    assert format_number(1234567) == "1_234_567"


def test_negative_number():
    assert format_number(-1234) == "-1_234"


def test_small_numbers_have_no_separator():
    assert "_" not in format_number(999)
    assert "_" not in format_number(0)


@pytest.mark.parametrize("value", [0, 7, 999, 1000, 10_000, 25_000, 1_000_000, -50_000])
def test_round_trip(value):
    assert int(format_number(value)) == value


@pytest.mark.parametrize("value", [12, 1234, 123456789])
def test_groups_have_three_digits(value):
    groups = format_number(value).split("_")
    assert all(len(group) == 3 for group in groups[1:])
    assert 1 <= len(groups[0]) <= 3


def test_float_rejected():
    with pytest.raises(ValueError):
        format_number(1.5)