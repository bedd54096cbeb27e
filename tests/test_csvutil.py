import pytest

from movez.csvutil import csv_to_ints, ints_to_csv


def test_empty_string_gives_empty_list():
    assert csv_to_ints("") == []


def test_empty_list_gives_empty_string():
    assert ints_to_csv([]) == ""


def test_single_value_has_no_separator():
    assert ints_to_csv([28]) == "28"


def test_whitespace_is_trimmed():
    assert csv_to_ints(" 12 , 7,  3 ") == [12, 7, 3]


def test_invalid_parts_are_skipped():
    assert csv_to_ints("1,abc,,2.5,4") == [1, 4]


def test_signs_are_accepted():
    assert csv_to_ints("-3,+9") == [-3, 9]


@pytest.mark.parametrize("values", [[1], [28, 12, 16], [0, -5, 10770], list(range(20))])
def test_round_trip(values):
    assert csv_to_ints(ints_to_csv(values)) == values


def test_separator_count():
    values = [35, 80, 99, 18]
    assert ints_to_csv(values).count(",") == len(values) - 1