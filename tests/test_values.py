import pytest

from workshop_trends.parsing import parse_date, parse_num


@pytest.mark.parametrize("value, expected", [
    ("12/5/2024", "2024-12-05"),
    ("1-5-2024", "2024-01-05"),
    ("2024-3-7", "2024-03-07"),
    ("2024-03-07T10:30:00", "2024-03-07"),
    ("  4/20/2025 ", "2025-04-20"),
    ("Mar 5, 2024", "2024-03-05"),
])
def test_parse_date_accepts_sheet_formats(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", [
    "45%", "150", "12.5", "", None, "Avg", "Total", "today",
    "13/45/2024", "Jan 1, 1999",
])
def test_parse_date_rejects_non_dates(value):
    assert parse_date(value) == ''


@pytest.mark.parametrize("value, expected", [
    ("30", 30),
    ("45%", 45),
    ("1,234", 1234),
    ("12.5", 12.5),
    (" 7 ", 7),
    ("", 0),
    (None, 0),
    ("n/a", 0),
    ("-", 0),
    ("1.2.3", 0),
])
def test_parse_num(value, expected):
    assert parse_num(value) == expected


def test_parse_num_whole_values_are_ints():
    assert isinstance(parse_num("30.0"), int)
