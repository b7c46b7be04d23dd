from datetime import date, timedelta

import pytest

from workshop_trends.parsing import (
    parse_advisor_block,
    NoDataError,
    NoLabelsFoundError,
    MissingDateRowError,
    NoValidDatesError,
    NoCompletedWorkshopsError,
    MissingAdvisorCodeError,
)
from workshop_trends.parsing.block_parser import find_data_start, find_label_column
from tests.conftest import days_ago, to_block


def iso_days_ago(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


def test_header_line_block(greenbelt_block):
    parsed = parse_advisor_block(greenbelt_block)

    assert parsed.code == "AVL"
    assert parsed.location == "Greenbelt, MD"
    assert parsed.key == "AVL|Greenbelt, MD"
    assert [ws.workshop_date for ws in parsed.workshops] == [iso_days_ago(60), iso_days_ago(10)]
    assert [ws.feds_close for ws in parsed.workshops] == [30, 30]
    assert [ws.feds_attended for ws in parsed.workshops] == [20, 27]
    # Fields without a row default to 0
    assert all(ws.sps_close == 0 and ws.walkins == 0 for ws in parsed.workshops)


def test_full_block_skips_future_and_aggregate_columns(full_block):
    parsed = parse_advisor_block(full_block)

    assert parsed.code == "CFG"
    assert parsed.location == "Richmond, VA"
    assert len(parsed.workshops) == 2
    first = parsed.workshops[0]
    assert first.workshop_date == iso_days_ago(45)
    assert (first.feds_close, first.sps_close) == (30, 4)
    assert (first.fed_confirmed, first.sps_confirmed) == (18, 2)
    assert (first.feds_attended, first.sps_attended) == (20, 3)
    assert first.walkins == 2
    assert first.total_yes == 25


def test_lowercase_code_is_uppercased():
    block = to_block([
        ["avl"],
        ["Date", days_ago(20)],
        ["Feds @ Close", "30"],
        ["Feds Attended", "22"],
    ])
    parsed = parse_advisor_block(block)
    assert parsed.code == "AVL"
    assert parsed.location == ""


def test_code_and_location_beside_labels_without_header():
    block = to_block([
        ["AVL", "Greenbelt, MD", "Date", days_ago(30), days_ago(5)],
        ["", "", "Feds at Close", "25", "31"],
        ["", "", "Feds Attended", "18", "24"],
    ])
    parsed = parse_advisor_block(block)

    assert parsed.code == "AVL"
    assert parsed.location == "Greenbelt, MD"
    assert [ws.feds_close for ws in parsed.workshops] == [25, 31]


def test_labels_in_second_column_with_header():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["", "Date", days_ago(30)],
        ["", "Feds @ Close", "25"],
        ["", "Feds Attended", "18"],
    ])
    lines = block.splitlines()
    assert find_data_start(lines) == 1
    assert find_label_column(lines, 1) == 1

    parsed = parse_advisor_block(block)
    assert parsed.code == "AVL"
    assert parsed.workshops[0].feds_attended == 18


def test_labels_below_header_scan_window_use_first_cell_as_code():
    block = to_block([
        ["AVL"],
        ["note one"],
        ["note two"],
        ["note three"],
        ["note four"],
        ["note five"],
        ["Date", days_ago(30)],
        ["Feds @ Close", "25"],
        ["Feds Attended", "18"],
    ])
    lines = block.splitlines()
    assert find_data_start(lines) == 0

    parsed = parse_advisor_block(block)
    assert parsed.code == "AVL"
    assert len(parsed.workshops) == 1


def test_windows_line_endings(greenbelt_block):
    parsed = parse_advisor_block(greenbelt_block.replace("\n", "\r\n"))
    assert parsed.location == "Greenbelt, MD"
    assert len(parsed.workshops) == 2


def test_later_row_with_same_label_wins():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", days_ago(30)],
        ["Feds @ Close", "25"],
        ["Feds Attended", "18"],
        ["Feds at Close", "40"],
    ])
    parsed = parse_advisor_block(block)
    assert parsed.workshops[0].feds_close == 40


def test_only_completed_workshops_are_kept():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", days_ago(40), days_ago(30), days_ago(20), days_ago(-10)],
        ["Feds @ Close", "30", "0", "28", "12"],
        ["Feds Attended", "20", "15", "0", ""],
    ])
    parsed = parse_advisor_block(block)

    assert [ws.workshop_date for ws in parsed.workshops] == [iso_days_ago(40)]
    assert all(ws.feds_close > 0 and ws.feds_attended > 0 for ws in parsed.workshops)


def test_short_value_rows_default_to_zero():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", days_ago(30), days_ago(20)],
        ["Feds @ Close", "30", "28"],
        ["Feds Attended", "20", "21"],
        ["Total Walk-ins", "3"],
    ])
    parsed = parse_advisor_block(block)
    assert [ws.walkins for ws in parsed.workshops] == [3, 0]


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n  \n"])
def test_no_data(text):
    with pytest.raises(NoDataError) as exc:
        parse_advisor_block(text)
    assert exc.value.kind == "NoData"


def test_no_labels():
    with pytest.raises(NoLabelsFoundError):
        parse_advisor_block("AVL\tGreenbelt, MD\n1\t2\t3")


def test_missing_date_row():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Feds @ Close", "30"],
        ["Feds Attended", "20"],
    ])
    with pytest.raises(MissingDateRowError):
        parse_advisor_block(block)


def test_no_valid_dates():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", "150", "45%", "Avg"],
        ["Feds @ Close", "30", "28", "29"],
        ["Feds Attended", "20", "21", "20.5"],
    ])
    with pytest.raises(NoValidDatesError):
        parse_advisor_block(block)


def test_no_completed_workshops():
    block = to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", days_ago(-7), days_ago(-14)],
        ["Feds @ Close", "12", "4"],
        ["Feds Attended", "", ""],
    ])
    with pytest.raises(NoCompletedWorkshopsError):
        parse_advisor_block(block)


def test_missing_advisor_code():
    block = to_block([
        ["Date", days_ago(30)],
        ["Feds @ Close", "30"],
        ["Feds Attended", "20"],
    ])
    with pytest.raises(MissingAdvisorCodeError) as exc:
        parse_advisor_block(block)
    assert exc.value.to_dict()["kind"] == "MissingAdvisorCode"


def test_date_errors_take_precedence_over_missing_code():
    block = to_block([
        ["Date", "Avg"],
        ["Feds @ Close", "30"],
        ["Feds Attended", "20"],
    ])
    with pytest.raises(NoValidDatesError):
        parse_advisor_block(block)


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError, match="No data found"):
        parse_advisor_block("")
