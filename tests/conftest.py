from datetime import date, timedelta

import pytest

from workshop_trends.records import AdvisorManager, WorkshopRecord


def days_ago(days: int, today: date = None) -> str:
    """M/D/YYYY as the sheet displays it."""
    d = (today or date.today()) - timedelta(days=days)
    return f"{d.month}/{d.day}/{d.year}"


def to_block(rows) -> str:
    return "\n".join("\t".join(row) for row in rows)


@pytest.fixture
def greenbelt_block() -> str:
    """Header line, three label rows, two completed workshops."""
    return to_block([
        ["AVL", "Greenbelt, MD"],
        ["Date", days_ago(60), days_ago(10)],
        ["Feds @ Close", "30", "30"],
        ["Feds Attended", "20", "27"],
    ])


@pytest.fixture
def full_block() -> str:
    """Every label, plus a future column and aggregate columns to skip."""
    return to_block([
        ["CFG", "Richmond, VA", "", ""],
        ["Date", days_ago(45), days_ago(17), days_ago(-7), "Avg", "Show %"],
        ["Total Feds @ Close", "30", "28", "14", "29", "75%"],
        ["Total Sps @ Close", "4", "2", "", "3", ""],
        ["Total Fed Confirmed", "18", "20", "", "19", ""],
        ["Total Sps Confirmed", "2", "1", "", "1.5", ""],
        ["Total Feds Attended", "20", "21", "", "20.5", ""],
        ["Total Sps Attended", "3", "1", "", "2", ""],
        ["Total Walk-ins", "2", "1", "", "1.5", ""],
        ["Total Yes Reported", "25", "24", "", "24.5", ""],
    ])


@pytest.fixture
def manager() -> AdvisorManager:
    return AdvisorManager()


@pytest.fixture
def make_workshop():
    def _make(workshop_date, **counts):
        return WorkshopRecord(workshop_date=workshop_date, **counts)
    return _make
