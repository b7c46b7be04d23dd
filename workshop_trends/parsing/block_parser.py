"""
Parser for advisor stats blocks pasted from a spreadsheet.

A block is tab-separated text copied straight out of the sheet. Row labels
(Date, Feds @ Close, ...) run down one of the first columns and each
workshop is a column to their right. An optional header line above the
labels names the advisor code and location. Layout detection is heuristic
and failures are reported in a fixed order so the most useful message wins:

1. NoData
2. NoLabelsFound
3. MissingDateRow
4. NoValidDates
5. NoCompletedWorkshops
6. MissingAdvisorCode
"""

import logging
from typing import List, Dict, Optional, Tuple
from dataclasses import dataclass

from ..records.models import WorkshopRecord, advisor_key
from .labels import match_label, FIELDS, WORKSHOP_DATE
from .values import parse_date, parse_num
from .errors import (
    NoDataError,
    NoLabelsFoundError,
    MissingDateRowError,
    NoValidDatesError,
    NoCompletedWorkshopsError,
    MissingAdvisorCodeError
)

logger = logging.getLogger(__name__)

HEADER_SCAN_LINES = 5
LABEL_SCAN_COLUMNS = 3


@dataclass
class ParsedBlock:
    """Advisor identity and completed workshops extracted from one paste."""
    code: str
    location: str
    workshops: List[WorkshopRecord]

    @property
    def key(self) -> str:
        return advisor_key(self.code, self.location)


def _cells(line: str) -> List[str]:
    return line.split('\t')


def find_data_start(lines: List[str]) -> int:
    """Index of the first line (within the first few) holding a row label."""
    for i, line in enumerate(lines[:HEADER_SCAN_LINES]):
        if any(match_label(c) for c in _cells(line)):
            return i
    return 0


def find_label_column(lines: List[str], data_start: int) -> int:
    """Column index holding the row labels, or -1 when none is found."""
    for line in lines[data_start:]:
        for c, cell in enumerate(_cells(line)[:LABEL_SCAN_COLUMNS]):
            if match_label(cell):
                return c
    return -1


def _identity_from_header(lines: List[str], data_start: int) -> Optional[Tuple[str, str]]:
    """Code and location from the header line above the labels."""
    if data_start == 0:
        return None
    non_empty = [c.strip() for c in _cells(lines[0]) if c.strip()]
    if not non_empty:
        return None
    location = non_empty[1] if len(non_empty) > 1 else ''
    return non_empty[0].upper(), location


def _identity_from_label_row(lines: List[str], data_start: int) -> Optional[Tuple[str, str]]:
    """Code and location from the leading cells of a label row with no header."""
    if data_start != 0:
        return None
    cols = _cells(lines[0])
    col0 = cols[0].strip()
    if not col0 or match_label(col0):
        return None
    location = ''
    if len(cols) > 1 and cols[1].strip() and not match_label(cols[1]):
        location = cols[1].strip()
    return col0.upper(), location


IDENTITY_STRATEGIES = [_identity_from_header, _identity_from_label_row]


def detect_identity(lines: List[str], data_start: int) -> Tuple[str, str]:
    """Try each identity strategy in order; ('', '') when none applies."""
    for strategy in IDENTITY_STRATEGIES:
        found = strategy(lines, data_start)
        if found:
            return found
    return '', ''


def _fallback_code(lines: List[str], label_col: int) -> str:
    """Last resort: column A of the first line when labels sit further right."""
    if label_col <= 0:
        return ''
    first = _cells(lines[0])[0].strip()
    if first and not match_label(first):
        return first.upper()
    return ''


def extract_fields(lines: List[str], data_start: int, label_col: int) -> Dict[str, List[str]]:
    """Map each labelled field to the cells to the right of its label."""
    field_data = {}
    for line in lines[data_start:]:
        cols = _cells(line)
        if label_col >= len(cols):
            continue
        field = match_label(cols[label_col])
        if field:
            field_data[field] = cols[label_col + 1:]
    return field_data


def _value(series: Optional[List[str]], index: int):
    if series is None or index >= len(series):
        return 0
    return parse_num(series[index])


def build_workshops(field_data: Dict[str, List[str]]) -> List[WorkshopRecord]:
    """Build one record per date column and keep only completed workshops."""
    dates = field_data[WORKSHOP_DATE]
    workshop_cols = [i for i, cell in enumerate(dates) if parse_date(cell)]
    if not workshop_cols:
        raise NoValidDatesError()

    workshops = []
    for ci in workshop_cols:
        values = {
            field: _value(field_data.get(field), ci)
            for field in FIELDS if field != WORKSHOP_DATE
        }
        ws = WorkshopRecord(workshop_date=parse_date(dates[ci]), **values)
        if ws.is_completed:
            workshops.append(ws)
        else:
            logger.debug(f"Skipping incomplete workshop column {ci} ({ws.workshop_date})")
    return workshops


def parse_advisor_block(text: str) -> ParsedBlock:
    """
    Parse pasted spreadsheet text into an advisor identity and its workshops.

    Args:
        text: Raw tab-separated text copied from the sheet

    Returns:
        ParsedBlock with code, location and completed workshops

    Raises:
        BlockParseError: One of the subclasses in errors.py, in the order
            listed in the module docstring
    """
    lines = [line for line in (text or '').strip().splitlines() if line.strip()]
    if not lines:
        raise NoDataError()

    data_start = find_data_start(lines)
    code, location = detect_identity(lines, data_start)

    label_col = find_label_column(lines, data_start)
    if label_col < 0:
        logger.warning("No row labels found in pasted block")
        raise NoLabelsFoundError()

    if not code:
        code = _fallback_code(lines, label_col)

    logger.debug(f"Block layout: data starts at line {data_start}, labels in column {label_col}")

    field_data = extract_fields(lines, data_start, label_col)
    if WORKSHOP_DATE not in field_data:
        logger.warning("Pasted block has labels but no Date row")
        raise MissingDateRowError()

    workshops = build_workshops(field_data)
    if not workshops:
        raise NoCompletedWorkshopsError()

    if not code:
        raise MissingAdvisorCodeError()

    logger.info(f"Parsed {len(workshops)} completed workshop(s) for {code} ({location})")
    return ParsedBlock(code=code, location=location, workshops=workshops)
