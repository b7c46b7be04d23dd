"""
Parsing module for pasted spreadsheet stats blocks.
"""

from .block_parser import parse_advisor_block, ParsedBlock
from .labels import match_label, LABEL_RULES
from .values import parse_date, parse_num
from .errors import (
    BlockParseError,
    NoDataError,
    NoLabelsFoundError,
    MissingDateRowError,
    NoValidDatesError,
    NoCompletedWorkshopsError,
    MissingAdvisorCodeError
)

__all__ = [
    "parse_advisor_block",
    "ParsedBlock",
    "match_label",
    "LABEL_RULES",
    "parse_date",
    "parse_num",
    "BlockParseError",
    "NoDataError",
    "NoLabelsFoundError",
    "MissingDateRowError",
    "NoValidDatesError",
    "NoCompletedWorkshopsError",
    "MissingAdvisorCodeError"
]
