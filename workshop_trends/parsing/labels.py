"""
Row label rules for the pasted stats block.

Each rule maps a workshop field to the label variants spreadsheets use for
it. Rules are evaluated in order and the first match wins.
"""

import re
from typing import List, Optional, Tuple, Pattern

WORKSHOP_DATE = 'workshop_date'
FEDS_CLOSE = 'feds_close'
SPS_CLOSE = 'sps_close'
FED_CONFIRMED = 'fed_confirmed'
SPS_CONFIRMED = 'sps_confirmed'
FEDS_ATTENDED = 'feds_attended'
SPS_ATTENDED = 'sps_attended'
WALKINS = 'walkins'
TOTAL_YES = 'total_yes'


def _rule(field: str, *patterns: str) -> Tuple[str, List[Pattern]]:
    return field, [re.compile(p, re.IGNORECASE) for p in patterns]


LABEL_RULES = [
    _rule(WORKSHOP_DATE, r'^\s*date\s*$'),
    _rule(FEDS_CLOSE, r'feds?\s*@?\s*close', r'feds\s*at\s*close'),
    _rule(SPS_CLOSE, r'sps?\s*@?\s*close', r'spouse.*close'),
    _rule(FED_CONFIRMED, r'confirmed?\s*fed', r'fed.*confirmed'),
    _rule(SPS_CONFIRMED, r'confirmed?\s*sp', r'spouse.*confirmed', r'sps?\s*confirmed'),
    _rule(FEDS_ATTENDED, r'feds?\s*attended'),
    _rule(SPS_ATTENDED, r'sps?\s*attended', r'spouse.*attended'),
    _rule(WALKINS, r'walk\s*-?\s*in', r'true\s*walk'),
    _rule(TOTAL_YES, r'yes\s*report', r'total\s*yes', r'said\s*yes'),
]

FIELDS = [field for field, _ in LABEL_RULES]


def match_label(text) -> Optional[str]:
    """Return the field a cell labels, or None if it is not a known row label."""
    if not text:
        return None
    cell = str(text).strip()
    for field, patterns in LABEL_RULES:
        if any(p.search(cell) for p in patterns):
            return field
    return None
