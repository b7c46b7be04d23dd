"""
Failure kinds raised while parsing a pasted advisor block.

Every failure is recoverable: the caller shows the message and nothing is
imported.
"""


class BlockParseError(ValueError):
    """Base class for pasted-block failures."""

    kind = 'ParseError'
    default_message = 'Could not parse the pasted data.'

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'message': self.message}


class NoDataError(BlockParseError):
    kind = 'NoData'
    default_message = 'No data found.'


class NoLabelsFoundError(BlockParseError):
    kind = 'NoLabelsFound'
    default_message = (
        "Could not find row labels (Date, Total Feds @ Close, etc.) in the pasted data. "
        "Make sure you're copying the full stats block."
    )


class MissingDateRowError(BlockParseError):
    kind = 'MissingDateRow'
    default_message = (
        'Could not find a "Date" row. '
        "Make sure you're copying from row 2 (Date) downward."
    )


class NoValidDatesError(BlockParseError):
    kind = 'NoValidDates'
    default_message = (
        'No valid workshop dates found. '
        'Make sure to include the date columns when copying.'
    )


class NoCompletedWorkshopsError(BlockParseError):
    kind = 'NoCompletedWorkshops'
    default_message = (
        'No completed workshops found '
        '(all rows had 0 attendance, they may be future workshops).'
    )


class MissingAdvisorCodeError(BlockParseError):
    kind = 'MissingAdvisorCode'
    default_message = (
        'Could not detect an advisor code. Make sure to include column A '
        '(with the code like AVL, CFG, etc.) when copying.'
    )
