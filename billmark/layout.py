import datetime
from types import MappingProxyType
from typing import Optional

import pandas as pd

# Tracker layout: one column per month, one row per recurring debit.
# Column 0 holds the debit labels; row 13 is left blank in the sheet.
MONTH_COLUMNS = MappingProxyType({
    "August": 1,
    "September": 2,
    "October": 3,
    "November": 4,
    "December": 5,
})

DEBIT_ROWS = MappingProxyType({
    "a": 2,
    "b": 3,
    "c": 4,
    "d": 5,
    "e": 6,
    "f": 7,
    "g": 8,
    "h": 9,
    "i": 10,
    "j": 11,
    "k": 12,
    "l": 14,
    "m": 15,
    "n": 16,
    "o": 17,
})

_MONTH_FORMATS = [
    "%B",        # August
    "%b",        # aug
    "%b%y",      # aug24
    "%b-%y",     # aug-24
    "%Y-%m",     # 2024-08
    "%m/%y",     # 08/24
    "%B %Y",     # August 2024
    "%b %Y",     # Aug 2024
]


def month_to_column(month_name: str) -> int:
    """Column index for a month name; 0 when the month has no tracker column."""
    return MONTH_COLUMNS.get(month_name.strip().capitalize(), 0)


def debit_to_row(code: str) -> int:
    """Row index for a debit code; 0 when the code is unknown."""
    return DEBIT_ROWS.get(code.strip().lower(), 0)


def is_tracked_month(month_name: str) -> bool:
    return month_name.strip().capitalize() in MONTH_COLUMNS


def is_known_debit(code: str) -> bool:
    return code.strip().lower() in DEBIT_ROWS


def current_month_name(now: Optional[datetime.datetime] = None) -> str:
    """Full name of the month at `now` (defaults to the wall clock)."""
    ts = pd.Timestamp(now) if now is not None else pd.Timestamp.now()
    return ts.month_name()


def parse_month(value: str) -> Optional[str]:
    """
    Parses user month input into a full month name.
    Supports: 'aug', 'August', 'aug24', 'aug-24', '2024-08', '08/24', 'Aug 2024'
    """
    value = value.strip()
    for fmt in _MONTH_FORMATS:
        try:
            dt = datetime.datetime.strptime(value, fmt)
        except ValueError:
            continue
        return pd.Period(dt, freq='M').strftime('%B')
    return None
