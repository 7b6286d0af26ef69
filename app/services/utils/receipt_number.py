"""
Receipt number helpers.

Format: CMP-YYYYMMDD-NNNN
  - CMP: complaint prefix
  - YYYYMMDD: issue date
  - NNNN: daily sequence, 1-based, zero padded to at least 4 digits
"""
import re
from datetime import date, datetime
from typing import Tuple

from app.core.exceptions import FormatError

RECEIPT_PREFIX = "CMP"
SEQUENCE_WIDTH = 4

_RECEIPT_RE = re.compile(r"^CMP-(\d{8})-(\d{4,})$")


def normalize_issue_date(value) -> date:
    """Return the calendar date of value; time-of-day is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise FormatError(
        f"Issue date must be a date, got {type(value).__name__}",
        {"issue_date": repr(value)},
    )


def receipt_date_key(value) -> str:
    issue_date = normalize_issue_date(value)
    return f"{issue_date.year:04d}{issue_date.month:02d}{issue_date.day:02d}"


def format_receipt_number(issue_date, sequence: int) -> str:
    """Build the receipt number for a date and daily sequence.

    Sequences of 10000 and above keep all their digits.
    """
    # bool is an int subclass
    if isinstance(sequence, bool) or not isinstance(sequence, int) or sequence < 1:
        raise FormatError(
            f"Sequence must be a positive integer, got {sequence!r}",
            {"sequence": repr(sequence)},
        )
    return f"{RECEIPT_PREFIX}-{receipt_date_key(issue_date)}-{sequence:0{SEQUENCE_WIDTH}d}"


def parse_receipt_number(value: str) -> Tuple[date, int]:
    """Split a receipt number back into (issue_date, sequence)."""
    match = _RECEIPT_RE.match(value or "")
    if not match:
        raise FormatError(f"Malformed receipt number: {value!r}", {"receipt_number": value})

    date_part, sequence_part = match.groups()
    try:
        issue_date = datetime.strptime(date_part, "%Y%m%d").date()
    except ValueError:
        raise FormatError(f"Malformed receipt number date: {value!r}", {"receipt_number": value})

    sequence = int(sequence_part)
    if sequence < 1:
        raise FormatError(f"Receipt sequence must be positive: {value!r}", {"receipt_number": value})
    return issue_date, sequence
