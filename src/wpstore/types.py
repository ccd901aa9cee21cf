"""
Value handling shared by rows, results and repositories.

This module provides:
- MISSING: the sentinel returned for columns a row does not carry
- to_text: render a stored value the way result accessors expose it
- to_datetime: accept datetimes or date strings from callers
- format_timestamp / gmt_timestamp: the storage layer's timestamp text
"""
import datetime
import logging
from typing import Any

import dateutil.parser

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


class _Missing:
    """Marker for a column that is not present on a row.

    Falsy, so ``if post.title():`` reads naturally, but never equal to ``''``
    or ``0``: callers test for it with ``is MISSING``.
    """

    _instance = None

    def __new__(cls) -> '_Missing':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'MISSING'

    def __reduce__(self) -> str:
        return 'MISSING'


MISSING = _Missing()


def to_text(value: Any) -> str:
    """Render a column value as trimmed text.

    Numbers are not converted beyond ``str``; datetimes use the storage
    layer's second-precision form.
    """
    if isinstance(value, datetime.datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, bytes):
        value = value.decode()
    return str(value).strip()


def to_datetime(value: datetime.datetime | datetime.date | str) -> datetime.datetime:
    """Coerce a caller-supplied timestamp into a datetime.
    """
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return dateutil.parser.parse(value)
    raise TypeError(f'Expected a datetime or date string, got {type(value).__name__}')


def format_timestamp(value: datetime.datetime | datetime.date | str) -> str:
    """Format a timestamp as ``YYYY-MM-DD HH:MM:SS``.

    Fractional seconds and any UTC offset are dropped, not rounded or
    applied: the wall-clock reading is taken as already being in the
    storage layer's reference time.
    """
    return to_datetime(value).strftime(TIMESTAMP_FORMAT)


def gmt_timestamp(value: datetime.datetime | datetime.date | str) -> str:
    """Derive the GMT column value for a local timestamp.

    The epoch value of the timestamp, with fractional seconds dropped as
    `format_timestamp` drops them, is formatted as UTC wall-clock text.
    Aware datetimes use their own offset; naive ones are read in the
    process's local timezone, as ``datetime.timestamp`` does.
    """
    epoch = to_datetime(value).replace(microsecond=0).timestamp()
    utc = datetime.datetime.fromtimestamp(epoch, tz=datetime.timezone.utc)
    return utc.strftime(TIMESTAMP_FORMAT)
