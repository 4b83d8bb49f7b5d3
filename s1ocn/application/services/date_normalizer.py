"""Date normalization for catalogue queries."""

import re
from collections.abc import Callable
from datetime import date, datetime, timezone

import dateutil.parser
import pandas as pd

from s1ocn.domain.types import DateInput

QUERY_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"

_NUMBER = re.compile(r"\d+")
_FRACTIONAL_SECONDS = re.compile(r"(\d{1,2}:\d{1,2}:\d{1,2})[.,]\d+")


def _iso_parser(raw: str) -> datetime | None:
    """ISO 8601, extended or basic, with optional offset."""
    try:
        return dateutil.parser.isoparse(raw)
    except (ValueError, OverflowError):
        return None


def _components_parser(count: int) -> Callable[[str], datetime | None]:
    """Parser accepting exactly `count` numeric components (year first)."""

    def parse(raw: str) -> datetime | None:
        parts = _NUMBER.findall(_FRACTIONAL_SECONDS.sub(r"\1", raw))
        if len(parts) != count:
            return None
        values = [int(part) for part in parts] + [0] * (6 - count)
        try:
            return datetime(*values, tzinfo=timezone.utc)
        except ValueError:
            return None

    return parse


def _free_form_parser(raw: str) -> datetime | None:
    """Any other date dateutil understands, e.g. `3 Sep 2024 14:00 +0200`."""
    try:
        return dateutil.parser.parse(raw)
    except (ValueError, OverflowError):
        return None


# Most specific format first
DATE_PARSERS: tuple[Callable[[str], datetime | None], ...] = (
    _iso_parser,
    _components_parser(6),  # year month day hour minute second
    _components_parser(5),  # year month day hour minute
    _components_parser(4),  # year month day hour
    _components_parser(3),  # year month day
    _free_form_parser,
)


def format_query_date(value: datetime) -> str:
    """Format an instant the way the catalogue expects it."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(QUERY_DATE_FORMAT)


def normalize_date(raw: DateInput, default: datetime | None = None) -> str:
    """Normalize a loosely formatted timestamp to `YYYY-MM-DDTHH:MM:SS.000Z`.

    Timestamps with an offset are converted to UTC, naive ones are taken as
    UTC. Absent or unparsable input yields `default`, which itself defaults
    to the current UTC time.
    """
    if default is None:
        default = datetime.now(timezone.utc)

    if raw is None or pd.api.types.is_scalar(raw) and pd.isna(raw):
        return format_query_date(default)
    if isinstance(raw, datetime):
        return format_query_date(raw)
    if isinstance(raw, date):
        return format_query_date(datetime(raw.year, raw.month, raw.day))

    text = str(raw).strip()
    for parser in DATE_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return format_query_date(parsed)

    return format_query_date(default)
