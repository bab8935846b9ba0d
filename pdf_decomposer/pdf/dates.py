"""Parsing of PDF date strings (ISO 32000-1, 7.9.4)."""

import re
from datetime import datetime, timedelta, timezone

_PDF_DATE = re.compile(
    r"^(?:D:)?"
    r"(?P<year>\d{4})(?P<month>\d{2})?(?P<day>\d{2})?"
    r"(?P<hour>\d{2})?(?P<minute>\d{2})?(?P<second>\d{2})?"
    r"(?:(?P<sign>[Zz+\-])(?:(?P<tz_hour>\d{2})'?(?:(?P<tz_minute>\d{2})'?)?)?)?"
)


def parse_pdf_date(value: str) -> int | None:
    """Convert a PDF date string such as ``D:20130101120000+09'00'`` to epoch seconds.

    Missing trailing components default to their minimum, a missing or ``Z``
    offset means UTC. Returns None for strings that are not PDF dates.
    """
    match = _PDF_DATE.match(value.strip())
    if match is None:
        return None
    parts = match.groupdict()
    try:
        moment = datetime(
            int(parts["year"]),
            int(parts["month"] or 1),
            int(parts["day"] or 1),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
            int(parts["second"] or 0),
            tzinfo=_offset(parts["sign"], parts["tz_hour"], parts["tz_minute"]),
        )
    except ValueError:
        return None
    return int(moment.timestamp())


def _offset(sign: str | None, hours: str | None, minutes: str | None) -> timezone:
    if sign not in ("+", "-"):
        return timezone.utc
    delta = timedelta(hours=int(hours or 0), minutes=int(minutes or 0))
    return timezone(-delta if sign == "-" else delta)
