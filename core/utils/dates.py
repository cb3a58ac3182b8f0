from datetime import date, datetime

from django.utils.dateparse import parse_date, parse_datetime


def parse_api_date(value):
    """
    Coerce a date coming from the donor API (or a form) into a ``date``.

    Accepts ``date`` / ``datetime`` objects and ISO strings with or without a
    time part, e.g. "2000-06-15" or "2000-06-15T00:00:00.000Z".
    Returns None for blanks and anything unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    try:
        dt = parse_datetime(raw)
        if dt is not None:
            return dt.date()
        return parse_date(raw)
    except ValueError:
        # well formed but impossible, e.g. 2001-02-30
        return None
