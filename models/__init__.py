from datetime import date, datetime

import pendulum
from dateutil.parser import parse
from pendulum import DateTime


def parse_when(value: str | date | datetime, tz: str, end_of_day: bool = False) -> DateTime:
    """Turn a configured date or datetime into an aware pendulum DateTime.

    Naive values are taken to be in the conference timezone ``tz``. Date-only
    values cover the whole day, so ``end_of_day`` selects the last instant of
    that day rather than midnight.
    """
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            value = parse(value)

    if not isinstance(value, datetime):
        day = pendulum.datetime(value.year, value.month, value.day, tz=tz)
        return day.end_of("day") if end_of_day else day

    return pendulum.instance(value, tz=tz)


def is_date_only(value: str | date | datetime) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


from .clock import *  # noqa: E402, F403
from .important_dates import *  # noqa: E402, F403
from .conference import *  # noqa: E402, F403
