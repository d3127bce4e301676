from flask import Blueprint, jsonify

from models.clock import FixedClock, get_clock
from models.conference import get_conference_state, get_year_config
from models.important_dates import DateKind, annotate_dates

from ..common import CacheCategory, cache_control

base = Blueprint("base", __name__, cli_group=None)


@base.route("/app/important-dates")
@cache_control(CacheCategory.default)
def important_dates():
    """Data for the landing page hero: the conference date and where we are
    relative to each important date.
    """
    # Sample the clock once, so every date is judged against the same instant
    clock = FixedClock.sample(get_clock())
    now = clock.now()
    result = get_year_config(None, get_conference_state(), clock)

    return jsonify(
        result.to_dict()
        | {
            "currentDate": now.isoformat(),
            "importantDates": annotate_dates(result.year_config.dates_of_kind(DateKind.milestone), now),
            "workshops": annotate_dates(result.year_config.dates_of_kind(DateKind.workshop), now),
        }
    )


from . import content  # noqa
