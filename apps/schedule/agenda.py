import logging
from typing import assert_never

from flask import current_app as app
from flask import jsonify

from loggingmanager import set_conference_year
from models.clock import FixedClock, get_clock
from models.conference import (
    ConfigNotFound,
    NoSessions,
    SessionizeSessions,
    get_conference_state,
    get_year_config,
)
from models.sessionize import (
    dump,
    get_conf_speakers,
    get_schedule_grid,
    grid_schema,
    speakers_schema,
)

from ..common import CacheCategory, cache_control
from . import schedule
from .data import normalize

log = logging.getLogger(__name__)


def _sessionize_endpoint(year: int | None) -> str | None:
    """The Sessionize endpoint for the year, or None if the year has no agenda."""
    conference = get_conference_state()
    result = get_year_config(year, conference, FixedClock.sample(get_clock()))
    set_conference_year(result.year_config.year)

    sessions = result.year_config.sessions
    match sessions:
        case NoSessions():
            return None
        case SessionizeSessions(endpoint=None | ""):
            log.warning("Year %s is sourced from Sessionize but has no endpoint", result.year_config.year)
            raise ConfigNotFound("No sessionize endpoint for year")
        case SessionizeSessions(endpoint=str(endpoint)):
            return endpoint
        case _:
            assert_never(sessions)


@schedule.route("/app/agenda/grid")
@schedule.route("/app/agenda/<int:year>/grid")
@cache_control(CacheCategory.schedule)
def agenda_grid(year=None):
    endpoint = _sessionize_endpoint(year)
    if endpoint is None:
        return jsonify([])

    grid = get_schedule_grid(
        sessionize_endpoint=endpoint,
        conf_timezone=get_conference_state().timezone,
        timeout=app.config["SESSIONIZE_TIMEOUT"],
    )
    return jsonify(dump(grid_schema, normalize(grid)))


@schedule.route("/app/agenda/speakers")
@schedule.route("/app/agenda/<int:year>/speakers")
@cache_control(CacheCategory.schedule)
def agenda_speakers(year=None):
    endpoint = _sessionize_endpoint(year)
    if endpoint is None:
        return jsonify([])

    speakers = get_conf_speakers(
        sessionize_endpoint=endpoint,
        conf_timezone=get_conference_state().timezone,
        timeout=app.config["SESSIONIZE_TIMEOUT"],
    )
    return jsonify(dump(speakers_schema, speakers))
