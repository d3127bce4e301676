import os.path

import pendulum
import pytest
import yaml

from models.clock import FixedClock
from models.conference import (
    ConfigNotFound,
    NoSessions,
    SessionizeSessions,
    current_year,
    get_year_config,
    load_conference_state,
)
from tests._utils import TEST_CONFERENCE, TIMEZONE

ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")


@pytest.fixture(scope="module")
def conference():
    return load_conference_state({"CONFERENCE_CONFIG": TEST_CONFERENCE})


def at(*args):
    return FixedClock(pendulum.datetime(*args, tz=TIMEZONE))


def test_session_sources(conference):
    assert conference.years[2022].sessions == NoSessions()
    assert conference.years[2023].sessions == SessionizeSessions(endpoint=None)
    assert conference.years[2024].sessions.kind == "sessionize"
    assert conference.years[2024].sessions.endpoint.startswith("https://")


@pytest.mark.parametrize(
    "sessions, expected",
    [
        (None, NoSessions()),
        ({}, NoSessions()),
        ({"kind": "none"}, NoSessions()),
        ({"kind": "sessionize", "endpoint": ""}, SessionizeSessions(endpoint=None)),
        ({"kind": "sessionize", "endpoint": "https://x.test"}, SessionizeSessions(endpoint="https://x.test")),
    ],
)
def test_parse_sessions(sessions, expected):
    state = load_conference_state({"CONFERENCE_CONFIG": {"years": {2030: {"sessions": sessions}}}})
    assert state.years[2030].sessions == expected


def test_unknown_session_source():
    with pytest.raises(ValueError):
        load_conference_state({"CONFERENCE_CONFIG": {"years": {2030: {"sessions": {"kind": "pretalx"}}}}})


def test_missing_config():
    with pytest.raises(RuntimeError):
        load_conference_state({})


def test_timezone_fallback():
    state = load_conference_state(
        {"CONFERENCE_CONFIG": {"years": {}}, "CONFERENCE_TIMEZONE": "Europe/London"}
    )
    assert state.timezone == "Europe/London"


def test_state_is_immutable(conference):
    with pytest.raises(TypeError):
        conference.years[2030] = conference.years[2024]
    with pytest.raises(AttributeError):
        conference.current_year = 2022


def test_pinned_year_must_exist():
    with pytest.raises(ValueError):
        load_conference_state({"CONFERENCE_CONFIG": {"current_year": 2031, "years": {2030: {}}}})


def test_load_from_yaml(tmp_path):
    with open(tmp_path / "conference.yaml", "w") as f:
        yaml.safe_dump({"timezone": "Europe/London", "years": {2030: {"date": "2030-06-01"}}}, f)

    state = load_conference_state({"CONFERENCE_CONFIG": "conference.yaml"}, tmp_path)

    assert state.timezone == "Europe/London"
    assert state.years[2030].conference_date == pendulum.datetime(2030, 6, 1, tz="Europe/London")


def test_shipped_config_loads():
    state = load_conference_state({"CONFERENCE_CONFIG": "config/conference.yaml"}, ROOT)
    assert state.years


@pytest.mark.parametrize(
    "clock, expected",
    [
        (at(2022, 1, 1), 2022),
        (at(2023, 10, 7, 23, 59), 2023),
        (at(2023, 10, 8), 2024),
        (at(2024, 10, 1, 9), 2024),
        (at(2024, 11, 16, 20), 2024),
        (at(2025, 3, 1), 2024),
    ],
)
def test_current_year_follows_clock(conference, clock, expected):
    assert current_year(conference, clock) == expected


def test_pinned_current_year():
    config = dict(TEST_CONFERENCE, current_year=2022)
    state = load_conference_state({"CONFERENCE_CONFIG": config})
    assert current_year(state, at(2024, 10, 1)) == 2022


def test_no_years():
    state = load_conference_state({"CONFERENCE_CONFIG": {"years": {}}})
    with pytest.raises(ConfigNotFound):
        get_year_config(None, state, at(2024, 10, 1))


def test_get_year_config_defaults_to_current_year(conference):
    result = get_year_config(None, conference, at(2024, 10, 1, 9))

    assert result.year_config.year == 2024
    assert result.is_current_year
    assert not result.conference_in_past


def test_get_year_config_previous_year(conference):
    result = get_year_config(2022, conference, at(2024, 10, 1, 9))

    assert result.year_config.year == 2022
    assert not result.is_current_year
    assert result.conference_in_past
    assert result.to_dict() == {
        "year": 2022,
        "conferenceDate": "2022-10-08T00:00:00+08:00",
        "isCurrentYear": False,
        "conferenceInPast": True,
    }


def test_unknown_year(conference):
    with pytest.raises(ConfigNotFound) as excinfo:
        get_year_config(1999, conference, at(2024, 10, 1))

    assert excinfo.value.code == 404
    assert excinfo.value.description == "No config for year 1999"


def test_empty_important_dates():
    state = load_conference_state(
        {"CONFERENCE_CONFIG": {"years": {2030: {"date": "2030-06-01", "important_dates": None}}}}
    )
    assert state.years[2030].important_dates == ()
