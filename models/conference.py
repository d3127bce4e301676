"""Per-year conference configuration.

The conference definition is loaded once when the app is created and never
changes afterwards. Reloading means building a new :class:`ConferenceState`
and swapping it into ``app.extensions`` wholesale.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

from flask import current_app as app
from pendulum import DateTime
from werkzeug.exceptions import NotFound
from yaml import safe_load as parse_yaml

from . import parse_when
from .clock import Clock
from .important_dates import DateKind, ImportantDate

__all__ = [
    "ConfigNotFound",
    "ConferenceState",
    "ConferenceYearConfig",
    "NoSessions",
    "SessionSource",
    "SessionizeSessions",
    "YearConfigResult",
    "current_year",
    "get_conference_state",
    "get_year_config",
    "load_conference_state",
]

log = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Australia/Perth"


class ConfigNotFound(NotFound):
    """No usable configuration for the requested year."""


@dataclass(frozen=True)
class NoSessions:
    kind: Literal["none"] = "none"


@dataclass(frozen=True)
class SessionizeSessions:
    endpoint: str | None = None
    kind: Literal["sessionize"] = "sessionize"


type SessionSource = NoSessions | SessionizeSessions


@dataclass(frozen=True)
class ConferenceYearConfig:
    year: int
    sessions: SessionSource
    conference_date: DateTime | None = None
    important_dates: tuple[ImportantDate, ...] = ()

    def dates_of_kind(self, kind: DateKind) -> list[ImportantDate]:
        return [d for d in self.important_dates if d.kind == kind]


@dataclass(frozen=True)
class ConferenceState:
    timezone: str
    years: Mapping[int, ConferenceYearConfig]
    current_year: int | None = None


@dataclass(frozen=True)
class YearConfigResult:
    year_config: ConferenceYearConfig
    is_current_year: bool
    conference_in_past: bool

    def to_dict(self) -> dict[str, Any]:
        conference_date = self.year_config.conference_date
        return {
            "year": self.year_config.year,
            "conferenceDate": conference_date.isoformat() if conference_date else None,
            "isCurrentYear": self.is_current_year,
            "conferenceInPast": self.conference_in_past,
        }


def _parse_sessions(year: int, data: Mapping[str, Any] | None) -> SessionSource:
    if not data:
        return NoSessions()

    match data.get("kind", "none"):
        case "none":
            return NoSessions()
        case "sessionize":
            return SessionizeSessions(endpoint=data.get("endpoint") or None)
        case kind:
            raise ValueError(f"Unknown session source {kind!r} for {year}")


def _parse_year(year: int, data: Mapping[str, Any], tz: str) -> ConferenceYearConfig:
    conference_date = data.get("date")
    return ConferenceYearConfig(
        year=year,
        sessions=_parse_sessions(year, data.get("sessions")),
        conference_date=parse_when(conference_date, tz) if conference_date else None,
        important_dates=tuple(ImportantDate.from_config(d, tz) for d in data.get("important_dates") or []),
    )


def load_conference_state(config: Mapping[str, Any], root_path: str | Path = ".") -> ConferenceState:
    """Build the conference state from app config.

    ``CONFERENCE_CONFIG`` is either a mapping or the path (relative to
    ``root_path``) of a YAML file holding one.
    """
    definition = config.get("CONFERENCE_CONFIG")
    if definition is None:
        raise RuntimeError("CONFERENCE_CONFIG must be set in the app config")

    if isinstance(definition, (str, Path)):
        with open(Path(root_path, definition)) as f:
            definition = parse_yaml(f)

    tz = definition.get("timezone") or config.get("CONFERENCE_TIMEZONE", DEFAULT_TIMEZONE)
    years = {int(year): _parse_year(int(year), data or {}, tz) for year, data in definition.get("years", {}).items()}

    current = definition.get("current_year")
    if current is not None and int(current) not in years:
        raise ValueError(f"current_year {current} has no configuration")

    log.info("Loaded conference config for years %s", sorted(years))
    return ConferenceState(
        timezone=tz,
        years=MappingProxyType(years),
        current_year=int(current) if current is not None else None,
    )


def get_conference_state() -> ConferenceState:
    return app.extensions["conference_state"]


def current_year(conference: ConferenceState, clock: Clock) -> int:
    """The year the site is about, unless the configuration pins one.

    This is the first year whose conference day hasn't finished yet, or the
    most recent year once they all have.
    """
    if conference.current_year is not None:
        return conference.current_year

    if not conference.years:
        raise ConfigNotFound("No conference years configured")

    today = clock.now().in_timezone(conference.timezone).date()
    for year, year_config in sorted(conference.years.items()):
        if year_config.conference_date is None or year_config.conference_date.date() >= today:
            return year

    return max(conference.years)


def get_year_config(year: int | None, conference: ConferenceState, clock: Clock) -> YearConfigResult:
    this_year = current_year(conference, clock)
    if year is None:
        year = this_year

    year_config = conference.years.get(year)
    if year_config is None:
        raise ConfigNotFound(f"No config for year {year}")

    conference_in_past = False
    if year_config.conference_date is not None:
        conference_in_past = year_config.conference_date.end_of("day") < clock.now()

    return YearConfigResult(
        year_config=year_config,
        is_current_year=year == this_year,
        conference_in_past=conference_in_past,
    )
