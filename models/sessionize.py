"""Sessionize API payloads.

Sessionize is the upstream source of the agenda for most years. Each year's
event has its own API endpoint, and the shape of the payload has drifted a
little from year to year, so everything we rely on is validated here, once, at
the point it enters the site.

Every model accepts unknown fields and passes them back out untouched when
serialised: Sessionize adds fields often and the frontend may want them. Fields
that are declared are required, and a payload missing one is rejected as a
whole.

Sessionize returns naive local timestamps. They're pinned to the conference
timezone, which is passed in as validation context.
"""

import logging
from datetime import datetime
from typing import Annotated, Any

import pendulum
import requests
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
)
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class FetchValidationError(Exception):
    """Sessionize data couldn't be fetched, or didn't look the way we expect."""

    def __init__(self, message: str, endpoint: str, payload: Any = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.payload = payload


def _in_conference_timezone(value: datetime, info: ValidationInfo) -> datetime:
    if value.tzinfo is not None:
        return value
    context = info.context or {}
    return value.replace(tzinfo=pendulum.timezone(context.get("timezone", "UTC")))


ConfDateTime = Annotated[datetime, AfterValidator(_in_conference_timezone)]


class SessionizeModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CategoryItem(SessionizeModel):
    id: int
    name: str


class Category(SessionizeModel):
    id: int
    name: str
    category_items: list[CategoryItem]


class SessionSpeaker(SessionizeModel):
    id: str
    name: str


class Session(SessionizeModel):
    id: str
    title: str
    description: str | None
    starts_at: ConfDateTime
    ends_at: ConfDateTime
    is_service_session: bool
    is_plenum_session: bool
    speakers: list[SessionSpeaker]
    categories: list[Category]
    room: str


class RoomSlot(SessionizeModel):
    id: int
    name: str
    index: int
    session: Session


class TimeSlot(SessionizeModel):
    slot_start: str
    rooms: list[RoomSlot]


class GridRoom(SessionizeModel):
    id: int
    name: str
    sessions: list[Session]


class GridDay(SessionizeModel):
    date: ConfDateTime
    is_default: bool
    rooms: list[GridRoom]
    time_slots: list[TimeSlot]


class SpeakerLink(SessionizeModel):
    title: str
    url: str
    link_type: str


class SpeakerSession(SessionizeModel):
    id: int
    name: str


class Speaker(SessionizeModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    bio: str | None
    tag_line: str | None
    profile_picture: str | None
    is_top_speaker: bool
    sessions: list[SpeakerSession]
    links: list[SpeakerLink]
    categories: list[Category]


grid_schema = TypeAdapter(list[GridDay])
speakers_schema = TypeAdapter(list[Speaker])


def dump(schema: TypeAdapter, value: Any) -> Any:
    """Serialise validated data back into Sessionize's JSON shape."""
    return schema.dump_python(value, mode="json", by_alias=True)


def _fetch_json(url: str, timeout: float) -> Any:
    log.debug("Fetching %s", url)
    try:
        response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchValidationError(f"Error fetching {url}: {e}", endpoint=url) from e

    try:
        return response.json()
    except ValueError as e:
        raise FetchValidationError(f"Invalid JSON from {url}", endpoint=url, payload=response.text) from e


def _validate(schema: TypeAdapter, payload: Any, url: str, conf_timezone: str):
    try:
        return schema.validate_python(payload, context={"timezone": conf_timezone})
    except ValidationError as e:
        log.warning("Sessionize payload from %s failed validation: %s", url, e)
        raise FetchValidationError(
            f"Unexpected data from {url}: {e.error_count()} validation errors",
            endpoint=url,
            payload=payload,
        ) from e


def _view_url(sessionize_endpoint: str, view: str) -> str:
    return f"{sessionize_endpoint.rstrip('/')}/view/{view}"


def get_schedule_grid(
    sessionize_endpoint: str, conf_timezone: str, timeout: float = DEFAULT_TIMEOUT
) -> list[GridDay]:
    url = _view_url(sessionize_endpoint, "GridSmart")
    return _validate(grid_schema, _fetch_json(url, timeout), url, conf_timezone)


def get_conf_speakers(
    sessionize_endpoint: str, conf_timezone: str, timeout: float = DEFAULT_TIMEOUT
) -> list[Speaker]:
    url = _view_url(sessionize_endpoint, "Speakers")
    return _validate(speakers_schema, _fetch_json(url, timeout), url, conf_timezone)
