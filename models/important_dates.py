from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pendulum import DateTime

from . import is_date_only, parse_when

__all__ = [
    "DateKind",
    "DateStatus",
    "ImportantDate",
    "annotate_dates",
    "date_status",
]


class DateKind(StrEnum):
    milestone = "milestone"
    workshop = "workshop"


class DateStatus(StrEnum):
    upcoming = "upcoming"
    active = "active"
    past = "past"


@dataclass(frozen=True)
class ImportantDate:
    """A dated milestone on the landing page, e.g. "Call for presentations open".

    Instantaneous milestones have ``start == end``.
    """

    event: str
    start: DateTime
    end: DateTime
    kind: DateKind = DateKind.milestone
    link: str | None = None

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Important date {self.event!r} ends before it starts")

    @classmethod
    def from_config(cls, data: Mapping[str, Any], tz: str) -> "ImportantDate":
        start = parse_when(data["date"], tz)
        if data.get("end_date") is not None:
            end = parse_when(data["end_date"], tz, end_of_day=True)
        elif is_date_only(data["date"]):
            end = parse_when(data["date"], tz, end_of_day=True)
        else:
            end = start

        return cls(
            event=data["event"],
            start=start,
            end=end,
            kind=DateKind(data.get("kind", DateKind.milestone)),
            link=data.get("link"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "date": self.start.isoformat(),
            "endDate": self.end.isoformat(),
            "kind": str(self.kind),
            "link": self.link,
        }


def date_status(important_date: ImportantDate, now: DateTime) -> DateStatus:
    # Both boundaries count as active
    if important_date.end < now:
        return DateStatus.past
    if important_date.start <= now:
        return DateStatus.active
    return DateStatus.upcoming


def annotate_dates(dates: Iterable[ImportantDate], now: DateTime) -> list[dict[str, Any]]:
    """Serialise dates with their status, all evaluated against the same ``now``."""
    return [dict(d.to_dict(), status=str(date_status(d, now))) for d in dates]
