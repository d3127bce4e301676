"""Clock providers.

Nothing in the request pipeline reads system time directly. Views sample the
app's clock once and pass the result (or a :class:`FixedClock` wrapping it)
down, so every value derived within one response agrees on "now".
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

import pendulum
from flask import current_app as app
from pendulum import DateTime

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_clock",
]


@runtime_checkable
class Clock(Protocol):
    def now(self) -> DateTime:
        """Return the current instant as an aware DateTime."""


class SystemClock:
    """Wall-clock time, in UTC."""

    def now(self) -> DateTime:
        return pendulum.instance(datetime.now(UTC))

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


@dataclass(frozen=True)
class FixedClock:
    """A clock stuck at one instant. Used for tests and per-request sampling."""

    instant: DateTime

    def now(self) -> DateTime:
        return self.instant

    @classmethod
    def sample(cls, clock: Clock) -> "FixedClock":
        return cls(clock.now())


def get_clock() -> Clock:
    return app.extensions["clock"]
