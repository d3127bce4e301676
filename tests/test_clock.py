import logging

import pendulum
from freezegun import freeze_time

from loggingmanager import ContextFormatter, set_conference_year
from models.clock import Clock, FixedClock, SystemClock, get_clock


@freeze_time("2024-10-01 01:00:00")
def test_system_clock():
    now = SystemClock().now()

    assert now == pendulum.datetime(2024, 10, 1, 1, tz="UTC")
    assert now.utcoffset() is not None


def test_fixed_clock():
    instant = pendulum.datetime(2024, 10, 1, 9, tz="Australia/Perth")
    clock = FixedClock(instant)

    assert clock.now() == instant
    assert clock.now() == clock.now()


def test_sample_reads_once():
    reads = []

    class CountingClock:
        def now(self):
            reads.append(1)
            return pendulum.datetime(2024, 10, 1, len(reads), tz="UTC")

    sampled = FixedClock.sample(CountingClock())

    assert sampled.now() == sampled.now() == pendulum.datetime(2024, 10, 1, 1, tz="UTC")
    assert len(reads) == 1


def test_clocks_satisfy_protocol():
    assert isinstance(SystemClock(), Clock)
    assert isinstance(FixedClock(pendulum.now("UTC")), Clock)


def test_app_clock(app):
    assert get_clock() is app.extensions["clock"]


def test_log_records_carry_conference_year():
    formatter = ContextFormatter("[%(conference_year)s] %(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "Fetching agenda", None, None)

    set_conference_year(2024)
    assert formatter.format(record) == "[2024] Fetching agenda"
