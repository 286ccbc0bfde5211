# tests/test_cron_timeline_dst.py
#
# Europe/Amsterdam, 2024:
#   spring forward 2024-03-31 01:00 UTC (02:00 CET -> 03:00 CEST)
#   fall back      2024-10-27 01:00 UTC (03:00 CEST -> 02:00 CET)

import pytest
from datetime import timedelta

from cronzone.core.time import TICK
from cronzone.engines.factory import build_cron_timeline
from cronzone.engines.zones import utc_to_local
from conftest import utc

ZONE = "Europe/Amsterdam"

@pytest.fixture
def daily_0230():
    return build_cron_timeline("30 2 * * *", ZONE)

# --- spring-forward gap ---

def test_gap_scenario_five_minutes_before_transition(daily_0230):
    nxt = daily_0230.next_instant(utc(2024, 3, 31, 0, 55))
    assert nxt == utc(2024, 3, 31, 1, 0)
    assert utc_to_local(nxt, daily_0230.zone).time().isoformat() == "03:00:00"

def test_gap_day_only(daily_0230):
    # day before: 02:30 CET
    assert daily_0230.next_instant(utc(2024, 3, 29, 12)) == utc(2024, 3, 30, 1, 30)
    # day after: 02:30 CEST
    assert daily_0230.next_instant(utc(2024, 3, 31, 12)) == utc(2024, 4, 1, 0, 30)

def test_gap_backward(daily_0230):
    # queried at 03:35 local on the transition day
    assert daily_0230.previous_instant(utc(2024, 3, 31, 1, 35)) == utc(2024, 3, 31, 1, 0)
    assert daily_0230.previous_instant(utc(2024, 3, 31, 1, 0)) == utc(2024, 3, 30, 1, 30)
    assert daily_0230.previous_instant(utc(2024, 3, 31, 1, 0) + TICK) == utc(2024, 3, 31, 1, 0)

def test_gap_is_instant(daily_0230):
    assert daily_0230.is_instant(utc(2024, 3, 31, 1, 0))
    assert not daily_0230.is_instant(utc(2024, 3, 31, 0, 30))
    assert not daily_0230.is_instant(utc(2024, 3, 31, 1, 30))

def test_gap_with_several_wall_times():
    """Every quarter hour of the skipped hour lands on the transition once."""
    tl = build_cron_timeline("*/15 2 * * *", ZONE)
    first = tl.next_instant(utc(2024, 3, 30, 23))
    assert first == utc(2024, 3, 31, 1, 0)
    assert tl.next_instant(first) == utc(2024, 4, 1, 0, 0)
    assert tl.previous_instant(utc(2024, 4, 1, 0, 0)) == first

# --- fall-back overlap ---

def test_overlap_uses_standard_offset(daily_0230):
    expected = utc(2024, 10, 27, 1, 30)  # 02:30 CET
    assert daily_0230.next_instant(utc(2024, 10, 26, 12)) == expected
    assert daily_0230.previous_instant(utc(2024, 10, 27, 12)) == expected
    assert daily_0230.is_instant(expected)
    # 02:30 CEST, the first pass, is not an occurrence
    assert not daily_0230.is_instant(utc(2024, 10, 27, 0, 30))

@pytest.mark.parametrize("probe_minutes", [0, 30, 60, 89, 90, 119])
def test_overlap_is_idempotent_from_inside(daily_0230, probe_minutes):
    """Queries issued during the repeated hour agree on the same instant."""
    expected = utc(2024, 10, 27, 1, 30)
    probe = utc(2024, 10, 27, 0, 0) + timedelta(minutes=probe_minutes)
    if probe < expected:
        assert daily_0230.next_instant(probe) == expected
    else:
        assert daily_0230.previous_instant(probe + TICK) == expected

def test_hourly_through_overlap():
    tl = build_cron_timeline("0 * * * *", ZONE)
    got = []
    t = utc(2024, 10, 26, 22, 30)
    for _ in range(5):
        t = tl.next_instant(t)
        got.append(t)
    # 01:00 CEST, 02:00 CET (02:00 CEST skipped), 03:00 CET, ...
    assert got == [
        utc(2024, 10, 26, 23, 0),
        utc(2024, 10, 27, 1, 0),
        utc(2024, 10, 27, 2, 0),
        utc(2024, 10, 27, 3, 0),
        utc(2024, 10, 27, 4, 0),
    ]
    back = []
    t = got[-1] + TICK
    for _ in range(5):
        t = tl.previous_instant(t)
        back.append(t)
    assert back == got[::-1]

# --- other zones ---

def test_new_york_gap():
    tl = build_cron_timeline("30 2 * * *", "America/New_York")
    # 2024-03-10 02:00 EST -> 03:00 EDT at 07:00 UTC
    assert tl.next_instant(utc(2024, 3, 10)) == utc(2024, 3, 10, 7, 0)
    assert tl.next_instant(utc(2024, 3, 11)) == utc(2024, 3, 11, 6, 30)

def test_southern_hemisphere_overlap():
    tl = build_cron_timeline("30 2 * * *", "Australia/Sydney")
    # 2024-04-07 03:00 AEDT -> 02:00 AEST at 16:00 UTC on the 6th; 02:30 AEST = 16:30 UTC
    expected = utc(2024, 4, 6, 16, 30)
    assert tl.next_instant(utc(2024, 4, 6)) == expected
    assert tl.previous_instant(utc(2024, 4, 7)) == expected
