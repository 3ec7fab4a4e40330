# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest"]
# ///
"""Tests for the append-only event log and its windowed queries."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from event_log import EventLog


def make_log(*tags):
    return EventLog(tags)


def test_add_grows_by_one():
    log = EventLog()
    for i, tag in enumerate(("BatterUp", "Ball", "Strike")):
        log.add(tag)
        assert len(log) == i + 1
        assert log.last() == tag


def test_last_on_empty_raises():
    with pytest.raises(IndexError):
        EventLog().last()
    assert EventLog().last_is("Ball") is False


def test_has_unbounded():
    log = make_log("Salmon", "InningSwitch", "InningSwitch", "Ball")
    assert log.has("Salmon")
    assert not log.has("Walk")


def test_has_limit_zero_stays_in_current_half():
    log = make_log("Strike", "InningSwitch", "Ball")
    assert not log.has("Strike", 0)
    assert log.has("Ball", 0)


def test_has_limit_crosses_boundaries():
    log = make_log("Strike", "InningSwitch", "Ball", "InningSwitch", "Foul")
    assert not log.has("Strike", 1)
    assert log.has("Strike", 2)
    assert log.has("Ball", 1)


def test_boundary_tag_can_itself_match():
    log = make_log("Ball", "InningSwitch", "Strike")
    assert log.has("InningSwitch", 0)
    assert log.count("InningSwitch", 0) == 1


def test_count_within_window():
    log = make_log("Salmon", "InningSwitch", "Salmon", "Ball", "Salmon")
    assert log.count("Salmon") == 3
    assert log.count("Salmon", 0) == 2
    assert log.count("Salmon", 1) == 3


def test_streak_counts_any_of_tags():
    log = make_log("BaseHit", "Strikeout", "HomeRun", "BaseHit")
    assert log.streak(["BaseHit", "HomeRun"]) == 3


def test_trailing_run():
    log = make_log("BaseHit", "Walk", "BaseHit", "HomeRun")
    assert log.trailing(["BaseHit", "HomeRun"]) == 2
    log.add("Flyout")
    assert log.trailing(["BaseHit", "HomeRun"]) == 0


def test_iteration_is_a_snapshot():
    log = make_log("Ball")
    tags = list(log)
    log.add("Strike")
    assert tags == ["Ball"]
    assert log.tags() == ["Ball", "Strike"]
