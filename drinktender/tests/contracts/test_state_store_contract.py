"""
Contract tests for the persisted store and TimerState resolution.

Tests map to the store contract:
- Reads return absent for missing keys and for missing/corrupt files
- Every successful set() stamps lastUpdateTime
- Writes are visible to other store handles on the same file (other surfaces)
- Last write wins, no merge; conflicts resolve per document, not per field
- Write failures are logged and reported, never raised
- Unset or invalid fields resolve to their defaults on read
"""

import json
import logging
from datetime import timedelta, timezone
from unittest.mock import patch

import pytest

from drinktender.state.reader import TimerStateReader
from drinktender.state.state_store import LAST_UPDATE_KEY, JsonStateStore, MemoryStateStore
from drinktender.state.timer_state import (
    DELAY_KEY,
    DRINK_COUNT_KEY,
    LAST_DRINK_KEY,
    NOTIFICATIONS_KEY,
    TimerState,
    TimerStateStore,
)
from drinktender.tests.contracts.test_doubles import T0


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "nested" / "state.json"


class TestJsonStateStore:
    """Durable JSON file store."""

    def test_missing_file_reads_absent(self, state_path, clock):
        store = JsonStateStore(state_path, clock=clock)
        assert store.get(DELAY_KEY) is None
        assert store.snapshot() == {}

    def test_set_creates_file_and_stamps_update_time(self, state_path, clock):
        store = JsonStateStore(state_path, clock=clock)
        assert store.set(DELAY_KEY, 30) is True

        data = json.loads(state_path.read_text())
        assert data[DELAY_KEY] == 30
        assert data[LAST_UPDATE_KEY] == T0.isoformat()

    def test_update_time_follows_clock(self, state_path, clock):
        store = JsonStateStore(state_path, clock=clock)
        store.set(DELAY_KEY, 30)
        later = clock.advance(minutes=5)
        store.set(DRINK_COUNT_KEY, 2)
        assert store.get(LAST_UPDATE_KEY) == later.isoformat()

    def test_other_handle_sees_write(self, state_path, clock):
        writer = JsonStateStore(state_path, clock=clock)
        surface_side = JsonStateStore(state_path, clock=clock)
        writer.set(DRINK_COUNT_KEY, 4)
        assert surface_side.get(DRINK_COUNT_KEY) == 4

    def test_set_none_removes_key(self, state_path, clock):
        store = JsonStateStore(state_path, clock=clock)
        store.set(LAST_DRINK_KEY, T0.isoformat())
        store.set(LAST_DRINK_KEY, None)
        assert store.get(LAST_DRINK_KEY) is None
        assert LAST_DRINK_KEY not in json.loads(state_path.read_text())

    def test_last_write_wins(self, state_path, clock):
        first = JsonStateStore(state_path, clock=clock)
        second = JsonStateStore(state_path, clock=clock)
        first.set(DELAY_KEY, 30)
        second.set(DELAY_KEY, 90)
        first.set(DRINK_COUNT_KEY, 1)
        assert second.get(DELAY_KEY) == 90
        assert second.get(DRINK_COUNT_KEY) == 1

    def test_conflicts_resolve_per_document(self, state_path, clock):
        cli = JsonStateStore(state_path, clock=clock)
        watch = JsonStateStore(state_path, clock=clock)
        before = watch.snapshot()
        cli.set(DELAY_KEY, 30)
        # watch read the document before the CLI wrote, then writes its own field
        with patch.object(watch, "_read_all", return_value=dict(before)):
            watch.set(DRINK_COUNT_KEY, 1)
        assert cli.get(DRINK_COUNT_KEY) == 1
        assert cli.get(DELAY_KEY) is None

    def test_corrupt_file_reads_as_empty(self, state_path, clock, caplog):
        state_path.parent.mkdir(parents=True)
        state_path.write_text("{not json")
        store = JsonStateStore(state_path, clock=clock)

        with caplog.at_level(logging.WARNING):
            assert store.snapshot() == {}
        assert any("Failed to load state" in r.message for r in caplog.records)

    def test_non_object_file_reads_as_empty(self, state_path, clock):
        state_path.parent.mkdir(parents=True)
        state_path.write_text("[1, 2, 3]")
        assert JsonStateStore(state_path, clock=clock).snapshot() == {}

    def test_write_failure_is_reported_not_raised(self, state_path, clock, caplog):
        store = JsonStateStore(state_path, clock=clock)
        store.set(DRINK_COUNT_KEY, 1)

        with caplog.at_level(logging.ERROR):
            with patch("drinktender.state.state_store.os.replace", side_effect=OSError("disk full")):
                assert store.set(DRINK_COUNT_KEY, 2) is False

        assert store.get(DRINK_COUNT_KEY) == 1
        assert not state_path.with_name(state_path.name + ".tmp").exists()
        assert any("Failed to save state" in r.message for r in caplog.records)


class TestMemoryStateStore:
    """In-process store with the same semantics."""

    def test_initial_values_and_stamp(self, clock):
        store = MemoryStateStore({DELAY_KEY: 45}, clock=clock)
        assert store.get(DELAY_KEY) == 45
        assert store.get(LAST_UPDATE_KEY) is None
        store.set(DRINK_COUNT_KEY, 3)
        assert store.get(LAST_UPDATE_KEY) == T0.isoformat()

    def test_snapshot_is_a_copy(self, clock):
        store = MemoryStateStore({DELAY_KEY: 45}, clock=clock)
        snapshot = store.snapshot()
        snapshot[DELAY_KEY] = 1
        assert store.get(DELAY_KEY) == 45


class TestDefaultResolution:
    """Unset, zero or invalid fields resolve to defaults on read."""

    @pytest.mark.parametrize("stored,expected", [
        (None, 60),
        (0, 60),
        (-15, 60),
        ("abc", 60),
        (True, 60),
        (45.5, 60),
        (15, 15),
        (240, 240),
    ])
    def test_delay_minutes(self, stored, expected):
        data = {} if stored is None else {DELAY_KEY: stored}
        assert TimerState.from_mapping(data).delay_minutes == expected

    @pytest.mark.parametrize("stored,expected", [
        (None, True),
        (True, True),
        (False, False),
        ("no", True),
    ])
    def test_notifications_enabled(self, stored, expected):
        data = {} if stored is None else {NOTIFICATIONS_KEY: stored}
        assert TimerState.from_mapping(data).notifications_enabled is expected

    @pytest.mark.parametrize("stored,expected", [(None, 0), (-1, 0), ("3", 0), (7, 7)])
    def test_drink_count(self, stored, expected):
        data = {} if stored is None else {DRINK_COUNT_KEY: stored}
        assert TimerState.from_mapping(data).drink_count == expected

    def test_malformed_timestamp_reads_absent(self):
        assert TimerState.from_mapping({LAST_DRINK_KEY: "yesterday"}).last_drink_time is None
        assert TimerState.from_mapping({LAST_DRINK_KEY: 12345}).last_drink_time is None

    def test_naive_timestamp_is_utc(self):
        state = TimerState.from_mapping({LAST_DRINK_KEY: "2025-06-28T12:00:00"})
        assert state.last_drink_time == T0
        assert state.last_drink_time.tzinfo == timezone.utc

    def test_empty_store_resolves_all_defaults(self, store):
        state = TimerStateStore(store).read()
        assert state == TimerState()


class TestTimerStateStore:
    """Typed field access over a store."""

    def test_zero_delay_round_trips_to_default(self, timer_state):
        timer_state.set_delay_minutes(0)
        assert timer_state.delay_minutes == 60
        assert timer_state.read().delay_minutes == 60

    def test_last_drink_time_round_trip(self, timer_state):
        moment = T0 - timedelta(minutes=10)
        timer_state.set_last_drink_time(moment)
        assert timer_state.last_drink_time == moment
        timer_state.set_last_drink_time(None)
        assert timer_state.last_drink_time is None

    def test_every_write_stamps_last_update_time(self, timer_state, clock):
        assert timer_state.last_update_time is None
        timer_state.set_notifications_enabled(False)
        assert timer_state.last_update_time == T0
        later = clock.advance(seconds=30)
        timer_state.set_drink_count(2)
        assert timer_state.read().last_update_time == later

    def test_getters_match_snapshot(self, timer_state):
        timer_state.set_delay_minutes(90)
        timer_state.set_drink_count(5)
        timer_state.set_notifications_enabled(False)
        state = timer_state.read()
        assert (state.delay_minutes, state.drink_count, state.notifications_enabled) == (
            timer_state.delay_minutes, timer_state.drink_count, timer_state.notifications_enabled
        )


class TestReader:
    """Read accessor exposed to presentation code."""

    def test_reader_has_no_write_access(self, reader):
        for name in ("set", "set_drink_count", "set_delay_minutes", "set_last_drink_time",
                     "set_notifications_enabled"):
            assert not hasattr(reader, name)

    def test_widget_data_empty_store(self, reader):
        data = reader.widget_data(T0)
        assert data.can_drink is True
        assert data.drink_count == 0
        assert data.delay_minutes == 60
        assert data.last_drink_time is None
        assert data.formatted_remaining == "Ready!"

    def test_widget_data_waiting(self, timer_state, reader):
        timer_state.set_last_drink_time(T0 - timedelta(minutes=15))
        timer_state.set_drink_count(2)
        data = reader.widget_data(T0)
        assert data.can_drink is False
        assert data.formatted_remaining == "45m"
        assert data.drink_count == 2

    def test_json_store_reader(self, state_path, clock):
        writer = TimerStateStore(JsonStateStore(state_path, clock=clock))
        reader = TimerStateReader(JsonStateStore(state_path, clock=clock))
        writer.set_last_drink_time(T0)
        assert reader.widget_data(T0 + timedelta(minutes=30)).formatted_remaining == "30m"
