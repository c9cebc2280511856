"""
Shared pytest fixtures for DrinkTender contract tests.

Contract tests use test doubles (fakes, stubs, recorders) for the clock and
the capability ports. Store tests that need a real file use tmp_path.
"""

import threading

import pytest

from drinktender.recorder import EventRecorder
from drinktender.state.reader import TimerStateReader
from drinktender.state.state_store import MemoryStateStore
from drinktender.state.timer_state import TimerStateStore
from drinktender.tests.contracts.test_doubles import (
    FakeClock,
    RecordingDisplayInvalidator,
    RecordingNotificationScheduler,
    StubPermissionRequester,
)

CONFIG_ENV_VARS = (
    "DRINKTENDER_STATE_PATH",
    "DRINKTENDER_NOTIFIER",
    "DRINKTENDER_PERMISSION",
    "DRINKTENDER_WIDGET_REFRESH_MIN",
    "DRINKTENDER_COMPLICATION_REFRESH_MIN",
    "DRINKTENDER_MAIN_REFRESH_SEC",
    "DRINKTENDER_LOG_LEVEL",
    "DRINKTENDER_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """
    Keep the user's environment and .env file out of every test.

    Each variable is set then deleted through monkeypatch so that values a
    test loads from a .env file are removed again at teardown.
    """
    monkeypatch.setenv("DRINKTENDER_ENV_FILE", str(tmp_path / "missing.env"))
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStateStore(clock=clock)


@pytest.fixture
def timer_state(store):
    return TimerStateStore(store)


@pytest.fixture
def reader(store):
    return TimerStateReader(store)


@pytest.fixture
def scheduler():
    return RecordingNotificationScheduler()


@pytest.fixture
def permission():
    return StubPermissionRequester(granted=True)


@pytest.fixture
def invalidator():
    return RecordingDisplayInvalidator()


@pytest.fixture
def recorder(timer_state, scheduler, permission, invalidator, clock):
    return EventRecorder(
        state=timer_state,
        scheduler=scheduler,
        permission=permission,
        invalidator=invalidator,
        clock=clock,
    )


@pytest.fixture(autouse=False)
def thread_leak_guard():
    """
    Optional fixture to detect thread leaks between tests.

    Request it explicitly in tests that start surface hosts or timers.
    """
    before = set(t.ident for t in threading.enumerate())
    yield
    after = set(t.ident for t in threading.enumerate())
    leaked = after - before
    if leaked:
        leaked_threads = [t for t in threading.enumerate() if t.ident in leaked]
        thread_info = '\n'.join(f"  - {t.name} (daemon={t.daemon})" for t in leaked_threads)
        assert False, f"Thread leak detected - shutdown incomplete.\nLeaked threads:\n{thread_info}"
