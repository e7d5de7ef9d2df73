from __future__ import annotations

import json
import random

import pytest

from azkar.models import ReminderItem, SchedulerState
from azkar.scheduler import ReminderThread, is_due, pick_item, roll_over_day
from azkar.store import StateStore

TODAY = "2026-10-17"
T = 1_760_000_000


def make_store(path, items, **fields) -> StateStore:
    state = SchedulerState(items=items, last_reset_date=TODAY, **fields)
    return StateStore(path, state)


@pytest.fixture
def two_items():
    return [ReminderItem("a", "سبحان الله"), ReminderItem("b", "الحمد لله")]


def make_thread(store, seed=7):
    thread = ReminderThread(store, tick_seconds=0, rng=random.Random(seed))
    shown, changes = [], []
    thread.show_reminder.connect(shown.append)
    thread.state_changed.connect(lambda: changes.append(True))
    return thread, shown, changes


def test_not_due_before_interval_then_fires(data_file, two_items) -> None:
    store = make_store(data_file, two_items, interval_seconds=60, last_notification_time=T)
    thread, shown, changes = make_thread(store)

    assert thread.tick(now=T + 30, today=TODAY) is None
    assert shown == []
    assert store.get().daily_count == 0

    fired = thread.tick(now=T + 61, today=TODAY)
    assert fired.id in {"a", "b"}
    state = store.get()
    assert state.last_notification_time == T + 61
    assert state.daily_count == 1
    assert state.last_shown_item_id == fired.id
    assert shown == [fired.text]
    assert changes == [True]


def test_firing_is_persisted(data_file, two_items) -> None:
    store = make_store(data_file, two_items)
    thread, _, _ = make_thread(store)
    fired = thread.tick(now=T, today=TODAY)

    saved = json.loads(data_file.read_text(encoding="utf-8"))
    assert saved["daily_count"] == 1
    assert saved["last_notification_time"] == T
    assert saved["last_shown_item_id"] == fired.id


def test_never_fired_sentinel_is_immediately_due(data_file, two_items) -> None:
    store = make_store(data_file, two_items)
    thread, shown, _ = make_thread(store)
    assert thread.tick(now=T, today=TODAY) is not None
    assert len(shown) == 1


def test_no_consecutive_repeats_with_two_or_more_items(data_file) -> None:
    items = [ReminderItem(str(n), f"zekr {n}") for n in range(3)]
    store = make_store(data_file, items, interval_seconds=1)
    thread, _, _ = make_thread(store, seed=1)

    fired = [thread.tick(now=T + n, today=TODAY).id for n in range(200)]
    assert all(a != b for a, b in zip(fired, fired[1:]))
    assert set(fired) == {"0", "1", "2"}


def test_single_item_always_repeats(data_file) -> None:
    store = make_store(data_file, [ReminderItem("only", "الله أكبر")], interval_seconds=1)
    thread, shown, _ = make_thread(store)

    fired = [thread.tick(now=T + n, today=TODAY).id for n in range(10)]
    assert fired == ["only"] * 10
    assert shown == ["الله أكبر"] * 10
    assert store.get().daily_count == 10


def test_empty_items_never_fire(data_file) -> None:
    store = make_store(data_file, [])
    thread, shown, changes = make_thread(store)
    assert thread.tick(now=T, today=TODAY) is None
    assert shown == []
    assert changes == []
    assert store.get().last_notification_time == 0


def test_removed_last_shown_item_falls_back_to_full_list(data_file, two_items) -> None:
    store = make_store(data_file, two_items, interval_seconds=1)
    thread, _, _ = make_thread(store)
    first = thread.tick(now=T, today=TODAY)

    store.remove_item(first.id)
    other = thread.tick(now=T + 1, today=TODAY)
    assert other.id != first.id

    store.remove_item(other.id)
    store.add_item("new")
    fired = thread.tick(now=T + 2, today=TODAY)
    assert fired.text == "new"


def test_paused_never_fires_but_still_rolls_over_day(data_file, two_items) -> None:
    store = make_store(
        data_file,
        two_items,
        is_paused=True,
        daily_count=5,
        last_notification_time=T,
        last_shown_item_id="a",
    )
    store.set_interval(1)
    thread, shown, changes = make_thread(store)

    for n in range(1, 100):
        assert thread.tick(now=T + n * 1000, today=TODAY) is None
    state = store.get()
    assert state.daily_count == 5
    assert state.last_notification_time == T
    assert state.last_shown_item_id == "a"
    assert shown == []

    thread.tick(now=T + 200_000, today="2026-10-18")
    state = store.get()
    assert state.daily_count == 0
    assert state.last_reset_date == "2026-10-18"
    assert state.last_notification_time == T
    assert changes == [True]


def test_resume_fires_on_next_due_tick(data_file, two_items) -> None:
    store = make_store(data_file, two_items, is_paused=True)
    thread, shown, _ = make_thread(store)
    assert thread.tick(now=T, today=TODAY) is None

    store.toggle_pause()
    assert thread.tick(now=T, today=TODAY) is not None
    assert len(shown) == 1


def test_day_boundary_resets_exactly_once(data_file, two_items) -> None:
    store = make_store(data_file, two_items, daily_count=4, last_notification_time=T)
    thread, _, changes = make_thread(store)

    thread.tick(now=T + 1, today="2026-10-18")
    assert store.get().daily_count == 0
    assert store.get().last_reset_date == "2026-10-18"

    # Later ticks on the same day must not reset again.
    fired = thread.tick(now=T + 60, today="2026-10-18")
    assert fired is not None
    thread.tick(now=T + 70, today="2026-10-18")
    assert store.get().daily_count == 1
    assert len(changes) == 2


def test_interval_change_takes_effect_on_next_tick(data_file, two_items) -> None:
    store = make_store(data_file, two_items, interval_seconds=3600, last_notification_time=T)
    thread, _, _ = make_thread(store)
    assert thread.tick(now=T + 10, today=TODAY) is None

    store.set_interval(5)
    assert thread.tick(now=T + 10, today=TODAY) is not None


def test_run_survives_tick_errors(data_file, two_items, monkeypatch) -> None:
    store = make_store(data_file, two_items)
    thread = ReminderThread(store, tick_seconds=0)
    errors = []
    thread.thread_error.connect(errors.append)
    calls = []

    def flaky_tick():
        calls.append(1)
        if len(calls) < 3:
            raise ValueError("boom")
        thread.stop()

    monkeypatch.setattr(thread, "tick", flaky_tick)
    thread.run()

    assert len(calls) == 3
    assert len(errors) == 2
    assert "boom" in errors[0]
    assert thread.error_count == 0


def test_pick_item_excludes_last_id() -> None:
    items = [ReminderItem("a", "1"), ReminderItem("b", "2")]
    rng = random.Random(0)
    assert all(pick_item(items, "a", rng).id == "b" for _ in range(50))
    assert pick_item(items[:1], "a", rng).id == "a"
    assert pick_item(items, "gone", rng).id in {"a", "b"}


def test_is_due_and_roll_over_day_helpers() -> None:
    state = SchedulerState(items=[], interval_seconds=60, last_notification_time=T, last_reset_date=TODAY)
    assert not is_due(state, T + 59)
    assert is_due(state, T + 60)

    assert roll_over_day(state, TODAY) is False
    state.daily_count = 3
    assert roll_over_day(state, "2026-10-18") is True
    assert state.daily_count == 0
    assert roll_over_day(state, "2026-10-18") is False
