# -*- coding: utf-8 -*-
"""
مخزن الحالة
Canonical scheduler state behind one lock, mirrored to a JSON file.
"""

import os
import threading
from contextlib import contextmanager
from pathlib import Path

from azkar.codec import dump_state, load_state
from azkar.debug_log import log_debug
from azkar.models import ReminderItem, SchedulerState, clamp_interval, new_item_id, today_string


class StateStore:
    """Holds the SchedulerState; every command mutates, persists and returns a snapshot.

    Commands and the scheduler tick share a single re-entrant lock, so no
    caller ever observes a half-applied change. The file write happens
    inside the same critical section to keep writes in mutation order.
    """

    def __init__(self, path, state=None):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._state = state if state is not None else SchedulerState.default()

    @classmethod
    def load(cls, path, today=None):
        """Read the persisted file; any problem falls back to the default state."""
        path = Path(path)
        today = today or today_string()
        if not path.exists():
            log_debug(f"No data file at {path}, using defaults")
            return cls(path, SchedulerState.default(today))
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            log_debug(f"Could not read {path}: {e}, using defaults")
            return cls(path, SchedulerState.default(today))
        return cls(path, load_state(text, today))

    def persist(self):
        """Write the state next to the target, then swap it in.

        A crash or full disk mid-write leaves the previous file intact.
        """
        with self._lock:
            payload = dump_state(self._state)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
                return True
            except OSError as e:
                log_debug(f"Error saving state to {self.path}: {e}")
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
                return False

    @contextmanager
    def locked(self):
        """Yield the live state while holding the lock (for read-modify-write)."""
        with self._lock:
            yield self._state

    def _mutate(self, change):
        with self._lock:
            change(self._state)
            self.persist()
            return self._state.copy()

    def get(self):
        with self._lock:
            return self._state.copy()

    def add_item(self, text):
        def change(state):
            item_id = new_item_id(i.id for i in state.items)
            state.items.append(ReminderItem(item_id, text))
        return self._mutate(change)

    def remove_item(self, item_id):
        def change(state):
            state.items = [i for i in state.items if i.id != item_id]
        return self._mutate(change)

    def update_item(self, item_id, text):
        def change(state):
            item = state.find_item(item_id)
            if item is not None:
                item.text = text
        return self._mutate(change)

    def set_interval(self, seconds):
        def change(state):
            state.interval_seconds = clamp_interval(seconds)
        return self._mutate(change)

    def toggle_pause(self):
        def change(state):
            state.is_paused = not state.is_paused
        return self._mutate(change)

    def reset_daily_count(self):
        def change(state):
            state.daily_count = 0
        return self._mutate(change)
