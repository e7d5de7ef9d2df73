# -*- coding: utf-8 -*-
"""
خيط التذكير
Background loop that decides, once per tick, whether to fire a reminder.
"""

import random
import time

from PyQt6.QtCore import QThread, pyqtSignal

from azkar.config import TICK_SECONDS
from azkar.debug_log import log_debug
from azkar.models import today_string


def roll_over_day(state, today):
    """Reset the daily counter when the local date changed. Returns True if reset."""
    if state.last_reset_date == today:
        return False
    state.daily_count = 0
    state.last_reset_date = today
    return True


def is_due(state, now):
    return now >= state.last_notification_time + state.interval_seconds


def pick_item(items, last_id, rng=random):
    """Random item, never the last shown one unless nothing else is left."""
    candidates = [i for i in items if i.id != last_id]
    return rng.choice(candidates or items)


def record_firing(state, item, now):
    state.daily_count += 1
    state.last_notification_time = now
    state.last_shown_item_id = item.id


class ReminderThread(QThread):
    show_reminder = pyqtSignal(str)
    state_changed = pyqtSignal()
    thread_error = pyqtSignal(str)

    def __init__(self, store, tick_seconds=TICK_SECONDS, rng=None):
        super().__init__()
        self.store = store
        self.tick_seconds = tick_seconds
        self.rng = rng or random.Random()
        self.running = True
        self.error_count = 0
        self.max_errors = 5

    def tick(self, now=None, today=None):
        """One evaluation of the schedule. Returns the fired item or None."""
        now = int(time.time()) if now is None else now
        today = today or today_string()
        fired = None

        with self.store.locked() as state:
            changed = roll_over_day(state, today)
            if changed:
                log_debug(f"Day changed to {today}, daily count reset")

            if not state.is_paused and is_due(state, now) and state.items:
                fired = pick_item(state.items, state.last_shown_item_id, self.rng)
                # Delivery is fire-and-forget; the firing counts either way.
                self.show_reminder.emit(fired.text)
                record_firing(state, fired, now)
                changed = True
                log_debug(f"Fired reminder {fired.id}, daily count {state.daily_count}")

            if changed:
                self.store.persist()

        if changed:
            self.state_changed.emit()
        return fired

    def run(self):
        log_debug("ReminderThread started")
        while self.running:
            time.sleep(self.tick_seconds)
            if not self.running:
                break
            try:
                self.tick()
                self.error_count = 0
            except Exception as e:
                self.error_count += 1
                error_msg = f"ReminderThread error ({self.error_count}/{self.max_errors}): {e}"
                log_debug(error_msg)
                self.thread_error.emit(error_msg)
                if self.error_count >= self.max_errors:
                    self.thread_error.emit("CRITICAL: repeated tick failures")
                    self.error_count = 0
        log_debug("ReminderThread stopped")

    def stop(self):
        self.running = False
