# -*- coding: utf-8 -*-
"""Reminder items and the persisted scheduler state."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from azkar.config import (
    DEFAULT_AZKAR, DEFAULT_INTERVAL_SECONDS, MAX_INTERVAL_SECONDS, MIN_INTERVAL_SECONDS,
)

_id_lock = threading.Lock()
_last_id = 0


def today_string():
    """Current local calendar date as YYYY-MM-DD"""
    return datetime.now().strftime("%Y-%m-%d")


def clamp_interval(seconds):
    """Interval within [MIN, MAX]; NaN counts as the minimum."""
    if isinstance(seconds, float):
        if math.isnan(seconds):
            return MIN_INTERVAL_SECONDS
        if math.isinf(seconds):
            return MAX_INTERVAL_SECONDS if seconds > 0 else MIN_INTERVAL_SECONDS
    return min(max(int(seconds), MIN_INTERVAL_SECONDS), MAX_INTERVAL_SECONDS)


def new_item_id(existing=()):
    """Nanosecond timestamp id, strictly increasing within this process."""
    global _last_id
    taken = set(existing)
    with _id_lock:
        candidate = max(time.time_ns(), _last_id + 1)
        while str(candidate) in taken:
            candidate += 1
        _last_id = candidate
    return str(candidate)


@dataclass
class ReminderItem:
    id: str
    text: str


@dataclass
class SchedulerState:
    items: List[ReminderItem] = field(default_factory=list)
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    daily_count: int = 0
    last_reset_date: str = ""
    # 0 means "never fired"
    last_notification_time: int = 0
    is_paused: bool = False
    # Non-owning reference used only to avoid repeating the last item.
    last_shown_item_id: Optional[str] = None

    @classmethod
    def default(cls, today=None):
        return cls(
            items=[ReminderItem(a["id"], a["text"]) for a in DEFAULT_AZKAR],
            last_reset_date=today or today_string(),
        )

    def copy(self):
        return SchedulerState(
            items=[ReminderItem(i.id, i.text) for i in self.items],
            interval_seconds=self.interval_seconds,
            daily_count=self.daily_count,
            last_reset_date=self.last_reset_date,
            last_notification_time=self.last_notification_time,
            is_paused=self.is_paused,
            last_shown_item_id=self.last_shown_item_id,
        )

    def find_item(self, item_id):
        for item in self.items:
            if item.id == item_id:
                return item
        return None
