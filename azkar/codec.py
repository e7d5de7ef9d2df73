# -*- coding: utf-8 -*-
"""
JSON codec for SchedulerState.

Missing or malformed fields fall back to their defaults one by one, so a
partially damaged or older file still loads. Files written by the earlier
build used ``azkar`` and ``last_zekr_id``; both keys are still read.
"""

import json
import math

from azkar.models import ReminderItem, SchedulerState, clamp_interval, new_item_id

LEGACY_KEYS = {
    "items": "azkar",
    "last_shown_item_id": "last_zekr_id",
}


def state_to_dict(state):
    return {
        "items": [{"id": i.id, "text": i.text} for i in state.items],
        "interval_seconds": state.interval_seconds,
        "daily_count": state.daily_count,
        "last_reset_date": state.last_reset_date,
        "last_notification_time": state.last_notification_time,
        "is_paused": state.is_paused,
        "last_shown_item_id": state.last_shown_item_id,
    }


def dump_state(state):
    return json.dumps(state_to_dict(state), ensure_ascii=False, indent=2)


def _lookup(data, key):
    if key in data:
        return data[key]
    return data.get(LEGACY_KEYS.get(key, key))


def _int_field(value, default, minimum=0):
    # bool is an int subclass; true/false is never a valid counter
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    # json accepts NaN, Infinity and 1e400
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return max(int(value), minimum)


def _items_field(value, default):
    if not isinstance(value, list):
        return default
    items = []
    seen = set()
    for entry in value:
        if not isinstance(entry, dict) or not isinstance(entry.get("text"), str):
            continue
        item_id = entry.get("id")
        if isinstance(item_id, int) and not isinstance(item_id, bool):
            item_id = str(item_id)
        if not isinstance(item_id, str) or not item_id:
            item_id = new_item_id(seen)
        if item_id in seen:
            continue
        seen.add(item_id)
        items.append(ReminderItem(item_id, entry["text"]))
    return items


def state_from_dict(data, today):
    """Build a state from decoded JSON, defaulting each bad field separately."""
    defaults = SchedulerState.default(today)
    if not isinstance(data, dict):
        return defaults

    last_reset = _lookup(data, "last_reset_date")
    is_paused = _lookup(data, "is_paused")
    last_shown = _lookup(data, "last_shown_item_id")

    return SchedulerState(
        items=_items_field(_lookup(data, "items"), defaults.items),
        interval_seconds=clamp_interval(
            _int_field(_lookup(data, "interval_seconds"), defaults.interval_seconds)
        ),
        daily_count=_int_field(_lookup(data, "daily_count"), defaults.daily_count),
        last_reset_date=last_reset if isinstance(last_reset, str) else defaults.last_reset_date,
        last_notification_time=_int_field(
            _lookup(data, "last_notification_time"),
            defaults.last_notification_time,
        ),
        is_paused=is_paused if isinstance(is_paused, bool) else defaults.is_paused,
        last_shown_item_id=last_shown if isinstance(last_shown, str) else None,
    )


def load_state(text, today):
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return SchedulerState.default(today)
    return state_from_dict(data, today)
