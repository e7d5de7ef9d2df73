# -*- coding: utf-8 -*-
"""Simple debug logging to a file in the data directory (for troubleshooting)."""

from datetime import datetime

from azkar import config

MAX_LOG_BYTES = 1024 * 1024


def log_debug(message):
    """Write debug message to log file"""
    if not config.DEBUG_ENABLED:
        return
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(config.LOG_FILE, 'a', encoding='utf-8') as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        pass


def clear_old_logs():
    """Clear log file if it gets too large (>1MB)"""
    try:
        if config.LOG_FILE.exists() and config.LOG_FILE.stat().st_size > MAX_LOG_BYTES:
            config.LOG_FILE.unlink()
    except OSError:
        pass
