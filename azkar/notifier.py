# -*- coding: utf-8 -*-
from PyQt6.QtWidgets import QSystemTrayIcon

from azkar.config import NOTIFICATION_TIMEOUT_MS
from azkar.debug_log import log_debug


class Notifier:
    """Shows a reminder as a tray balloon / native toast."""

    def __init__(self, tray, timeout_ms=NOTIFICATION_TIMEOUT_MS):
        self.tray = tray
        self.timeout_ms = timeout_ms

    def display(self, title):
        try:
            self.tray.showMessage(title, "", QSystemTrayIcon.MessageIcon.Information, self.timeout_ms)
        except Exception as e:
            log_debug(f"Notification failed: {e}")
