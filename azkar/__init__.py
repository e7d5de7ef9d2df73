# -*- coding: utf-8 -*-
"""
أذكار - تذكير دوري بالأذكار
Azkar - periodic remembrance reminders from the system tray.
"""

from azkar.config import APP_VERSION as __version__

__all__ = ["__version__"]
