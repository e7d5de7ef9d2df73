# -*- coding: utf-8 -*-
"""
الثوابت والمسارات
Constants and per-user data paths, resolved once at startup.
"""

import os
import sys
from pathlib import Path

APP_NAME = "azkar"
APP_TITLE = "أذكار"
APP_VERSION = "1.0.0"


def get_appdata_path():
    """الحصول على مسار بيانات المستخدم حسب النظام"""
    override = os.environ.get('AZKAR_DATA_DIR')
    if override:
        return Path(override)

    if sys.platform == 'win32':
        # استخدام متغير البيئة APPDATA (أكثر موثوقية)
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata) / "Azkar"
        return Path.home() / "AppData" / "Roaming" / "Azkar"

    if sys.platform == 'darwin':
        return Path.home() / "Library" / "Application Support" / "Azkar"

    xdg = os.environ.get('XDG_DATA_HOME')
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


DATA_DIR = get_appdata_path()
DATA_FILE = DATA_DIR / "azkar_data.json"
LOG_FILE = DATA_DIR / "azkar_debug.log"

DEBUG_ENABLED = os.environ.get('AZKAR_DEBUG', '1') != '0'


def ensure_data_directory():
    """التأكد من وجود مجلد البيانات"""
    try:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        print(f"تحذير: لا يمكن إنشاء مجلد البيانات في {DATA_DIR}: {e}")
        return False


# ============================================
# الإعدادات الافتراضية
# ============================================

DEFAULT_AZKAR = [
    {"id": "1", "text": "سبحان الله"},
    {"id": "2", "text": "الحمد لله"},
    {"id": "3", "text": "الله أكبر"},
    {"id": "4", "text": "لا إله إلا الله"},
    {"id": "5", "text": "أستغفر الله"},
    {"id": "6", "text": "لا حول ولا قوة إلا بالله"},
]

DEFAULT_INTERVAL_SECONDS = 60
MIN_INTERVAL_SECONDS = 1
# Largest value a QSpinBox can hold.
MAX_INTERVAL_SECONDS = 2 ** 31 - 1

# The scheduler re-evaluates on this cadence, independent of the interval.
TICK_SECONDS = 1

NOTIFICATION_TIMEOUT_MS = 5000
