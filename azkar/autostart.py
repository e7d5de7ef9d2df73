# -*- coding: utf-8 -*-
"""
وظائف التشغيل التلقائي
Start-with-the-session registration: Windows Run key or XDG autostart entry.
"""

import os
import sys
from pathlib import Path

from azkar.debug_log import log_debug

RUN_KEY = r"Software\Microsoft\Windows\CurrentVersion\Run"
RUN_VALUE = "Azkar"
STARTUP_FLAG = "--minimized"


def get_launch_command():
    """Command line that starts the app hidden in the tray"""
    if getattr(sys, 'frozen', False):
        return f'"{sys.executable}" {STARTUP_FLAG}'
    python_path = sys.executable
    # pythonw.exe runs without a console window
    if python_path.lower().endswith('python.exe'):
        pythonw_path = python_path[:-10] + 'pythonw.exe'
        if Path(pythonw_path).exists():
            python_path = pythonw_path
    return f'"{python_path}" -m azkar {STARTUP_FLAG}'


def get_desktop_entry_path():
    config_home = os.environ.get('XDG_CONFIG_HOME')
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "autostart" / "azkar.desktop"


def _desktop_entry():
    return (
        "[Desktop Entry]\n"
        "Type=Application\n"
        "Name=Azkar\n"
        f"Exec={get_launch_command()}\n"
        "X-GNOME-Autostart-enabled=true\n"
    )


def get_autostart_enabled():
    """التحقق من تفعيل التشغيل التلقائي"""
    if sys.platform == 'win32':
        import winreg
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY, 0, winreg.KEY_READ) as key:
                winreg.QueryValueEx(key, RUN_VALUE)
            return True
        except OSError:
            return False
    if sys.platform == 'darwin':
        return False
    return get_desktop_entry_path().exists()


def set_autostart_enabled(enable: bool):
    """تفعيل/إلغاء التشغيل التلقائي. Returns True on success."""
    try:
        if sys.platform == 'win32':
            import winreg
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY, 0, winreg.KEY_SET_VALUE) as key:
                if enable:
                    winreg.SetValueEx(key, RUN_VALUE, 0, winreg.REG_SZ, get_launch_command())
                else:
                    try:
                        winreg.DeleteValue(key, RUN_VALUE)
                    except FileNotFoundError:
                        pass
            return True

        if sys.platform == 'darwin':
            log_debug("Autostart is not supported on macOS")
            return False

        entry = get_desktop_entry_path()
        if enable:
            entry.parent.mkdir(parents=True, exist_ok=True)
            entry.write_text(_desktop_entry(), encoding='utf-8')
        elif entry.exists():
            entry.unlink()
        return True
    except OSError as e:
        log_debug(f"Autostart error: {e}")
        return False
