# -*- coding: utf-8 -*-
"""
التطبيق الرئيسي
Tray application, settings window and the entry point.
"""

import sys

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QAction, QBrush, QColor, QFont, QIcon, QPainter, QPen, QPixmap, QRadialGradient
from PyQt6.QtWidgets import (
    QApplication, QCheckBox, QFrame, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QMainWindow, QMenu, QMessageBox, QPushButton,
    QSpinBox, QSystemTrayIcon, QVBoxLayout, QWidget,
)

from azkar.autostart import STARTUP_FLAG, get_autostart_enabled, set_autostart_enabled
from azkar.config import (
    APP_TITLE, DATA_FILE, MAX_INTERVAL_SECONDS, MIN_INTERVAL_SECONDS, ensure_data_directory,
)
from azkar.debug_log import clear_old_logs, log_debug
from azkar.notifier import Notifier
from azkar.scheduler import ReminderThread
from azkar.store import StateStore


def create_app_icon():
    """Create the ذ app icon - used for tray and windows"""
    pm = QPixmap(64, 64)
    pm.fill(Qt.GlobalColor.transparent)

    p = QPainter(pm)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setRenderHint(QPainter.RenderHint.TextAntialiasing)

    grad = QRadialGradient(32, 32, 30)
    grad.setColorAt(0, QColor(0, 180, 100))
    grad.setColorAt(1, QColor(0, 100, 60))
    p.setBrush(QBrush(grad))
    p.setPen(QPen(QColor(255, 255, 255), 2))
    p.drawEllipse(2, 2, 60, 60)

    p.setFont(QFont("Arial", 32, QFont.Weight.Bold))
    p.drawText(pm.rect(), Qt.AlignmentFlag.AlignCenter, "ذ")
    p.end()

    return QIcon(pm)


# ============================================
# النافذة الرئيسية
# ============================================

class MainWindow(QMainWindow):
    def __init__(self, store):
        super().__init__()
        self.store = store
        self.editing_id = None
        self.setup_ui()
        self.refresh()

    def setup_ui(self):
        self.setWindowTitle(f"{APP_TITLE} - الإعدادات")
        self.setMinimumSize(520, 620)
        self.setLayoutDirection(Qt.LayoutDirection.RightToLeft)
        self.setWindowIcon(create_app_icon())

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        header = QFrame()
        header.setObjectName("header")
        h = QHBoxLayout(header)
        h.addWidget(QLabel(f"📿 {APP_TITLE}"))
        h.addStretch()
        self.daily_label = QLabel()
        self.daily_label.setObjectName("dailyLabel")
        h.addWidget(self.daily_label)
        layout.addWidget(header)

        # التذكيرات
        g1 = QGroupBox("التذكيرات")
        l1 = QVBoxLayout(g1)

        row = QHBoxLayout()
        row.addWidget(QLabel("الفترة (ثانية):"))
        self.interval_spin = QSpinBox()
        self.interval_spin.setRange(MIN_INTERVAL_SECONDS, MAX_INTERVAL_SECONDS)
        self.interval_spin.setFixedWidth(100)
        self.interval_spin.editingFinished.connect(self.on_interval_changed)
        row.addWidget(self.interval_spin)
        row.addStretch()
        self.pause_btn = QPushButton()
        self.pause_btn.clicked.connect(self.on_toggle_pause)
        row.addWidget(self.pause_btn)
        l1.addLayout(row)

        self.autostart_cb = QCheckBox("التشغيل مع بدء النظام")
        self.autostart_cb.setChecked(get_autostart_enabled())
        self.autostart_cb.toggled.connect(self.on_autostart_toggled)
        l1.addWidget(self.autostart_cb)
        layout.addWidget(g1)

        # الأذكار
        g2 = QGroupBox("الأذكار")
        l2 = QVBoxLayout(g2)

        self.azkar_list = QListWidget()
        self.azkar_list.itemClicked.connect(self.on_item_selected)
        l2.addWidget(self.azkar_list)

        self.text_input = QLineEdit()
        self.text_input.setPlaceholderText("أدخل الذكر...")
        l2.addWidget(self.text_input)

        buttons = QHBoxLayout()
        for label, handler in (
            ("➕ إضافة", self.add_zekr),
            ("✏️ تعديل", self.edit_zekr),
            ("🗑️ حذف", self.del_zekr),
            ("🔄 جديد", self.clear_form),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(handler)
            buttons.addWidget(btn)
        buttons.addStretch()
        l2.addLayout(buttons)
        layout.addWidget(g2)

        self.setStyleSheet("""
            QMainWindow { background: #0a1612; }
            QLabel, QCheckBox { color: #98fb98; font-size: 14px; }
            #dailyLabel { color: #50fa7b; font-size: 18px; font-weight: bold; }
            QGroupBox {
                color: #50fa7b; font-weight: bold;
                border: 1px solid #50fa7b; border-radius: 8px;
                margin-top: 12px; padding-top: 12px;
            }
            QListWidget, QLineEdit, QSpinBox {
                background: rgba(0,0,0,0.3); color: #f1f8f6;
                border: 1px solid #2e7d32; border-radius: 6px; padding: 4px;
                font-size: 15px;
            }
            QPushButton {
                background: #1a2f28; color: #50fa7b;
                border: 1px solid #50fa7b; border-radius: 6px; padding: 6px 12px;
            }
            QPushButton:hover { background: #00d26a; color: #000; }
        """)

    def refresh(self, state=None):
        """Redraw from a store snapshot"""
        state = state or self.store.get()
        self.daily_label.setText(f"أذكار اليوم: {state.daily_count}")

        if not self.interval_spin.hasFocus():
            self.interval_spin.blockSignals(True)
            self.interval_spin.setValue(state.interval_seconds)
            self.interval_spin.blockSignals(False)

        self.pause_btn.setText("▶️ استئناف" if state.is_paused else "⏸️ إيقاف مؤقت")

        self.azkar_list.clear()
        for zekr in state.items:
            item = QListWidgetItem(zekr.text)
            item.setData(Qt.ItemDataRole.UserRole, zekr.id)
            self.azkar_list.addItem(item)

    def on_interval_changed(self):
        # editingFinished also fires on focus loss; only write real edits.
        value = self.interval_spin.value()
        if value == self.store.get().interval_seconds:
            return
        self.refresh(self.store.set_interval(value))

    def on_toggle_pause(self):
        self.refresh(self.store.toggle_pause())

    def on_autostart_toggled(self, checked):
        if not set_autostart_enabled(checked):
            QMessageBox.warning(self, "تنبيه", "تعذر تغيير التشغيل التلقائي")
            self.autostart_cb.blockSignals(True)
            self.autostart_cb.setChecked(get_autostart_enabled())
            self.autostart_cb.blockSignals(False)

    def on_item_selected(self, item):
        self.editing_id = item.data(Qt.ItemDataRole.UserRole)
        self.text_input.setText(item.text())

    def clear_form(self):
        self.text_input.clear()
        self.editing_id = None
        self.azkar_list.clearSelection()

    def add_zekr(self):
        text = self.text_input.text().strip()
        if not text:
            QMessageBox.warning(self, "تنبيه", "الرجاء إدخال نص الذكر")
            return
        self.refresh(self.store.add_item(text))
        self.clear_form()

    def edit_zekr(self):
        text = self.text_input.text().strip()
        if self.editing_id is None or not text:
            QMessageBox.warning(self, "تنبيه", "الرجاء اختيار ذكر وإدخال نصه")
            return
        self.refresh(self.store.update_item(self.editing_id, text))
        self.clear_form()

    def del_zekr(self):
        if self.editing_id is None:
            QMessageBox.warning(self, "تنبيه", "الرجاء اختيار ذكر للحذف")
            return
        if QMessageBox.question(self, "تأكيد", "هل تريد حذف هذا الذكر؟") != QMessageBox.StandardButton.Yes:
            return
        self.refresh(self.store.remove_item(self.editing_id))
        self.clear_form()

    def closeEvent(self, event):
        # Closing only hides; the app keeps running in the tray.
        event.ignore()
        self.hide()


# ============================================
# التطبيق
# ============================================

class AzkarApp(QObject):
    def __init__(self, qt_app, store):
        super().__init__()
        self.app = qt_app
        self.store = store
        self.window = MainWindow(store)

        self.setup_tray()
        self.notifier = Notifier(self.tray)

        self.reminder_thread = ReminderThread(store)
        # Signals cross from the worker thread to the GUI thread.
        self.reminder_thread.show_reminder.connect(
            self.on_show_reminder,
            Qt.ConnectionType.QueuedConnection
        )
        self.reminder_thread.state_changed.connect(
            self.on_state_changed,
            Qt.ConnectionType.QueuedConnection
        )
        self.reminder_thread.thread_error.connect(
            self.on_thread_error,
            Qt.ConnectionType.QueuedConnection
        )
        self.reminder_thread.start()

    def setup_tray(self):
        self.tray = QSystemTrayIcon(create_app_icon(), self.app)
        self.tray.setToolTip(f"{APP_TITLE} - تذكير بذكر الله")

        menu = QMenu()
        show_action = QAction("📿 عرض", menu)
        show_action.triggered.connect(self.show_window)
        menu.addAction(show_action)

        self.pause_action = QAction("", menu)
        self.pause_action.triggered.connect(self.toggle_pause)
        menu.addAction(self.pause_action)
        self.update_pause_action(self.store.get())

        menu.addSeparator()
        exit_action = QAction("❌ خروج", menu)
        exit_action.triggered.connect(self.quit)
        menu.addAction(exit_action)

        self.tray_menu = menu
        self.tray.setContextMenu(menu)
        self.tray.activated.connect(self.on_tray_click)
        self.tray.show()

    def update_pause_action(self, state):
        self.pause_action.setText("▶️ استئناف" if state.is_paused else "⏸️ إيقاف مؤقت")

    def on_state_changed(self):
        state = self.store.get()
        self.update_pause_action(state)
        if self.window.isVisible():
            self.window.refresh(state)

    def on_show_reminder(self, text):
        self.notifier.display(text)

    def on_thread_error(self, error_msg):
        log_debug(f"Thread error: {error_msg}")

    def toggle_pause(self):
        state = self.store.toggle_pause()
        self.update_pause_action(state)
        self.window.refresh(state)

    def show_window(self):
        self.window.refresh()
        self.window.showNormal()
        self.window.raise_()
        self.window.activateWindow()

    def on_tray_click(self, reason):
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.show_window()

    def quit(self):
        log_debug("App quitting...")
        # An in-flight tick may be abandoned; state is already on disk.
        self.reminder_thread.stop()
        self.reminder_thread.wait(2000)
        self.tray.hide()
        self.app.quit()


def main():
    """نقطة الدخول الرئيسية"""
    minimized = STARTUP_FLAG in sys.argv or '--silent' in sys.argv

    ensure_data_directory()
    clear_old_logs()
    log_debug("=" * 50)
    log_debug(f"App starting... data file: {DATA_FILE}")

    qt_app = QApplication(sys.argv)
    qt_app.setQuitOnLastWindowClosed(False)

    store = StateStore.load(DATA_FILE)
    azkar_app = AzkarApp(qt_app, store)
    if not minimized:
        azkar_app.show_window()

    sys.exit(qt_app.exec())
