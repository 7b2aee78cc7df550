import sys
from pathlib import Path

from pytestqt.qtbot import QtBot

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from utils.notification_bus import (
    NotificationBus,
    NotificationLevel,
    notification_bus,
    notify_error,
    notify_info,
    notify_warning,
)


def test_notification_bus_emits_events_to_subscribers():
    events = []

    def on_notify(level: str, message: str, timeout_ms: int):
        events.append((level, message, timeout_ms))

    notification_bus.notified.connect(on_notify)
    try:
        notification_bus.notify(NotificationLevel.INFO, "ok", 1234)
    finally:
        notification_bus.notified.disconnect(on_notify)

    assert events
    assert events[-1] == ("info", "ok", 1234)


def test_helpers_publish_on_the_shared_instance():
    events = []

    def on_notify(level: str, message: str, timeout_ms: int):
        events.append(level)

    assert NotificationBus.instance() is notification_bus
    notification_bus.notified.connect(on_notify)
    try:
        notify_info("a")
        notify_warning("b")
        notify_error("c")
    finally:
        notification_bus.notified.disconnect(on_notify)

    assert events == ["info", "warning", "error"]


def test_warning_signal_carries_level_and_timeout(qtbot: QtBot):
    with qtbot.waitSignal(notification_bus.notified, timeout=1000) as blocker:
        notify_warning("Nenhum registro reconhecido.", 1500)

    assert blocker.args == ["warning", "Nenhum registro reconhecido.", 1500]
