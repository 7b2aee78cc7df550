from __future__ import annotations

from enum import Enum
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal


class NotificationLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NotificationBus(QObject):
    """Barramento global de notificações para o painel via sinal Qt.

    Os serviços de aplicação publicam aqui o resultado de parses e
    reconciliações; a camada de apresentação assina ``notified``.
    """

    _instance: Optional["NotificationBus"] = None
    notified = pyqtSignal(str, str, int)

    def notify(self, level: NotificationLevel, message: str, timeout_ms: int = 3000) -> None:
        self.notified.emit(level.value, str(message or ""), int(timeout_ms or 0))

    @classmethod
    def instance(cls) -> "NotificationBus":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


notification_bus = NotificationBus.instance()


def notify_info(message: str, timeout_ms: int = 2500) -> None:
    NotificationBus.instance().notify(NotificationLevel.INFO, message, timeout_ms)


def notify_warning(message: str, timeout_ms: int = 3500) -> None:
    NotificationBus.instance().notify(NotificationLevel.WARNING, message, timeout_ms)


def notify_error(message: str, timeout_ms: int = 4500) -> None:
    NotificationBus.instance().notify(NotificationLevel.ERROR, message, timeout_ms)
