# utils/settings_manager.py
import logging
from pathlib import Path
from typing import Any, List, Union

from PyQt5.QtCore import QSettings
from pydantic import ValidationError

from models.fleet import FleetSettings
from utils.notification_bus import notify_warning

logger = logging.getLogger("NightReportBoard")

KEY_PLACEHOLDERS = "fleet/placeholders"
KEY_PARSE_SLO_MS = "parsing/slo_ms"


class SettingsManager:
    """Configurações persistentes do painel sobre QSettings.

    Sem caminho usa o armazenamento nativo (organização ``NightReportBoard``);
    com caminho usa um arquivo INI (útil para testes e implantações headless).
    """

    def __init__(self, ini_path: Union[str, Path, None] = None) -> None:
        if ini_path is not None:
            self._settings = QSettings(str(ini_path), QSettings.IniFormat)
        else:
            self._settings = QSettings('NightReportBoard', 'Settings')

    def get(self, key: str, default=None):
        return self._settings.value(key, default)

    def set(self, key: str, value) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_fleet_settings(self) -> FleetSettings:
        """Lê e valida a configuração da frota; valores inválidos caem no padrão."""
        raw: dict[str, Any] = {}
        placeholders = self.get(KEY_PLACEHOLDERS)
        if placeholders not in (None, ""):
            raw["placeholders"] = _split_ids(placeholders)
        slo = self.get(KEY_PARSE_SLO_MS)
        if slo not in (None, ""):
            raw["parse_slo_ms"] = slo

        try:
            return FleetSettings(**raw)
        except ValidationError as e:
            logger.warning(f"Configuração da frota inválida, usando padrão: {e}")
            notify_warning("Configuração da frota inválida; usando valores padrão.")
            return FleetSettings()

    def save_fleet_settings(self, fleet: FleetSettings) -> None:
        self.set(KEY_PLACEHOLDERS, ",".join(str(p) for p in fleet.placeholders))
        self.set(KEY_PARSE_SLO_MS, fleet.parse_slo_ms)


def _split_ids(value: Any) -> List[Any]:
    # QSettings devolve lista ou string conforme o backend
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = str(value).split(",")
    return [item.strip() for item in items if item.strip()]

