from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from app.application.fleet_overview_service import FleetOverviewService
from app.application.handover_reconciliation_service import HandoverReconciliationService
from app.application.night_report_service import NightReportService
from app.application.report_parsing_service import ReportParsingService
from models.fleet import FleetSettings
from utils.settings_manager import SettingsManager


class AppContainer:
    """Container simples de DI manual para bootstrap de dependências."""

    def __init__(self, settings_path: Union[str, Path, None] = None) -> None:
        self._settings_path = settings_path
        self._settings: Optional[SettingsManager] = None
        self._fleet_settings: Optional[FleetSettings] = None
        self._parsing: Optional[ReportParsingService] = None
        self._reconciliation: Optional[HandoverReconciliationService] = None
        self._fleet_overview: Optional[FleetOverviewService] = None
        self._night_report: Optional[NightReportService] = None

    def get_settings(self) -> SettingsManager:
        if self._settings is None:
            self._settings = SettingsManager(self._settings_path)
        return self._settings

    def get_fleet_settings(self) -> FleetSettings:
        if self._fleet_settings is None:
            self._fleet_settings = self.get_settings().load_fleet_settings()
        return self._fleet_settings

    def update_fleet_settings(self, fleet: FleetSettings) -> None:
        self.get_settings().save_fleet_settings(fleet)
        self._fleet_settings = fleet
        self._fleet_overview = None

    def get_parsing_service(self) -> ReportParsingService:
        if self._parsing is None:
            self._parsing = ReportParsingService()
        return self._parsing

    def get_reconciliation_service(self) -> HandoverReconciliationService:
        if self._reconciliation is None:
            self._reconciliation = HandoverReconciliationService()
        return self._reconciliation

    def get_fleet_overview_service(self) -> FleetOverviewService:
        if self._fleet_overview is None:
            self._fleet_overview = FleetOverviewService(self.get_fleet_settings().placeholders)
        return self._fleet_overview

    def get_night_report_service(self) -> NightReportService:
        if self._night_report is None:
            self._night_report = NightReportService(self.get_parsing_service())
        return self._night_report
